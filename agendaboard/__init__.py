"""
Agenda board: schedule blocks per professional with overtime-aware hour reports.
"""

__version__ = "0.1.0"
