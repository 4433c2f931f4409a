"""
Service layer helpers that orchestrate stores and domain logic.
"""

from .blocks import BlockService, BlockStoreProtocol
from .catalog import CatalogService, CatalogStoreProtocol
from .reports import ReportService, ReportStoreProtocol

__all__ = [
    "BlockService",
    "BlockStoreProtocol",
    "CatalogService",
    "CatalogStoreProtocol",
    "ReportService",
    "ReportStoreProtocol",
]
