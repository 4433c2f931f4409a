"""
Adapters layer - Storage backends for agenda data.
"""

from .json_store import JsonFileStore
from .memory_store import InMemoryStore
from .seed_data import seed_store

__all__ = ["InMemoryStore", "JsonFileStore", "seed_store"]
