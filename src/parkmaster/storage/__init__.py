"""
Storage layer for Park Master
"""

from .record_store import CollectionTransaction, RecordStore

__all__ = ["CollectionTransaction", "RecordStore"]
