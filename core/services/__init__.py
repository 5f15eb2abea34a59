"""
Service layer for Lantern.

Services encapsulate operations that span the flat files and the shadow
index, keeping views and management commands thin.
"""

from .index_sync import IndexSyncService, IndexSyncStats

__all__ = [
    "IndexSyncService",
    "IndexSyncStats",
]
