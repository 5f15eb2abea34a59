"""Flat-file storage backend abstraction for Lantern."""

from .base import AbstractStorageBackend, FileInfo
from .local import LocalStorageBackend


def get_storage_backend() -> AbstractStorageBackend:
    """Return the backend holding the content flat files."""
    return LocalStorageBackend()


__all__ = [
    "AbstractStorageBackend",
    "FileInfo",
    "LocalStorageBackend",
    "get_storage_backend",
]
