"""Local filesystem storage backend."""

import mimetypes
from datetime import datetime
from fnmatch import fnmatch
from pathlib import Path
from typing import BinaryIO, Iterator

from django.conf import settings

from core.utils import normalize_path

from .base import AbstractStorageBackend, FileInfo


class LocalStorageBackend(AbstractStorageBackend):
    """
    Local filesystem storage backend.

    Stores files under LANTERN_CONTENT_ROOT directory.
    All paths are relative to this root.
    """

    def __init__(self, storage_root: Path | None = None):
        """
        Initialize local storage backend.

        Args:
            storage_root: Optional override for storage root path.
                         Defaults to settings.LANTERN_CONTENT_ROOT
        """
        self.storage_root = Path(storage_root or settings.LANTERN_CONTENT_ROOT).resolve()

        # Ensure storage root exists
        self.storage_root.mkdir(parents=True, exist_ok=True)

    def _resolve_path(self, path: str) -> Path:
        """
        Convert relative path to absolute filesystem path.

        Raises:
            ValueError: If path attempts directory traversal or
                contains control characters
        """
        path = normalize_path(path)

        full_path = (self.storage_root / path).resolve()

        # Resolved path must stay within storage root
        try:
            full_path.relative_to(self.storage_root)
        except ValueError:
            raise ValueError(f"Invalid path: {path} (directory traversal detected)")

        return full_path

    def _file_info(self, path: Path, relative_path: str) -> FileInfo:
        """Create FileInfo from filesystem path."""
        stat = path.stat()

        return FileInfo(
            path=relative_path,
            name=path.name,
            size=stat.st_size if path.is_file() else 0,
            is_directory=path.is_dir(),
            modified_at=datetime.fromtimestamp(stat.st_mtime),
            content_type=mimetypes.guess_type(path.name)[0] if path.is_file() else None
        )

    def save(self, path: str, content: BinaryIO) -> FileInfo:
        """Save file content to path."""
        full_path = self._resolve_path(path)

        if full_path.exists() and full_path.is_dir():
            raise IsADirectoryError(f"Path is a directory: {path}")

        full_path.parent.mkdir(parents=True, exist_ok=True)

        with full_path.open('wb') as f:
            for chunk in iter(lambda: content.read(8192), b''):
                f.write(chunk)

        return self._file_info(full_path, path)

    def open(self, path: str) -> BinaryIO:
        """Open file for reading."""
        full_path = self._resolve_path(path)

        if not full_path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if full_path.is_dir():
            raise IsADirectoryError(f"Path is a directory: {path}")

        return full_path.open('rb')

    def delete(self, path: str) -> None:
        """Delete file or empty directory."""
        full_path = self._resolve_path(path)

        if not full_path.exists():
            raise FileNotFoundError(f"Path not found: {path}")

        if full_path.is_dir():
            full_path.rmdir()  # Raises OSError if directory not empty
        else:
            full_path.unlink()

    def exists(self, path: str) -> bool:
        """Check if path exists."""
        try:
            full_path = self._resolve_path(path)
            return full_path.exists()
        except ValueError:
            # Invalid path (traversal attempt)
            return False

    def list(self, path: str = "", glob_pattern: str | None = None) -> Iterator[FileInfo]:
        """List contents of directory, sorted by name."""
        full_path = self._resolve_path(path) if path else self.storage_root

        if not full_path.exists():
            raise FileNotFoundError(f"Directory not found: {path}")

        if not full_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {path}")

        for entry in sorted(full_path.iterdir()):
            if glob_pattern and not fnmatch(entry.name, glob_pattern):
                continue

            relative_path = entry.relative_to(self.storage_root).as_posix()
            yield self._file_info(entry, relative_path)

    def info(self, path: str) -> FileInfo:
        """Get metadata about a file or directory."""
        full_path = self._resolve_path(path)

        if not full_path.exists():
            raise FileNotFoundError(f"Path not found: {path}")

        return self._file_info(full_path, path)

    def mkdir(self, path: str) -> FileInfo:
        """Create directory with parents."""
        full_path = self._resolve_path(path)
        full_path.mkdir(parents=True, exist_ok=True)
        return self._file_info(full_path, path)
