"""
Flat-file persistence for Django models.

Each record of a FlatFileModel lives in its own Markdown file with YAML
front matter under LANTERN_CONTENT_ROOT/<flatfile_directory>/<pk>.md.
The database row is a shadow index of that file: it is written through on
every save and delete, and rebuilt from the files by IndexSyncService
("filesystem wins").
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from io import BytesIO
from typing import Any

from django.core.exceptions import ValidationError

from .exceptions import FlatFileError, FrontMatterError
from .frontmatter import dumps, loads
from .models import AbstractBaseModel
from .storage import AbstractStorageBackend, FileInfo, get_storage_backend

logger = logging.getLogger(__name__)

FLATFILE_EXTENSION = ".md"

_writes_suppressed: ContextVar[bool] = ContextVar("flatfile_writes_suppressed", default=False)


@contextmanager
def flatfile_writes_suppressed():
    """Save/delete rows without touching their files (used when reading files back in)."""
    token = _writes_suppressed.set(True)
    try:
        yield
    finally:
        _writes_suppressed.reset(token)


def flatfile_writes_enabled() -> bool:
    return not _writes_suppressed.get()


def _to_front_matter_value(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (Decimal, uuid.UUID)):
        return str(value)
    return value


class FlatFileModel(AbstractBaseModel):
    """
    Abstract model whose rows are mirrored to Markdown flat files.

    Subclasses set `flatfile_directory`. All concrete fields, primary key
    included, are written to the front matter.
    """

    flatfile_directory: str = ""
    flatfile_timestamp_fields = ("created_at", "updated_at")

    class Meta:
        abstract = True

    @classmethod
    def flatfile_path_for(cls, pk: Any) -> str:
        if not cls.flatfile_directory:
            raise FlatFileError(f"{cls.__name__} does not define flatfile_directory")
        return f"{cls.flatfile_directory}/{pk}{FLATFILE_EXTENSION}"

    @property
    def flatfile_path(self) -> str:
        return self.flatfile_path_for(self.pk)

    def to_flatfile(self) -> dict[str, Any]:
        """Front matter for this record, in field declaration order."""
        return {
            f.name: _to_front_matter_value(f.value_from_object(self))
            for f in self._meta.concrete_fields
        }

    @classmethod
    def from_flatfile(cls, metadata: dict[str, Any]) -> dict[str, Any]:
        """
        Convert front matter into field values (primary key excluded).

        Unknown keys are ignored; missing keys are left to field defaults.

        Raises:
            FlatFileError: If a value cannot be converted to its field type.
        """
        values = {}
        for f in cls._meta.concrete_fields:
            if f.primary_key or f.name not in metadata:
                continue
            try:
                values[f.name] = f.to_python(metadata[f.name])
            except ValidationError as e:
                raise FlatFileError(
                    f"Invalid value for {cls.__name__}.{f.name}: {'; '.join(e.messages)}"
                ) from e
        return values

    def validate_flatfile(self) -> None:
        """
        Check values read from a flat file before they are indexed.

        Raises:
            FlatFileError: If the record cannot be served as stored.
        """

    def write_flatfile(self, backend: AbstractStorageBackend | None = None) -> FileInfo:
        backend = backend or get_storage_backend()
        document = dumps(self.to_flatfile())
        info = backend.save(self.flatfile_path, BytesIO(document.encode("utf-8")))
        logger.debug(f"Wrote {self._meta.label} {self.pk} to {info.path}")
        return info

    def delete_flatfile(self, backend: AbstractStorageBackend | None = None) -> bool:
        """Remove this record's file. Returns False if it was already gone."""
        backend = backend or get_storage_backend()
        path = self.flatfile_path
        if not backend.exists(path):
            return False
        backend.delete(path)
        logger.debug(f"Deleted {self._meta.label} {self.pk} file {path}")
        return True


# =============================================================================
# Signal receivers (connected in core.apps.CoreConfig.ready)
# =============================================================================


def write_flatfile_on_save(sender, instance, raw=False, **kwargs):
    """Write-through: mirror every saved FlatFileModel row to its file."""
    if raw or not isinstance(instance, FlatFileModel) or not flatfile_writes_enabled():
        return
    instance.write_flatfile()


def delete_flatfile_on_delete(sender, instance, **kwargs):
    """Remove the file of a deleted row, including queryset deletes."""
    if not isinstance(instance, FlatFileModel) or not flatfile_writes_enabled():
        return
    instance.delete_flatfile()


# =============================================================================
# Reading files back
# =============================================================================


@dataclass
class FlatFileScan:
    """Result of scanning one model's directory."""
    records: dict[Any, dict[str, Any]] = field(default_factory=dict)
    files: dict[Any, FileInfo] = field(default_factory=dict)
    unreadable: set = field(default_factory=set)
    total: int = 0
    errors: list[str] = field(default_factory=list)


class FlatFileRepository:
    """Reads the flat files of one FlatFileModel subclass."""

    def __init__(self, model: type[FlatFileModel], backend: AbstractStorageBackend | None = None):
        self.model = model
        self.backend = backend or get_storage_backend()

    @property
    def directory(self) -> str:
        return self.model.flatfile_directory

    def _list_files(self) -> list[FileInfo]:
        try:
            return [
                info for info in self.backend.list(self.directory, f"*{FLATFILE_EXTENSION}")
                if not info.is_directory
            ]
        except FileNotFoundError:
            # Directory is created with the first record
            return []

    def _pk_from_name(self, name: str) -> Any:
        stem = name[: -len(FLATFILE_EXTENSION)]
        try:
            return self.model._meta.pk.to_python(stem)
        except ValidationError:
            raise FlatFileError(f"File name {name!r} is not a valid {self.model.__name__} key")

    def _parse(self, path: str) -> dict[str, Any]:
        with self.backend.open(path) as f:
            text = f.read().decode("utf-8")
        metadata, _body = loads(text)
        return metadata

    def scan(self) -> FlatFileScan:
        files = self._list_files()
        result = FlatFileScan(total=len(files))
        for info in files:
            try:
                pk = self._pk_from_name(info.name)
            except FlatFileError as e:
                result.errors.append(f"{info.path}: {e}")
                continue
            result.files[pk] = info
            try:
                result.records[pk] = self._parse(info.path)
            except (FlatFileError, UnicodeDecodeError) as e:
                # Keep the row: a broken file is not a deleted one
                result.unreadable.add(pk)
                result.errors.append(f"{info.path}: {e}")
        return result

    def read(self, pk: Any) -> dict[str, Any] | None:
        """
        Front matter of one record, or None when the file does not exist.

        Raises:
            FrontMatterError: If the file is malformed.
        """
        path = self.model.flatfile_path_for(pk)
        if not self.backend.exists(path):
            return None
        try:
            return self._parse(path)
        except UnicodeDecodeError as e:
            raise FrontMatterError(f"{path} is not UTF-8: {e}") from e

    def fingerprint(self) -> str:
        """Cheap change detector: file count, total size and newest mtime."""
        files = self._list_files()
        newest = max((info.modified_at.timestamp() for info in files), default=0.0)
        total = sum(info.size for info in files)
        return f"{len(files)}:{total}:{newest:.6f}"
