"""
Flat File - Shadow Index Synchronization Service.

"Filesystem wins": the Markdown files under LANTERN_CONTENT_ROOT are the
source of truth, the database rows are a rebuildable index.

Usage:
    service = IndexSyncService()
    stats = service.sync(mode='audit', dry_run=True)
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable

from django.apps import apps
from django.core.cache import cache
from django.core.exceptions import ValidationError
from django.db import transaction

from core.exceptions import FlatFileError, IndexDesyncError
from core.flatfile import FlatFileModel, FlatFileRepository, flatfile_writes_suppressed
from core.storage import AbstractStorageBackend, get_storage_backend

logger = logging.getLogger(__name__)

SYNC_MODES = ['audit', 'sync', 'clean', 'full']
FINGERPRINT_CACHE_KEY = "lantern:index_sync:fingerprints"


def flatfile_models() -> list[type[FlatFileModel]]:
    """All installed concrete FlatFileModel subclasses."""
    return [
        model for model in apps.get_models()
        if issubclass(model, FlatFileModel) and model.flatfile_directory
    ]


@dataclass
class IndexSyncStats:
    """Statistics from index sync operation."""
    models_scanned: int = 0
    files_on_disk: int = 0
    records_in_index: int = 0
    missing_in_index: int = 0
    stale_in_index: int = 0
    orphaned_in_index: int = 0
    records_created: int = 0
    records_updated: int = 0
    records_deleted: int = 0
    errors: list[str] = field(default_factory=list)

    def merge(self, other: "IndexSyncStats") -> None:
        for name, value in asdict(other).items():
            if name == "errors":
                self.errors.extend(value)
            elif name != "models_scanned":
                setattr(self, name, getattr(self, name) + value)

    @property
    def in_sync(self) -> bool:
        return not (
            self.missing_in_index or self.stale_in_index
            or self.orphaned_in_index or self.errors
        )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


class IndexSyncService:
    """
    Service for synchronizing flat files and the shadow index.

    Modes:
        - audit: Report discrepancies only, no changes
        - sync: Create missing rows and refresh stale ones from their files
        - clean: Delete rows whose file is gone (requires force=True)
        - full: sync + clean (requires force=True)
    """

    def __init__(
        self,
        models: Iterable[type[FlatFileModel]] | None = None,
        backend: AbstractStorageBackend | None = None,
    ):
        self.models = list(models) if models is not None else flatfile_models()
        self.backend = backend or get_storage_backend()

    def sync(
        self,
        mode: str = 'audit',
        dry_run: bool = False,
        force: bool = False,
    ) -> IndexSyncStats:
        """
        Synchronize flat files and the shadow index.

        Args:
            mode: 'audit', 'sync', 'clean', or 'full'
            dry_run: Preview changes without applying
            force: Required for 'clean' and 'full' modes

        Returns:
            IndexSyncStats with operation results
        """
        if mode not in SYNC_MODES:
            raise ValueError(f"Invalid mode: {mode}")

        if mode in ['clean', 'full'] and not force:
            raise ValueError(f"Mode '{mode}' requires force=True")

        stats = IndexSyncStats(models_scanned=len(self.models))

        for model in self.models:
            stats.merge(self._sync_model(model, mode, dry_run))

        logger.info(
            f"Index sync ({mode}{', dry run' if dry_run else ''}): "
            f"{stats.files_on_disk} files, {stats.records_in_index} rows, "
            f"+{stats.records_created} ~{stats.records_updated} -{stats.records_deleted}, "
            f"{len(stats.errors)} error(s)"
        )
        return stats

    def _sync_model(self, model: type[FlatFileModel], mode: str, dry_run: bool) -> IndexSyncStats:
        """
        Sync one model's directory with its table.

        Rows are saved with flat-file writes suppressed so reading a file
        never rewrites it. Model signals still fire, which keeps cached
        read views consistent with the refreshed rows.
        """
        stats = IndexSyncStats()
        label = model._meta.label

        scan = FlatFileRepository(model, self.backend).scan()
        stats.errors.extend(scan.errors)
        stats.files_on_disk = scan.total

        rows = {obj.pk: obj for obj in model.objects.all()}
        stats.records_in_index = len(rows)

        file_keys = set(scan.records)
        row_keys = set(rows)

        missing = file_keys - row_keys
        orphaned = row_keys - file_keys - scan.unreadable
        stale = {
            pk for pk in file_keys & row_keys
            if self._is_stale(rows[pk], scan.records[pk], stats)
        }

        stats.missing_in_index = len(missing)
        stats.stale_in_index = len(stale)
        stats.orphaned_in_index = len(orphaned)

        if mode in ['sync', 'full']:
            for pk in sorted(missing | stale, key=str):
                if dry_run:
                    if pk in missing:
                        stats.records_created += 1
                    else:
                        stats.records_updated += 1
                    continue
                try:
                    created = self._write_row(model, pk, scan.records[pk])
                except (FlatFileError, IndexDesyncError, ValidationError, ValueError) as e:
                    stats.errors.append(f"Error indexing {label} {pk}: {e}")
                    continue
                if created:
                    stats.records_created += 1
                else:
                    stats.records_updated += 1

        # Rows without a file are gone for good: filesystem wins
        if mode in ['clean', 'full']:
            for pk in sorted(orphaned, key=str):
                if dry_run:
                    stats.records_deleted += 1
                    continue
                with flatfile_writes_suppressed():
                    rows[pk].delete()
                stats.records_deleted += 1

        return stats

    def _is_stale(self, obj: FlatFileModel, metadata: dict, stats: IndexSyncStats) -> bool:
        """True when any content field differs between row and file."""
        try:
            values = obj.from_flatfile(metadata)
        except FlatFileError as e:
            stats.errors.append(f"{obj.flatfile_path}: {e}")
            return False
        for name, value in values.items():
            if name in obj.flatfile_timestamp_fields:
                continue
            if getattr(obj, name) != value:
                return True
        return False

    @transaction.atomic
    def _write_row(self, model: type[FlatFileModel], pk: Any, metadata: dict) -> bool:
        """
        Create or update the row for one file. Returns True if created.

        Raises:
            IndexDesyncError: If the front matter names a different key than the file.
            FlatFileError: If the values fail the model's flat-file checks.
        """
        pk_name = model._meta.pk.name
        if pk_name in metadata and str(metadata[pk_name]) != str(pk):
            raise IndexDesyncError(
                f"{model.flatfile_path_for(pk)} declares {pk_name}={metadata[pk_name]!r}"
            )
        values = model.from_flatfile(metadata)
        timestamps = {
            name: values.pop(name)
            for name in model.flatfile_timestamp_fields
            if values.get(name) is not None
        }

        with flatfile_writes_suppressed():
            obj = model.objects.filter(pk=pk).first()
            created = obj is None
            if created:
                obj = model(pk=pk)
            for name, value in values.items():
                setattr(obj, name, value)
            obj.validate_flatfile()
            obj.save()

        # auto_now fields would otherwise overwrite the file's timestamps
        if timestamps:
            model.objects.filter(pk=pk).update(**timestamps)

        return created

    # =========================================================================
    # Change detection
    # =========================================================================

    def fingerprints(self) -> dict[str, str]:
        return {
            model._meta.label: FlatFileRepository(model, self.backend).fingerprint()
            for model in self.models
        }

    def refresh_if_changed(self) -> IndexSyncStats | None:
        """
        Run a full sync when any content directory changed since the last one.

        Returns the sync stats, or None when nothing changed.
        """
        current = self.fingerprints()
        if cache.get(FINGERPRINT_CACHE_KEY) == current:
            return None

        stats = self.sync(mode='full', force=True)
        # Syncing does not write files, so the fingerprints still hold
        cache.set(FINGERPRINT_CACHE_KEY, current, None)
        return stats
