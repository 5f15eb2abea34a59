"""
Management command to rebuild the content index from the flat files.

The Markdown files under LANTERN_CONTENT_ROOT win over the database.
"""

from django.core.management.base import BaseCommand, CommandError

from core.services.index_sync import SYNC_MODES, IndexSyncService


class Command(BaseCommand):
    help = (
        "Rebuild the content index from the Markdown flat files (filesystem wins). "
        "Clean and full modes delete rows whose file is gone."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--mode",
            type=str,
            choices=SYNC_MODES,
            default="audit",
            help=(
                "Sync mode: audit (report only), sync (add missing, refresh stale), "
                "clean (delete orphaned rows), full (sync+clean)"
            ),
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Preview changes without applying them",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Required for clean and full modes (prevents accidental deletion)",
        )

    def handle(self, *args, **options):
        mode = options["mode"]
        dry_run = options["dry_run"]
        force = options["force"]
        verbosity = options["verbosity"]

        if mode in ["clean", "full"] and not force:
            raise CommandError(
                f"Mode '{mode}' requires --force flag to prevent accidental data loss"
            )

        if verbosity >= 1:
            self.stdout.write(self.style.SUCCESS("=" * 60))
            self.stdout.write(self.style.SUCCESS("Content Index Rebuild"))
            self.stdout.write(self.style.SUCCESS("Filesystem wins policy"))
            self.stdout.write(self.style.SUCCESS("=" * 60))
            self.stdout.write("")
            self.stdout.write(f"Mode: {mode}")
            if dry_run:
                self.stdout.write(
                    self.style.WARNING("DRY RUN: No changes will be made")
                )
            self.stdout.write("")

        stats = IndexSyncService().sync(mode=mode, dry_run=dry_run, force=force)

        if verbosity >= 1:
            self._display_stats(stats.as_dict(), verbosity)

    def _display_stats(self, stats, verbosity):
        """Display sync statistics."""
        self.stdout.write(self.style.SUCCESS("=" * 60))
        self.stdout.write(self.style.SUCCESS("Results"))
        self.stdout.write(self.style.SUCCESS("=" * 60))

        # Summary
        self.stdout.write(f"Models scanned: {stats['models_scanned']}")
        self.stdout.write(f"Files on disk: {stats['files_on_disk']}")
        self.stdout.write(f"Rows in index: {stats['records_in_index']}")
        self.stdout.write("")

        # Discrepancies
        if stats["missing_in_index"] > 0:
            self.stdout.write(
                self.style.WARNING(f"Missing in index: {stats['missing_in_index']}")
            )
        if stats["stale_in_index"] > 0:
            self.stdout.write(
                self.style.WARNING(f"Stale in index: {stats['stale_in_index']}")
            )
        if stats["orphaned_in_index"] > 0:
            self.stdout.write(
                self.style.WARNING(f"Orphaned in index: {stats['orphaned_in_index']}")
            )

        # Actions taken
        for key, label in [
            ("records_created", "Records created"),
            ("records_updated", "Records updated"),
            ("records_deleted", "Records deleted"),
        ]:
            if stats[key] > 0:
                self.stdout.write(self.style.SUCCESS(f"{label}: {stats[key]}"))

        # Errors
        if stats["errors"]:
            limit = None if verbosity >= 2 else 10
            self.stdout.write("")
            self.stdout.write(self.style.ERROR(f"Errors ({len(stats['errors'])}):"))
            for error in stats["errors"][:limit]:
                self.stdout.write(self.style.ERROR(f"  - {error}"))
            if limit and len(stats["errors"]) > limit:
                self.stdout.write(
                    self.style.ERROR(f"  ... and {len(stats['errors']) - limit} more")
                )

        self.stdout.write("")

        if not (
            stats["missing_in_index"]
            or stats["stale_in_index"]
            or stats["orphaned_in_index"]
            or stats["errors"]
        ):
            self.stdout.write(self.style.SUCCESS("Index is in sync!"))
