"""Management command to report (and optionally delete) orphaned blocks."""

from django.core.management.base import BaseCommand

from cms.models import Block


class Command(BaseCommand):
    """Report blocks whose type no longer resolves to a block type."""

    help = "List blocks whose type is not registered; --delete removes them"

    def add_arguments(self, parser):
        parser.add_argument(
            "--delete",
            action="store_true",
            help="Delete orphaned blocks (and their flat files)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be deleted without actually deleting",
        )

    def handle(self, *args, **options):
        delete = options["delete"]
        dry_run = options["dry_run"]

        orphaned = list(Block.objects.orphaned().order_by("sort", "id"))
        if not orphaned:
            self.stdout.write(self.style.SUCCESS("No orphaned blocks."))
            return

        for block in orphaned:
            visibility = "visible" if block.is_visible else "hidden"
            self.stdout.write(f"  #{block.pk}  type={block.type}  sort={block.sort}  {visibility}")

        if not delete:
            self.stdout.write(
                self.style.WARNING(f"{len(orphaned)} orphaned block(s). Use --delete to remove them.")
            )
            return

        if dry_run:
            self.stdout.write(
                self.style.WARNING(f"[DRY RUN] Would delete {len(orphaned)} block(s)")
            )
            return

        # One by one so each file is removed too
        for block in orphaned:
            block.delete()
        self.stdout.write(self.style.SUCCESS(f"Deleted {len(orphaned)} orphaned block(s)"))
