"""Management command to list registered block types."""

from django.core.management.base import BaseCommand, CommandError

from core.exceptions import RegistryError
from cms.blocks import registry
from cms.models import Block


class Command(BaseCommand):
    help = "List registered block types with their template and payload fields"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reload",
            action="store_true",
            help="Re-scan LANTERN_BLOCK_PACKAGES before listing",
        )

    def handle(self, *args, **options):
        try:
            if options["reload"]:
                registry.reload()
            handlers = registry.all()
        except RegistryError as e:
            raise CommandError(str(e))

        if not handlers:
            self.stdout.write(self.style.WARNING("No block types registered."))
            return

        for handler in handlers:
            key = handler.get_key()
            count = Block.objects.filter(type=key).count()
            self.stdout.write(self.style.SUCCESS(f"{key}") + f"  {handler.get_label()} ({count} block(s))")
            self.stdout.write(f"    template: {handler.get_template_name()}")
            fields = ", ".join(
                f"{name}{'' if field.required else '?'}"
                for name, field in handler.get_fields().items()
            )
            self.stdout.write(f"    fields:   {fields or '-'}")

        self.stdout.write("")
        self.stdout.write(f"{len(handlers)} block type(s)")
