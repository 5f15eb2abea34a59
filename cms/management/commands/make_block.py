"""Management command to scaffold a new block type."""

import importlib
from pathlib import Path
from string import Template

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.utils import camel_case, kebab_case
from cms.blocks import registry
from cms.validators import is_valid_block_type

MODULE_TEMPLATE = Template('''from django import forms

from cms.blocks.base import BlockType


class ${class_name}(BlockType):
    label = "${label}"
    description = ""

    def get_fields(self):
        return {
            "heading": forms.CharField(max_length=200),
            "text": forms.CharField(widget=forms.Textarea, required=False),
        }
''')

HTML_TEMPLATE = Template('''<div class="${key}">
  <h2>{{ heading }}</h2>
  {% if text %}<p>{{ text|linebreaksbr }}</p>{% endif %}
</div>
''')


class Command(BaseCommand):
    help = "Create a block type module and its template (e.g. make_block Testimonial)"

    def add_arguments(self, parser):
        parser.add_argument("name", help="Block name, CamelCase or kebab-case (e.g. PriceTable)")
        parser.add_argument(
            "--directory",
            help="Directory for the module (default: first LANTERN_BLOCK_PACKAGES package)",
        )
        parser.add_argument(
            "--templates",
            help="Directory for the template (default: cms/templates/cms/blocks)",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Overwrite existing files",
        )

    def _default_directory(self) -> Path:
        packages = list(settings.LANTERN_BLOCK_PACKAGES)
        if not packages:
            raise CommandError("LANTERN_BLOCK_PACKAGES is empty; pass --directory")
        try:
            package = importlib.import_module(packages[0])
        except ImportError as e:
            raise CommandError(f"Cannot import {packages[0]}: {e}")
        if not hasattr(package, "__path__"):
            raise CommandError(f"{packages[0]} is not a package; pass --directory")
        return Path(list(package.__path__)[0])

    def handle(self, *args, **options):
        base_name = camel_case(options["name"])
        if base_name.endswith("Block") and base_name != "Block":
            base_name = base_name[: -len("Block")]
        key = kebab_case(base_name)
        if not base_name.isidentifier() or not is_valid_block_type(key):
            raise CommandError(
                f"'{options['name']}' does not give a valid block type (got {key!r})"
            )

        class_name = f"{base_name}Block"
        module_dir = Path(options["directory"]) if options["directory"] else self._default_directory()
        template_dir = (
            Path(options["templates"])
            if options["templates"]
            else Path(settings.BASE_DIR) / "cms" / "templates" / "cms" / "blocks"
        )
        module_path = module_dir / f"{key.replace('-', '_')}.py"
        template_path = template_dir / f"{key}.html"

        if not options["force"]:
            existing = [str(p) for p in (module_path, template_path) if p.exists()]
            if existing:
                raise CommandError(
                    f"Already exists: {', '.join(existing)} (use --force to overwrite)"
                )
            if key in registry:
                raise CommandError(f"Block type '{key}' is already registered (use --force)")

        module_dir.mkdir(parents=True, exist_ok=True)
        template_dir.mkdir(parents=True, exist_ok=True)

        module_path.write_text(
            MODULE_TEMPLATE.substitute(
                class_name=class_name,
                label=key.replace("-", " ").capitalize(),
            ),
            encoding="utf-8",
        )
        template_path.write_text(HTML_TEMPLATE.substitute(key=key), encoding="utf-8")

        self.stdout.write(self.style.SUCCESS(f"Created block type '{key}' ({class_name})"))
        self.stdout.write(f"  module:   {module_path}")
        self.stdout.write(f"  template: {template_path}")
        self.stdout.write("Restart the server to register it.")
