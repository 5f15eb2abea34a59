"""Block type interface."""

from typing import TYPE_CHECKING, Any

from django import forms
from django.core.exceptions import ValidationError
from django.template.loader import render_to_string
from django.utils.safestring import SafeString

from core.utils import kebab_case

if TYPE_CHECKING:
    from django.http import HttpRequest

    from cms.models import Block


class BlockType:
    """
    Base class for block handlers.

    A handler owns three things for one type tag:

    - the payload schema, as a dict of Django form fields (get_fields)
    - the mapping from a stored payload to template variables (get_context)
    - the template that renders it (template_name)

    Concrete handlers live in a module of a LANTERN_BLOCK_PACKAGES package
    and are named `<Name>Block`; the type tag defaults to the kebab-cased
    `<Name>` (CallToActionBlock -> "call-to-action"). Set `key` to override
    it, or `abstract = True` to keep a shared base class out of the registry.
    """

    key: str = ""
    label: str = ""
    description: str = ""
    template_name: str = ""
    abstract = True

    @classmethod
    def get_key(cls) -> str:
        explicit = cls.__dict__.get("key")
        if explicit:
            return explicit
        name = cls.__name__
        if name.endswith("Block"):
            name = name[: -len("Block")]
        return kebab_case(name)

    @classmethod
    def is_abstract(cls) -> bool:
        return bool(cls.__dict__.get("abstract", False))

    def get_label(self) -> str:
        return self.label or self.get_key().replace("-", " ").capitalize()

    def get_template_name(self) -> str:
        return self.template_name or f"cms/blocks/{self.get_key()}.html"

    # =========================================================================
    # Payload schema
    # =========================================================================

    def get_fields(self) -> dict[str, forms.Field]:
        """Payload fields; called afresh each time so instances are never shared."""
        return {}

    def initial(self) -> dict[str, Any]:
        """Default payload for a new block."""
        values = {}
        for name, field in self.get_fields().items():
            initial = field.initial() if callable(field.initial) else field.initial
            if initial is not None:
                values[name] = initial
        return values

    def get_form_class(self) -> type[forms.Form]:
        return type(f"{type(self).__name__}Form", (forms.Form,), self.get_fields())

    def to_payload(self, cleaned_data: dict[str, Any]) -> dict[str, Any]:
        """JSON-safe payload from cleaned form data (only schema keys)."""
        payload = {}
        for name in self.get_fields():
            value = cleaned_data.get(name)
            if hasattr(value, "isoformat"):
                value = value.isoformat()
            payload[name] = value
        return payload

    def clean(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Validate a raw payload against the schema.

        Returns:
            The normalized payload; keys outside the schema are dropped.

        Raises:
            ValidationError: Field errors keyed by payload field name.
        """
        if not isinstance(data, dict):
            raise ValidationError("Block data must be an object.", code="invalid")
        # Missing keys fall back to the schema defaults
        form = self.get_form_class()(data={**self.initial(), **data})
        if not form.is_valid():
            raise ValidationError(form.errors.as_data())
        return self.to_payload(form.cleaned_data)

    # =========================================================================
    # Rendering
    # =========================================================================

    def get_context(self, block: "Block") -> dict[str, Any]:
        """Template variables: schema defaults overlaid with the stored payload."""
        return {
            **self.initial(),
            **(block.data or {}),
            "block": block,
            "block_type": self.get_key(),
        }

    def render(self, block: "Block", request: "HttpRequest | None" = None) -> SafeString:
        return render_to_string(self.get_template_name(), self.get_context(block), request=request)

    def describe(self) -> dict[str, Any]:
        """JSON-serialisable description of the type and its schema."""
        fields = []
        for name, field in self.get_fields().items():
            fields.append({
                "name": name,
                "type": type(field).__name__,
                "label": str(field.label) if field.label else name.replace("_", " ").capitalize(),
                "required": field.required,
                "help_text": str(field.help_text),
                "initial": field.initial if not callable(field.initial) else None,
                "choices": [
                    {"value": value, "label": str(label)}
                    for value, label in getattr(field, "choices", [])
                ],
            })
        return {
            "key": self.get_key(),
            "label": self.get_label(),
            "description": self.description,
            "template": self.get_template_name(),
            "fields": fields,
        }

    def __repr__(self):
        return f"<{type(self).__name__} key={self.get_key()!r}>"
