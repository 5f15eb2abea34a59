"""Admin forms for site content."""

from django import forms

from .blocks import BlockType, LinesField
from .models import Block, Site

DATA_FIELD_PREFIX = "data__"


class SiteAdminForm(forms.ModelForm):
    background_media = LinesField(
        required=False,
        max_length=500,
        help_text="One path or URL per line. Static and video use the first line.",
    )

    class Meta:
        model = Site
        fields = [
            "title",
            "subtitle",
            "logo",
            "background_mode",
            "background_media",
            "slideshow_duration",
            "custom_css",
        ]
        widgets = {
            "custom_css": forms.Textarea(attrs={"rows": 10, "class": "vLargeTextField"}),
        }


class BlockAdminForm(forms.ModelForm):
    """
    Block form whose payload fields come from the block's handler.

    Use `block_form_for(handler)` to get a subclass carrying the handler's
    fields as `data__<name>`; on clean they are collected into
    `instance.data`. Without a handler (orphaned block) the payload is
    left untouched.
    """

    handler: BlockType | None = None

    class Meta:
        model = Block
        fields = ["type", "sort", "is_visible"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.handler is None:
            return

        if "type" in self.fields:
            # New block: the type comes from the picker, never from POST data
            self.fields["type"].disabled = True
            self.initial["type"] = self.handler.get_key()

        payload = {**self.handler.initial(), **(self.instance.data or {})}
        for name in self.handler.get_fields():
            if name in payload:
                self.initial.setdefault(DATA_FIELD_PREFIX + name, payload[name])

    @property
    def data_field_names(self) -> list[str]:
        return [name for name in self.fields if name.startswith(DATA_FIELD_PREFIX)]

    def clean(self):
        cleaned_data = super().clean()
        if self.handler is not None:
            values = {
                name[len(DATA_FIELD_PREFIX):]: cleaned_data.get(name)
                for name in self.data_field_names
            }
            self.instance.data = self.handler.to_payload(values)
        return cleaned_data


def block_form_for(handler: BlockType | None, base=BlockAdminForm, add: bool = False):
    """Build a BlockAdminForm subclass for one handler."""
    attrs = {"handler": handler}
    if add:
        attrs["type"] = forms.CharField(widget=forms.HiddenInput, max_length=64)
    if handler is not None:
        for name, field in handler.get_fields().items():
            if field.label is None:
                field.label = name.replace("_", " ").capitalize()
            attrs[DATA_FIELD_PREFIX + name] = field
    name = f"{type(handler).__name__}AdminForm" if handler else base.__name__
    return type(name, (base,), attrs)
