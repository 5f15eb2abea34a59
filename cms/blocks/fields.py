"""Form fields for block payloads that Django does not ship."""

from django import forms
from django.core.exceptions import ValidationError


class LinesField(forms.CharField):
    """
    One value per line in a textarea, stored as a JSON list.

    With `keys`, each line is split on `separator` into a dict:
    LinesField(keys=["title", "text"]) turns "Fast | Really fast" into
    {"title": "Fast", "text": "Really fast"}. Missing trailing parts are
    empty strings; `min_items`/`max_items` bound the list length.
    """

    widget = forms.Textarea(attrs={"rows": 5})

    def __init__(self, *, keys=None, separator="|", min_items=0, max_items=None, **kwargs):
        self.keys = list(keys) if keys else None
        self.separator = separator
        self.min_items = min_items
        self.max_items = max_items
        kwargs.setdefault("strip", False)
        super().__init__(**kwargs)

    def widget_attrs(self, widget):
        attrs = super().widget_attrs(widget)
        # max_length bounds each line, not the whole textarea
        attrs.pop("maxlength", None)
        attrs.pop("minlength", None)
        return attrs

    def _split(self, line: str):
        if not self.keys:
            return line
        parts = [part.strip() for part in line.split(self.separator, len(self.keys) - 1)]
        parts += [""] * (len(self.keys) - len(parts))
        return dict(zip(self.keys, parts))

    def to_python(self, value):
        if value in self.empty_values:
            return []
        if isinstance(value, (list, tuple)):
            items = list(value)
            if self.keys:
                items = [
                    {key: str(item.get(key, "")) for key in self.keys}
                    if isinstance(item, dict) else self._split(str(item))
                    for item in items
                ]
            return items
        lines = [line.strip() for line in str(value).splitlines()]
        return [self._split(line) for line in lines if line]

    def validate(self, value):
        if self.required and not value:
            raise ValidationError(self.error_messages["required"], code="required")
        if len(value) < self.min_items:
            raise ValidationError(
                f"Enter at least {self.min_items} line(s).", code="min_items"
            )
        if self.max_items is not None and len(value) > self.max_items:
            raise ValidationError(
                f"Enter at most {self.max_items} line(s).", code="max_items"
            )

    def run_validators(self, value):
        # CharField validators (max_length) apply per line, not to the list
        for item in value:
            if isinstance(item, str):
                super().run_validators(item)

    def prepare_value(self, value):
        if isinstance(value, (list, tuple)):
            if self.keys:
                return "\n".join(
                    f" {self.separator} ".join(str(item.get(key, "")) for key in self.keys).rstrip(f" {self.separator}")
                    if isinstance(item, dict) else str(item)
                    for item in value
                )
            return "\n".join(str(item) for item in value)
        return value
