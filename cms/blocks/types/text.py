import bleach
import markdown
from django import forms
from django.utils.safestring import mark_safe

from cms.blocks.base import BlockType

MARKDOWN_EXTENSIONS = ["extra", "sane_lists", "smarty"]

ALLOWED_TAGS = [
    "p", "br", "hr", "strong", "em", "code", "pre",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li", "blockquote", "dl", "dt", "dd", "abbr", "sup",
    "a", "img", "table", "thead", "tbody", "tr", "th", "td",
]
ALLOWED_ATTRIBUTES = {
    "a": ["href", "title"],
    "img": ["src", "alt", "title"],
    "abbr": ["title"],
    "th": ["align"],
    "td": ["align"],
}


def render_markdown(text: str) -> str:
    """Render Markdown to HTML and sanitize it."""
    html = markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)
    return bleach.clean(html, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES)


class TextBlock(BlockType):
    """Free text written in Markdown."""

    label = "Text"
    description = "Rich text written in Markdown."

    def get_fields(self):
        return {
            "heading": forms.CharField(max_length=200, required=False),
            "body": forms.CharField(widget=forms.Textarea(attrs={"rows": 12}), help_text="Markdown"),
        }

    def get_context(self, block):
        context = super().get_context(block)
        body = context.get("body")
        context["body_html"] = mark_safe(render_markdown("" if body is None else str(body)))
        return context
