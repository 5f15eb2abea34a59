from django import forms

from cms.blocks.base import BlockType
from cms.blocks.fields import LinesField


class GalleryBlock(BlockType):
    label = "Gallery"
    description = "Grid of images."

    def get_fields(self):
        return {
            "heading": forms.CharField(max_length=200, required=False),
            "images": LinesField(
                min_items=1,
                max_length=500,
                help_text="One image path or URL per line",
            ),
            "columns": forms.IntegerField(min_value=1, max_value=6, initial=3),
        }

    def get_context(self, block):
        context = super().get_context(block)
        context["images"] = [image for image in context.get("images") or [] if image]
        return context
