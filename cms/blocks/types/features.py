from django import forms

from cms.blocks.base import BlockType
from cms.blocks.fields import LinesField


class FeaturesBlock(BlockType):
    label = "Features"
    description = "A grid of short feature descriptions."

    def get_fields(self):
        return {
            "heading": forms.CharField(max_length=200, required=False),
            "items": LinesField(
                keys=["title", "text"],
                min_items=1,
                max_items=12,
                help_text="One feature per line: Title | Description",
            ),
            "columns": forms.TypedChoiceField(
                choices=[(2, "2"), (3, "3"), (4, "4")],
                coerce=int,
                initial=3,
            ),
        }
