from django import forms

from cms.blocks.base import BlockType


class HeroBlock(BlockType):
    label = "Hero"
    description = "Large heading with an optional image and button."

    ALIGNMENTS = [("left", "Left"), ("center", "Center"), ("right", "Right")]

    def get_fields(self):
        return {
            "heading": forms.CharField(max_length=200),
            "subheading": forms.CharField(max_length=300, required=False),
            "image": forms.CharField(
                max_length=500, required=False, help_text="Path or URL of the image"
            ),
            "button_label": forms.CharField(max_length=80, required=False),
            "button_url": forms.CharField(max_length=500, required=False),
            "alignment": forms.ChoiceField(choices=self.ALIGNMENTS, initial="center"),
        }

    def get_context(self, block):
        context = super().get_context(block)
        context["show_button"] = bool(context.get("button_label") and context.get("button_url"))
        return context
