from django import forms

from cms.blocks.base import BlockType


class CallToActionBlock(BlockType):
    label = "Call to action"
    description = "Short pitch with a prominent button."

    STYLES = [("primary", "Primary"), ("secondary", "Secondary"), ("outline", "Outline")]

    def get_fields(self):
        return {
            "heading": forms.CharField(max_length=200),
            "text": forms.CharField(widget=forms.Textarea(attrs={"rows": 3}), required=False),
            "button_label": forms.CharField(max_length=80),
            "button_url": forms.CharField(max_length=500),
            "style": forms.ChoiceField(choices=self.STYLES, initial="primary"),
        }
