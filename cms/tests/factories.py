"""Factory Boy fixtures for cms app tests."""

import factory

from cms.models import Block, Site


class SiteFactory(factory.django.DjangoModelFactory):
    """Factory for the singleton Site (always pk=1)."""

    class Meta:
        model = Site
        django_get_or_create = ("id",)

    id = Site.SINGLETON_PK
    title = "Lantern test site"
    subtitle = "Built from flat files"
    background_mode = Site.BACKGROUND_STATIC
    background_media = factory.LazyFunction(lambda: ["img/header.jpg"])


class BlockFactory(factory.django.DjangoModelFactory):
    """Factory for creating Block instances (hero by default)."""

    class Meta:
        model = Block

    type = "hero"
    data = factory.Sequence(lambda n: {"heading": f"Heading {n}", "alignment": "center"})
    is_visible = True

    class Params:
        text = factory.Trait(
            type="text",
            data=factory.LazyFunction(lambda: {"heading": "", "body": "Some **bold** text"}),
        )
        hidden = factory.Trait(is_visible=False)
        orphaned = factory.Trait(
            type="retired-widget",
            data=factory.LazyFunction(lambda: {"legacy": "value"}),
        )
