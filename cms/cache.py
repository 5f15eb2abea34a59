"""
Cached read views of the site content.

The public page reads the Site and the visible blocks through these
helpers. cms.signals clears them whenever a Site or Block is saved or
deleted, so a cached view is never older than the last write.
"""

from core.cache import TaggedCache

from .models import Block, Site

SITE_KEY = "site"
SITE_TAG = "site"
BLOCKS_KEY = "blocks.visible"
BLOCKS_TAG = "blocks"

content_cache = TaggedCache(prefix="lantern:cms")


def get_site() -> Site | None:
    """The Site, or None when it does not exist yet (not cached)."""
    return content_cache.remember(SITE_KEY, Site.current, tags=[SITE_TAG])


def get_visible_blocks() -> list[Block]:
    """Visible blocks in display order, orphaned ones included."""
    return content_cache.remember(
        BLOCKS_KEY,
        lambda: list(Block.objects.visible().order_by("sort", "id")),
        tags=[BLOCKS_TAG],
    )


def invalidate_site() -> None:
    content_cache.invalidate(SITE_KEY, tags=[SITE_TAG])


def invalidate_blocks() -> None:
    content_cache.invalidate(BLOCKS_KEY, tags=[BLOCKS_TAG])
