"""HTML views for the public site (non-API views)."""

import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from django.shortcuts import get_object_or_404, render
from django.views import View

from .cache import get_site, get_visible_blocks
from .models import Block

logger = logging.getLogger(__name__)


def render_blocks(blocks, request=None) -> list[tuple[Block, str]]:
    """
    Render blocks in order, skipping orphaned ones and ones that fail to render.

    Returns a list of (block, html) pairs.
    """
    rendered = []
    for block in blocks:
        handler = block.handler
        if handler is None:
            logger.warning(f"Skipping orphaned block {block.pk} (type {block.type!r})")
            continue
        try:
            html = handler.render(block, request=request)
        except Exception:
            logger.exception(f"Skipping block {block.pk} (type {block.type!r}): render failed")
            continue
        rendered.append((block, html))
    return rendered


class HomeView(View):
    """The home page: site header and the visible blocks."""

    template_name = "cms/home.html"
    unavailable_template_name = "cms/unavailable.html"

    def get(self, request):
        site = get_site()
        if site is None:
            logger.warning("Home page requested before the site was configured")
            return render(request, self.unavailable_template_name, status=503)

        return render(request, self.template_name, {
            "site": site,
            "blocks": render_blocks(get_visible_blocks(), request=request),
        })


class BlockPreviewView(View):
    """Staff preview of a single block, hidden or not."""

    template_name = "cms/preview.html"

    def get(self, request, block_id: int):
        if not request.user.is_active or not request.user.is_staff:
            raise PermissionDenied("Staff access required")

        block = get_object_or_404(Block, pk=block_id)
        if block.is_orphaned:
            raise Http404(f"Block type {block.type!r} is not registered")

        return render(request, self.template_name, {
            "site": get_site(),
            "block": block,
            "html": block.render(request=request),
        })
