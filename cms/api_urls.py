"""URL configuration for the CMS admin API (mounted at /api/v1/cms/)."""

from django.urls import path

from .api import (
    BlockDetailView,
    BlockListCreateView,
    BlockRenderView,
    BlockReorderView,
    BlockTypeListView,
    OrphanedBlockListView,
    SiteView,
)

urlpatterns = [
    path("site/", SiteView.as_view(), name="cms-site"),
    path("blocks/", BlockListCreateView.as_view(), name="cms-block-list"),
    path("blocks/reorder/", BlockReorderView.as_view(), name="cms-block-reorder"),
    path("blocks/orphaned/", OrphanedBlockListView.as_view(), name="cms-block-orphaned"),
    path("blocks/types/", BlockTypeListView.as_view(), name="cms-block-types"),
    path("blocks/<int:block_id>/", BlockDetailView.as_view(), name="cms-block-detail"),
    path("blocks/<int:block_id>/render/", BlockRenderView.as_view(), name="cms-block-render"),
]
