"""Admin API views for site content."""

import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

from core.views import LanternBaseAPIView

from .blocks import registry
from .models import Block, Site
from .serializers import (
    BlockRenderSerializer,
    BlockReorderSerializer,
    BlockSerializer,
    BlockTypeSerializer,
    SiteSerializer,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Site
# =============================================================================


class SiteView(LanternBaseAPIView):
    """Read and update the singleton site (created on first access)."""

    @extend_schema(
        summary="Get site",
        description="Return the site settings, creating them with defaults if missing.",
        responses={200: SiteSerializer},
        tags=["CMS - Site"],
    )
    def get(self, request: Request) -> Response:
        return Response(SiteSerializer(Site.load()).data)

    @extend_schema(
        summary="Replace site",
        request=SiteSerializer,
        responses={200: SiteSerializer, 400: OpenApiResponse(description="Invalid data")},
        tags=["CMS - Site"],
    )
    def put(self, request: Request) -> Response:
        return self._update(request, partial=False)

    @extend_schema(
        summary="Update site",
        request=SiteSerializer,
        responses={200: SiteSerializer, 400: OpenApiResponse(description="Invalid data")},
        tags=["CMS - Site"],
    )
    def patch(self, request: Request) -> Response:
        return self._update(request, partial=True)

    def _update(self, request: Request, partial: bool) -> Response:
        serializer = SiteSerializer(
            Site.load(), data=request.data, partial=partial, context=self.get_serializer_context()
        )
        if not serializer.is_valid():
            return self.validation_error(serializer.errors)
        site = serializer.save()
        logger.info(f"Site updated by {request.user}")
        return Response(SiteSerializer(site).data)


# =============================================================================
# Blocks
# =============================================================================


class BlockBaseView(LanternBaseAPIView):
    def get_block(self, block_id: int) -> Block | None:
        return Block.objects.filter(pk=block_id).first()

    def block_not_found(self, block_id: int) -> Response:
        return self.error_response(
            "BLOCK_NOT_FOUND", f"Block {block_id} does not exist.", status.HTTP_404_NOT_FOUND
        )


class BlockListCreateView(BlockBaseView):
    """List blocks in display order, or create one."""

    @extend_schema(
        summary="List blocks",
        parameters=[
            OpenApiParameter(
                name="visible",
                type=bool,
                location=OpenApiParameter.QUERY,
                description="Only visible (true) or hidden (false) blocks",
            ),
            OpenApiParameter(
                name="type",
                type=str,
                location=OpenApiParameter.QUERY,
                description="Filter by block type",
            ),
        ],
        responses={200: BlockSerializer(many=True)},
        tags=["CMS - Blocks"],
    )
    def get(self, request: Request) -> Response:
        queryset = Block.objects.order_by("sort", "id")
        visible = request.query_params.get("visible")
        if visible is not None:
            queryset = queryset.filter(is_visible=visible.lower() in ("1", "true", "yes"))
        type_key = request.query_params.get("type")
        if type_key:
            queryset = queryset.filter(type=type_key)
        return Response(BlockSerializer(queryset, many=True).data)

    @extend_schema(
        summary="Create block",
        description="Create a block. Its data is validated by the block type; new blocks go last unless sort is given.",
        request=BlockSerializer,
        responses={201: BlockSerializer, 400: OpenApiResponse(description="Invalid data or unknown type")},
        tags=["CMS - Blocks"],
    )
    def post(self, request: Request) -> Response:
        serializer = BlockSerializer(data=request.data, context=self.get_serializer_context())
        if not serializer.is_valid():
            return self.validation_error(serializer.errors)
        block = serializer.save()
        logger.info(f"Block {block.pk} ({block.type}) created by {request.user}")
        return Response(BlockSerializer(block).data, status=status.HTTP_201_CREATED)


class BlockDetailView(BlockBaseView):
    """Read, update or delete one block."""

    @extend_schema(
        summary="Get block",
        responses={200: BlockSerializer, 404: OpenApiResponse(description="Not found")},
        tags=["CMS - Blocks"],
    )
    def get(self, request: Request, block_id: int) -> Response:
        block = self.get_block(block_id)
        if block is None:
            return self.block_not_found(block_id)
        return Response(BlockSerializer(block).data)

    @extend_schema(
        summary="Update block",
        description="Partial update. Keys given in data are merged into the stored payload. The type cannot change.",
        request=BlockSerializer,
        responses={
            200: BlockSerializer,
            400: OpenApiResponse(description="Invalid data or type change"),
            404: OpenApiResponse(description="Not found"),
        },
        tags=["CMS - Blocks"],
    )
    def patch(self, request: Request, block_id: int) -> Response:
        block = self.get_block(block_id)
        if block is None:
            return self.block_not_found(block_id)
        serializer = BlockSerializer(
            block, data=request.data, partial=True, context=self.get_serializer_context()
        )
        if not serializer.is_valid():
            return self.validation_error(serializer.errors)
        block = serializer.save()
        return Response(BlockSerializer(block).data)

    @extend_schema(
        summary="Delete block",
        responses={204: None, 404: OpenApiResponse(description="Not found")},
        tags=["CMS - Blocks"],
    )
    def delete(self, request: Request, block_id: int) -> Response:
        block = self.get_block(block_id)
        if block is None:
            return self.block_not_found(block_id)
        block.delete()
        logger.info(f"Block {block_id} deleted by {request.user}")
        return Response(status=status.HTTP_204_NO_CONTENT)


class BlockReorderView(BlockBaseView):
    """Set the display order of blocks."""

    @extend_schema(
        summary="Reorder blocks",
        description="Listed blocks take positions 0..n-1 in the given order; unlisted blocks follow in their current order.",
        request=BlockReorderSerializer,
        responses={200: BlockSerializer(many=True), 400: OpenApiResponse(description="Unknown ids")},
        tags=["CMS - Blocks"],
    )
    def post(self, request: Request) -> Response:
        serializer = BlockReorderSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_error(serializer.errors)
        ordered = Block.objects.reorder(serializer.validated_data["order"])
        return Response(BlockSerializer(ordered, many=True).data)


class OrphanedBlockListView(BlockBaseView):
    """Blocks whose type is no longer registered."""

    @extend_schema(
        summary="List orphaned blocks",
        responses={200: BlockSerializer(many=True)},
        tags=["CMS - Blocks"],
    )
    def get(self, request: Request) -> Response:
        queryset = Block.objects.orphaned().order_by("sort", "id")
        return Response(BlockSerializer(queryset, many=True).data)


class BlockTypeListView(LanternBaseAPIView):
    """Registered block types and their data schema."""

    @extend_schema(
        summary="List block types",
        responses={200: BlockTypeSerializer(many=True)},
        tags=["CMS - Blocks"],
    )
    def get(self, request: Request) -> Response:
        return Response([handler.describe() for handler in registry.all()])


class BlockRenderView(BlockBaseView):
    """Render one block to HTML (preview)."""

    @extend_schema(
        summary="Render block",
        request=None,
        responses={
            200: BlockRenderSerializer,
            404: OpenApiResponse(description="Not found"),
            409: OpenApiResponse(description="Block type not registered"),
        },
        tags=["CMS - Blocks"],
    )
    def post(self, request: Request, block_id: int) -> Response:
        block = self.get_block(block_id)
        if block is None:
            return self.block_not_found(block_id)
        if block.is_orphaned:
            return self.error_response(
                "BLOCK_ORPHANED",
                f"Block type {block.type!r} is not registered.",
                status.HTTP_409_CONFLICT,
            )
        html = block.render(request=request._request)
        return Response({"id": block.pk, "type": block.type, "html": str(html)})
