"""Request middleware: Sentry context and flat-file change detection."""

import logging

from django.conf import settings
from sentry_sdk import set_context, set_tag, set_user

logger = logging.getLogger(__name__)


class SentryContextMiddleware:
    """
    Add user and request context to Sentry error reports.

    The sentry_sdk calls are no-ops until sentry_sdk.init() runs, so this
    is safe to enable even if Sentry is not configured.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        # Add authenticated user info (privacy-safe)
        if hasattr(request, 'user') and request.user.is_authenticated:
            set_user({
                "id": request.user.id,
                "username": request.user.username,
                "is_staff": request.user.is_staff,
                # Explicitly NOT including: email, ip_address (GDPR)
            })

        set_tag("request_path", request.path)
        set_tag("request_method", request.method)

        set_context("content", {
            "backend": settings.LANTERN_STORAGE_BACKEND,
            "root": str(settings.LANTERN_CONTENT_ROOT),
        })

        return self.get_response(request)


class ContentSyncMiddleware:
    """
    Pick up hand-edited flat files before the request is served.

    Only active when LANTERN_AUTO_SYNC is on. Compares cheap directory
    fingerprints and runs a full index sync only when they changed.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if getattr(settings, "LANTERN_AUTO_SYNC", False):
            from core.services.index_sync import IndexSyncService

            stats = IndexSyncService().refresh_if_changed()
            if stats is not None and stats.errors:
                for error in stats.errors:
                    logger.warning(f"Content sync: {error}")

        return self.get_response(request)
