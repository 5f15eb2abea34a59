"""URL configuration for Lantern API v1."""

import logging
import time

from django.conf import settings
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.urls import include, path

from core.storage import get_storage_backend

logger = logging.getLogger(__name__)

_server_start_time = time.time()


def health_ping(request):
    """Basic health check for Docker healthcheck."""
    return JsonResponse({"status": "ok"})


def health_status(request):
    """Detailed health status with database and content root checks."""
    status_data = {
        "status": "healthy",
        "version": settings.SPECTACULAR_SETTINGS.get("VERSION", "0.1.0"),
        "timestamp": int(time.time()),
    }

    # Calculate uptime
    uptime_seconds = int(time.time() - _server_start_time)
    hours = uptime_seconds // 3600
    minutes = (uptime_seconds % 3600) // 60
    status_data["uptime"] = f"{hours}h {minutes}m"

    # Check database connection
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        status_data["database"] = "connected"
    except DatabaseError as e:
        logger.error(f"Health check database error: {e}")
        status_data["database"] = "error"
        status_data["status"] = "degraded"

    # Content root must exist
    try:
        backend = get_storage_backend()
        status_data["storage"] = backend.__class__.__name__.replace(
            "StorageBackend", ""
        ).lower()
        status_data["content_root"] = "ok" if backend.exists("") else "missing"
    except (OSError, ValueError) as e:
        logger.error(f"Health check content root error: {e}")
        status_data["content_root"] = "error"
    if status_data["content_root"] != "ok":
        status_data["status"] = "degraded"

    return JsonResponse(status_data)


urlpatterns = [
    # Health (no auth required for Docker healthchecks)
    path("health/", health_ping, name="health"),
    path("health/ping/", health_ping, name="health-ping"),
    path("health/status/", health_status, name="health-status"),
    # Site content (staff only)
    path("cms/", include("cms.api_urls")),
]
