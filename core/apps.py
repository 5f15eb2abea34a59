import logging
from pathlib import Path

from django.apps import AppConfig
from django.core.exceptions import ImproperlyConfigured
from django.db.models.signals import post_delete, post_save

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    name = "core"
    verbose_name = "Lantern core"

    def ready(self):
        """Validate content settings and connect the flat-file write-through."""
        from django.conf import settings

        from .flatfile import delete_flatfile_on_delete, write_flatfile_on_save

        root = getattr(settings, "LANTERN_CONTENT_ROOT", None)
        if not root:
            raise ImproperlyConfigured("LANTERN_CONTENT_ROOT must be set")
        root = Path(root)
        if root.exists() and not root.is_dir():
            raise ImproperlyConfigured(
                f"LANTERN_CONTENT_ROOT must be a directory, got file: {root}"
            )

        timeout = getattr(settings, "LANTERN_CACHE_TIMEOUT", 3600)
        if not isinstance(timeout, int) or timeout < 0:
            raise ImproperlyConfigured(
                f"LANTERN_CACHE_TIMEOUT must be a non-negative integer, got {timeout!r}"
            )

        packages = getattr(settings, "LANTERN_BLOCK_PACKAGES", [])
        if isinstance(packages, str) or not all(isinstance(p, str) for p in packages):
            raise ImproperlyConfigured(
                "LANTERN_BLOCK_PACKAGES must be a list of dotted package names"
            )

        post_save.connect(write_flatfile_on_save, dispatch_uid="lantern_flatfile_save")
        post_delete.connect(delete_flatfile_on_delete, dispatch_uid="lantern_flatfile_delete")

        logger.debug(f"Content root: {root}")
