"""CMS app configuration."""
from django.apps import AppConfig


class CmsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cms"
    verbose_name = "Site content"

    def ready(self):
        """Import signal handlers when app is ready."""
        import cms.signals  # noqa
