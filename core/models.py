"""Abstract base models shared by Lantern apps."""

from django.db import models


class AbstractBaseModel(models.Model):
    """Adds created/updated timestamps to every concrete model."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
