"""
Write-through cache invalidation for site content.

Any save or delete of a Site or Block clears the matching cached view,
then announces the change through `content_changed`:

    content_changed.send(sender=Block, instance=block, action="saved")
"""

import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import Signal, receiver

from .cache import invalidate_blocks, invalidate_site
from .models import Block, Site

logger = logging.getLogger(__name__)

# Sent after a cached view was cleared. Arguments: instance, action ("saved"/"deleted")
content_changed = Signal()


def _action(signal) -> str:
    return "deleted" if signal is post_delete else "saved"


@receiver([post_save, post_delete], sender=Site)
def site_changed(sender, instance, signal, **kwargs):
    invalidate_site()
    action = _action(signal)
    logger.debug(f"Site {action}, cache cleared")
    content_changed.send(sender=sender, instance=instance, action=action)


@receiver([post_save, post_delete], sender=Block)
def block_changed(sender, instance, signal, **kwargs):
    invalidate_blocks()
    action = _action(signal)
    logger.debug(f"Block {instance.pk} {action}, cache cleared")
    content_changed.send(sender=sender, instance=instance, action=action)
