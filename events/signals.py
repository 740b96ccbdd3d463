"""Django signals for cache invalidation."""

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from events.cache import invalidate_all
from events.models import Event


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate event caches once the write that changed an event commits.

    Invalidating earlier would let a concurrent reader cache the old row
    under the new generation.
    """
    transaction.on_commit(invalidate_all)
