"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Event(models.Model):
    """Persistence model for events.

    Flyers and photos are ordered lists of storage-relative file names.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    date = models.DateTimeField()
    description = models.TextField(blank=True, default="")
    location = models.CharField(max_length=255, blank=True, default="")
    registration_link = models.CharField(max_length=500, blank=True, default="")
    type = models.CharField(max_length=100, blank=True, default="")
    flyers = models.JSONField(default=list, blank=True)
    photos = models.JSONField(default=list, blank=True)
    version = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date"]
        indexes = [
            models.Index(fields=["date"], name="events_event_date_idx"),
        ]

    def __str__(self) -> str:
        return self.title
