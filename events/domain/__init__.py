from events.domain.media_set import EventMediaSet
from events.domain.models import Event, EventDetail, EventFields
from events.domain.value_objects import (
    EventId,
    MediaCollection,
    MediaReference,
    MediaUpload,
)

__all__ = [
    "Event",
    "EventDetail",
    "EventFields",
    "EventMediaSet",
    "EventId",
    "MediaCollection",
    "MediaReference",
    "MediaUpload",
]
