"""Intents accepted by the media service.

The transport layer decodes each request into exactly one of these values,
so the service never sees request objects or uploaded-file wrappers.
"""

from dataclasses import dataclass, field
from typing import Any

from events.domain.models import EventFields
from events.domain.value_objects import MediaReference, MediaUpload


@dataclass(frozen=True)
class CreateEvent:
    fields: EventFields
    flyers: tuple[MediaUpload, ...] = ()
    photos: tuple[MediaUpload, ...] = ()


@dataclass(frozen=True)
class AppendMedia:
    event_id: str
    flyers: tuple[MediaUpload, ...] = ()
    photos: tuple[MediaUpload, ...] = ()


@dataclass(frozen=True)
class OverwriteMedia:
    """Replace both collections with the uploaded files.

    A collection with no uploads is emptied.
    """

    event_id: str
    flyers: tuple[MediaUpload, ...] = ()
    photos: tuple[MediaUpload, ...] = ()


@dataclass(frozen=True)
class DeleteSelectedMedia:
    event_id: str
    flyers_to_delete: frozenset[MediaReference] = frozenset()
    photos_to_delete: frozenset[MediaReference] = frozenset()


@dataclass(frozen=True)
class DeleteEvent:
    event_id: str


@dataclass(frozen=True)
class UpdateEventDetails:
    """Change non-media fields and append any uploaded media."""

    event_id: str
    changes: dict[str, Any] = field(default_factory=dict)
    flyers: tuple[MediaUpload, ...] = ()
    photos: tuple[MediaUpload, ...] = ()


MediaIntent = (
    CreateEvent
    | AppendMedia
    | OverwriteMedia
    | DeleteSelectedMedia
    | DeleteEvent
    | UpdateEventDetails
)
