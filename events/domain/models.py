"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass, replace
from datetime import datetime

from events.domain.value_objects import EventId, MediaReference


@dataclass(frozen=True)
class EventFields:
    """The non-media, caller-editable fields of an Event."""

    title: str
    date: datetime | None
    description: str = ""
    location: str = ""
    registration_link: str = ""
    type: str = ""


UPDATABLE_FIELDS = (
    "title",
    "date",
    "description",
    "location",
    "registration_link",
    "type",
)


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event.

    ``version`` is 0 until the event has been persisted once.
    """

    id: EventId
    title: str
    date: datetime
    description: str = ""
    location: str = ""
    registration_link: str = ""
    type: str = ""
    flyers: tuple[MediaReference, ...] = ()
    photos: tuple[MediaReference, ...] = ()
    version: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def new(cls, fields: EventFields) -> "Event":
        return cls(
            id=EventId.generate(),
            title=fields.title,
            date=fields.date,
            description=fields.description,
            location=fields.location,
            registration_link=fields.registration_link,
            type=fields.type,
        )

    @property
    def media(self) -> tuple[MediaReference, ...]:
        """All references held by the event, flyers first."""
        return self.flyers + self.photos

    def with_changes(self, **changes) -> "Event":
        return replace(self, **changes)


@dataclass(frozen=True)
class EventDetail:
    """An event together with its nearest neighbours by date."""

    event: Event
    previous: Event | None
    next: Event | None
