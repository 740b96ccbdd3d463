"""Django ORM implementation of the EventStore."""

import logging
from datetime import datetime

from django.db import DatabaseError, transaction

from events import models
from events.domain import Event, EventId, MediaReference
from events.domain.dates import start_of_utc_day, utc_year_bounds
from events.domain.errors import (
    ConcurrentModificationError,
    EventNotFoundError,
    PersistenceError,
)
from events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


def _to_domain(row: models.Event) -> Event:
    return Event(
        id=EventId(value=row.id),
        title=row.title,
        date=row.date,
        description=row.description,
        location=row.location,
        registration_link=row.registration_link,
        type=row.type,
        flyers=tuple(row.flyers or ()),
        photos=tuple(row.photos or ()),
        version=row.version,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _copy_fields(event: Event, row: models.Event) -> None:
    row.title = event.title
    row.date = event.date
    row.description = event.description
    row.location = event.location
    row.registration_link = event.registration_link
    row.type = event.type
    row.flyers = list(event.flyers)
    row.photos = list(event.photos)


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    def find_by_id(self, event_id: EventId) -> Event | None:
        row = models.Event.objects.filter(id=event_id.value).first()
        return _to_domain(row) if row is not None else None

    def save(self, event: Event) -> Event:
        try:
            if event.version == 0:
                return self._insert(event)
            return self._replace(event)
        except DatabaseError as exc:
            logger.exception("Saving event %s failed", event.id)
            raise PersistenceError() from exc

    def _insert(self, event: Event) -> Event:
        row = models.Event(id=event.id.value, version=1)
        _copy_fields(event, row)
        row.save(force_insert=True)
        return _to_domain(row)

    def _replace(self, event: Event) -> Event:
        with transaction.atomic():
            row = (
                models.Event.objects.select_for_update()
                .filter(id=event.id.value)
                .first()
            )
            if row is None:
                raise EventNotFoundError(str(event.id))
            if row.version != event.version:
                logger.warning(
                    "Version conflict on event %s: expected %s, found %s",
                    event.id,
                    event.version,
                    row.version,
                )
                raise ConcurrentModificationError(str(event.id))
            _copy_fields(event, row)
            row.version += 1
            row.save()
        return _to_domain(row)

    def delete(self, event_id: EventId) -> bool:
        try:
            deleted, _ = models.Event.objects.filter(id=event_id.value).delete()
        except DatabaseError as exc:
            logger.exception("Deleting event %s failed", event_id)
            raise PersistenceError("Unable to delete event") from exc
        return deleted > 0

    def find_upcoming(self, now: datetime) -> list[Event]:
        rows = models.Event.objects.filter(date__gte=start_of_utc_day(now)).order_by(
            "date"
        )
        return [_to_domain(row) for row in rows]

    def find_past_in_year(self, year: int, now: datetime) -> list[Event]:
        year_start, year_end = utc_year_bounds(year)
        rows = (
            models.Event.objects.filter(date__gte=year_start, date__lt=year_end)
            .filter(date__lt=start_of_utc_day(now))
            .order_by("-date")
        )
        return [_to_domain(row) for row in rows]

    def find_neighbors(self, event: Event) -> tuple[Event | None, Event | None]:
        previous = (
            models.Event.objects.filter(date__lt=event.date).order_by("-date").first()
        )
        following = (
            models.Event.objects.filter(date__gt=event.date).order_by("date").first()
        )
        return (
            _to_domain(previous) if previous is not None else None,
            _to_domain(following) if following is not None else None,
        )

    def all_references(self) -> set[MediaReference]:
        refs: set[MediaReference] = set()
        for flyers, photos in models.Event.objects.values_list("flyers", "photos"):
            refs.update(flyers or ())
            refs.update(photos or ())
        return refs
