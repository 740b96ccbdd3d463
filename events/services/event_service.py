"""Event service - read-side business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from datetime import datetime

from events.domain import Event, EventDetail, EventId
from events.domain.dates import utc_now
from events.domain.errors import EventNotFoundError, InvalidEventIdError
from events.stores.interfaces import EventStore


class EventService:
    """Service for event listing and navigation."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def get_event(self, event_id: str) -> EventDetail:
        """Return an event with its previous and next events by date.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        try:
            parsed = EventId.from_string(event_id)
        except (ValueError, TypeError, AttributeError) as exc:
            raise InvalidEventIdError() from exc

        event = self._store.find_by_id(parsed)
        if event is None:
            raise EventNotFoundError(event_id)
        previous, following = self._store.find_neighbors(event)
        return EventDetail(event=event, previous=previous, next=following)

    def list_upcoming(self, now: datetime | None = None) -> list[Event]:
        """Return events from today (UTC) onwards, soonest first."""
        return self._store.find_upcoming(now or utc_now())

    def list_past(
        self, year: int | None = None, now: datetime | None = None
    ) -> list[Event]:
        """Return the given year's events before today (UTC), latest first.

        ``year`` defaults to the current UTC year.
        """
        now = now or utc_now()
        return self._store.find_past_in_year(year if year is not None else now.year, now)
