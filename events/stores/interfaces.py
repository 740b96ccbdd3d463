"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from events.domain import Event, EventId, MediaReference, MediaUpload


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def find_by_id(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def save(self, event: Event) -> Event:
        """Insert or fully replace an event and return the persisted copy.

        An event with version 0 is inserted. Otherwise the stored row is
        replaced only if its version still equals ``event.version``.

        Raises:
            ConcurrentModificationError: If the stored version moved on.
            EventNotFoundError: If the event was deleted in the meantime.
            PersistenceError: On any other database failure.
        """
        ...

    @abstractmethod
    def delete(self, event_id: EventId) -> bool:
        """Delete the event record. Never touches media files."""
        ...

    @abstractmethod
    def find_upcoming(self, now: datetime) -> list[Event]:
        """Return events on or after the start of now's UTC day, ascending."""
        ...

    @abstractmethod
    def find_past_in_year(self, year: int, now: datetime) -> list[Event]:
        """Return events in ``year`` before the start of now's UTC day, descending."""
        ...

    @abstractmethod
    def find_neighbors(self, event: Event) -> tuple[Event | None, Event | None]:
        """Return the nearest events strictly before and strictly after event.date."""
        ...

    @abstractmethod
    def all_references(self) -> set[MediaReference]:
        """Return every media reference held by any event."""
        ...


class MediaStore(ABC):
    """Interface for the files backing media references."""

    @abstractmethod
    def store(self, upload: MediaUpload) -> MediaReference:
        """Persist a payload under a fresh reference.

        Raises:
            StorageIOError: If the file cannot be written.
        """
        ...

    @abstractmethod
    def exists(self, ref: MediaReference) -> bool:
        """Check whether the file for ref exists. Never raises."""
        ...

    @abstractmethod
    def delete(self, ref: MediaReference) -> None:
        """Remove the file for ref. Missing files and I/O failures are logged, not raised."""
        ...

    @abstractmethod
    def list_references(self) -> list[MediaReference]:
        """Return the references of every stored file."""
        ...
