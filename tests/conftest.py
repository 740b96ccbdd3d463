"""Pytest configuration and shared fixtures."""

import itertools
from dataclasses import replace
from datetime import datetime

import pytest
from rest_framework.test import APIClient

from events.config import MediaStoreConfig
from events.domain import Event, EventId, MediaReference, MediaUpload
from events.domain.dates import start_of_utc_day, utc_year_bounds
from events.domain.errors import (
    ConcurrentModificationError,
    EventNotFoundError,
    PersistenceError,
    StorageIOError,
)
from events.services.media_service import EventMediaService
from events.services.validation import UploadValidator
from events.stores.file_store import FileSystemMediaStore
from events.stores.interfaces import EventStore, MediaStore


class InMemoryMediaStore(MediaStore):
    """MediaStore fake that records every call in a shared journal."""

    def __init__(self, journal: list) -> None:
        self.files: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_after: int | None = None
        self._journal = journal
        self._stored = 0
        self._counter = itertools.count(1)

    def seed(self, *refs: str) -> None:
        for ref in refs:
            self.files[ref] = b"seed"

    def store(self, upload: MediaUpload) -> MediaReference:
        if self.fail_after is not None and self._stored >= self.fail_after:
            raise StorageIOError()
        ref = MediaReference(f"assets/{next(self._counter)}_{upload.filename}")
        self.files[ref] = upload.content
        self._stored += 1
        self._journal.append(("store", ref))
        return ref

    def exists(self, ref: MediaReference) -> bool:
        return ref in self.files

    def delete(self, ref: MediaReference) -> None:
        self.files.pop(ref, None)
        self.deleted.append(ref)
        self._journal.append(("delete", ref))

    def list_references(self) -> list[MediaReference]:
        return sorted(self.files)


class InMemoryEventStore(EventStore):
    """EventStore fake with version checks and failure injection."""

    def __init__(self, journal: list, media: MediaStore) -> None:
        self.events: dict[EventId, Event] = {}
        self.fail_save = False
        self.missing_at_save: list[str] = []
        self._journal = journal
        self._media = media

    def add(self, event: Event) -> Event:
        stored = replace(event, version=max(event.version, 1))
        self.events[stored.id] = stored
        return stored

    def find_by_id(self, event_id: EventId) -> Event | None:
        return self.events.get(event_id)

    def save(self, event: Event) -> Event:
        if self.fail_save:
            raise PersistenceError()
        if event.version:
            current = self.events.get(event.id)
            if current is None:
                raise EventNotFoundError(str(event.id))
            if current.version != event.version:
                raise ConcurrentModificationError(str(event.id))
        self.missing_at_save.extend(
            ref for ref in event.media if not self._media.exists(ref)
        )
        saved = replace(event, version=event.version + 1)
        self.events[saved.id] = saved
        self._journal.append(("save", str(saved.id)))
        return saved

    def delete(self, event_id: EventId) -> bool:
        self._journal.append(("delete-record", str(event_id)))
        return self.events.pop(event_id, None) is not None

    def find_upcoming(self, now: datetime) -> list[Event]:
        start = start_of_utc_day(now)
        return sorted(
            (e for e in self.events.values() if e.date >= start), key=lambda e: e.date
        )

    def find_past_in_year(self, year: int, now: datetime) -> list[Event]:
        year_start, year_end = utc_year_bounds(year)
        cutoff = min(year_end, start_of_utc_day(now))
        return sorted(
            (e for e in self.events.values() if year_start <= e.date < cutoff),
            key=lambda e: e.date,
            reverse=True,
        )

    def find_neighbors(self, event: Event) -> tuple[Event | None, Event | None]:
        before = [e for e in self.events.values() if e.date < event.date]
        after = [e for e in self.events.values() if e.date > event.date]
        return (
            max(before, key=lambda e: e.date, default=None),
            min(after, key=lambda e: e.date, default=None),
        )

    def all_references(self) -> set[MediaReference]:
        return {ref for event in self.events.values() for ref in event.media}


@pytest.fixture
def journal() -> list:
    return []


@pytest.fixture
def media_store(journal) -> InMemoryMediaStore:
    return InMemoryMediaStore(journal)


@pytest.fixture
def event_store(journal, media_store) -> InMemoryEventStore:
    return InMemoryEventStore(journal, media_store)


@pytest.fixture
def media_config(tmp_path) -> MediaStoreConfig:
    return MediaStoreConfig(root=tmp_path / "media")


@pytest.fixture
def media_service(event_store, media_store, media_config) -> EventMediaService:
    return EventMediaService(
        events=event_store, media=media_store, validator=UploadValidator(media_config)
    )


@pytest.fixture
def disk_store(media_config) -> FileSystemMediaStore:
    return FileSystemMediaStore(media_config)


@pytest.fixture
def disk_event_store(journal, disk_store) -> InMemoryEventStore:
    return InMemoryEventStore(journal, disk_store)


@pytest.fixture
def disk_media_service(disk_event_store, disk_store, media_config) -> EventMediaService:
    """Service over real files on disk and in-memory event records."""
    return EventMediaService(
        events=disk_event_store, media=disk_store, validator=UploadValidator(media_config)
    )


@pytest.fixture
def png():
    def make(name: str = "flyer.png", content: bytes = b"\x89PNG data") -> MediaUpload:
        return MediaUpload(filename=name, content=content, content_type="image/png")

    return make


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "public"
    return settings.MEDIA_ROOT


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def auth_client(db, django_user_model, media_root) -> APIClient:
    user = django_user_model.objects.create_user(username="editor", password="secret")
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()
