"""Integration tests for the events HTTP API.

These exercise the full stack: DRF views, the media service, the Django
store and files written under a temporary MEDIA_ROOT.
Run with: pytest tests/test_event_catalog.py -v
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils.datastructures import MultiValueDict
from rest_framework.test import APIClient

from events.config import MediaStoreConfig
from events.domain import Event, EventFields, EventId, MediaCollection, MediaUpload
from events.domain.errors import ValidationError
from events.handlers.views import _uploads
from events.services.validation import UploadValidator
from events.stores.django_store import DjangoEventStore


def image(name: str = "flyer.png") -> SimpleUploadedFile:
    return SimpleUploadedFile(name, b"\x89PNG fake image", content_type="image/png")


@pytest.fixture
def create_event(auth_client: APIClient):
    def create(title: str = "Spring Gala", date: str = "2024-04-20T18:00:00Z", **files):
        payload = {"title": title, "date": date, "location": "Main Hall", **files}
        response = auth_client.post("/api/events/create", payload, format="multipart")
        assert response.status_code == 201, response.data
        return response.data

    return create


def stored(media_root: Path, ref: str) -> bool:
    return (Path(media_root) / ref).exists()


def utc_today_at(hour: int) -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(hour=hour, minute=0, second=0, microsecond=0)


@pytest.mark.django_db
class TestCreateEvent:
    """Tests for POST /api/events/create"""

    def test_create_with_media(self, create_event, media_root):
        data = create_event(flyers=[image("a.png"), image("b.png")], photos=[image("c.png")])
        assert data["title"] == "Spring Gala"
        assert data["registrationLink"] == ""
        assert len(data["flyers"]) == 2
        assert len(data["photos"]) == 1
        for ref in data["flyers"] + data["photos"]:
            assert stored(media_root, ref)

    def test_create_requires_authentication(self, api_client, media_root):
        response = api_client.post(
            "/api/events/create",
            {"title": "Gala", "date": "2024-04-20T18:00:00Z"},
            format="multipart",
        )
        assert response.status_code in (401, 403)

    def test_create_missing_title(self, auth_client):
        response = auth_client.post(
            "/api/events/create", {"date": "2024-04-20T18:00:00Z"}, format="multipart"
        )
        assert response.status_code == 400
        assert response.data["error"]["code"] == "VALIDATION_FAILED"

    def test_create_rejects_unsupported_file(self, auth_client, media_root):
        bad = SimpleUploadedFile("run.sh", b"#!/bin/sh", content_type="text/x-shellscript")
        response = auth_client.post(
            "/api/events/create",
            {"title": "Gala", "date": "2024-04-20T18:00:00Z", "flyers": [bad]},
            format="multipart",
        )
        assert response.status_code == 400
        assert not Path(media_root).exists() or not any(Path(media_root).rglob("*.sh"))

    def test_create_rejects_oversized_file(self, auth_client, media_root, settings):
        settings.EVENTS_MEDIA = {**settings.EVENTS_MEDIA, "MAX_UPLOAD_BYTES": 8}
        response = auth_client.post(
            "/api/events/create",
            {"title": "Gala", "date": "2024-04-20T18:00:00Z", "flyers": [image()]},
            format="multipart",
        )
        assert response.status_code == 400
        assert response.data["error"]["code"] == "VALIDATION_FAILED"
        assert not Path(media_root).exists() or not any(Path(media_root).rglob("*.png"))

    def test_create_with_long_filename(self, create_event, media_root):
        data = create_event(flyers=[image("a" * 240 + ".png")])
        ref = data["flyers"][0]
        assert ref.endswith(".png")
        assert len(ref.rsplit("/", 1)[-1].encode()) <= 255
        assert stored(media_root, ref)


@pytest.mark.django_db
class TestUploadMedia:
    """Tests for PATCH /api/events/{id}/upload-media"""

    def test_append(self, auth_client, create_event, media_root):
        event = create_event(flyers=[image("a.png")])
        response = auth_client.patch(
            f"/api/events/{event['id']}/upload-media",
            {"action": "append", "flyers": [image("b.png")]},
            format="multipart",
        )
        assert response.status_code == 200
        assert response.data["message"] == "Media updated successfully"
        flyers = response.data["event"]["flyers"]
        assert flyers[0] == event["flyers"][0]
        assert len(flyers) == 2

    def test_default_action_appends(self, auth_client, create_event):
        event = create_event(photos=[image("a.png")])
        response = auth_client.patch(
            f"/api/events/{event['id']}/upload-media",
            {"photos": [image("b.png")]},
            format="multipart",
        )
        assert len(response.data["event"]["photos"]) == 2

    def test_overwrite_deletes_previous_files(self, auth_client, create_event, media_root):
        event = create_event(flyers=[image("old.png")], photos=[image("old-photo.png")])
        response = auth_client.patch(
            f"/api/events/{event['id']}/upload-media",
            {"action": "overwrite", "flyers": [image("new.png")]},
            format="multipart",
        )
        assert response.status_code == 200
        updated = response.data["event"]
        assert len(updated["flyers"]) == 1
        assert updated["photos"] == []
        assert stored(media_root, updated["flyers"][0])
        for ref in event["flyers"] + event["photos"]:
            assert not stored(media_root, ref)

    def test_unknown_action(self, auth_client, create_event):
        event = create_event()
        response = auth_client.patch(
            f"/api/events/{event['id']}/upload-media",
            {"action": "replace"},
            format="multipart",
        )
        assert response.status_code == 400

    def test_event_not_found(self, auth_client):
        response = auth_client.patch(
            f"/api/events/{EventId.generate()}/upload-media",
            {"flyers": [image()]},
            format="multipart",
        )
        assert response.status_code == 404
        assert response.data["error"]["message"] == "Event not found"


@pytest.mark.django_db
class TestDeleteMedia:
    """Tests for PATCH /api/events/{id}/delete-media"""

    def test_delete_selected(self, auth_client, create_event, media_root):
        event = create_event(flyers=[image("a.png"), image("b.png")], photos=[image("c.png")])
        doomed = event["flyers"][0]
        response = auth_client.patch(
            f"/api/events/{event['id']}/delete-media",
            {"flyersToDelete": [doomed], "photosToDelete": []},
            format="json",
        )
        assert response.status_code == 200
        assert response.data["message"] == "Selected media deleted successfully"
        assert response.data["event"]["flyers"] == event["flyers"][1:]
        assert response.data["event"]["photos"] == event["photos"]
        assert not stored(media_root, doomed)
        assert stored(media_root, event["flyers"][1])

    def test_unlisted_reference_is_ignored(self, auth_client, create_event, media_root):
        event = create_event(flyers=[image("a.png")])
        response = auth_client.patch(
            f"/api/events/{event['id']}/delete-media",
            {"flyersToDelete": ["assets/someone-elses.png"]},
            format="json",
        )
        assert response.status_code == 200
        assert response.data["event"]["flyers"] == event["flyers"]

    def test_stale_write_conflicts_and_keeps_files(
        self, auth_client, create_event, media_root, monkeypatch
    ):
        """A request that loaded an outdated version gets 409 and deletes nothing."""
        event = create_event(flyers=[image("a.png"), image("b.png")])
        store = DjangoEventStore()
        stale = store.find_by_id(EventId.from_string(event["id"]))
        store.save(stale.with_changes(title="Renamed elsewhere"))
        monkeypatch.setattr(DjangoEventStore, "find_by_id", lambda self, event_id: stale)

        response = auth_client.patch(
            f"/api/events/{event['id']}/delete-media",
            {"flyersToDelete": [event["flyers"][0]]},
            format="json",
        )
        assert response.status_code == 409
        assert response.data["error"]["code"] == "CONCURRENT_MODIFICATION"
        assert stored(media_root, event["flyers"][0])

        monkeypatch.undo()
        current = store.find_by_id(stale.id)
        assert current.title == "Renamed elsewhere"
        assert list(current.flyers) == event["flyers"]


@pytest.mark.django_db
class TestUpdateEvent:
    """Tests for PATCH /api/events/update/{id}"""

    def test_update_fields_and_append(self, auth_client, create_event):
        event = create_event(flyers=[image("a.png")])
        response = auth_client.patch(
            f"/api/events/update/{event['id']}",
            {"title": "Summer Gala", "registrationLink": "https://example.org/r", "flyers": [image("b.png")]},
            format="multipart",
        )
        assert response.status_code == 200
        updated = response.data["event"]
        assert updated["title"] == "Summer Gala"
        assert updated["registrationLink"] == "https://example.org/r"
        assert updated["location"] == "Main Hall"
        assert len(updated["flyers"]) == 2
        assert updated["version"] == event["version"] + 1

    def test_update_invalid_date(self, auth_client, create_event):
        event = create_event()
        response = auth_client.patch(
            f"/api/events/update/{event['id']}", {"date": "not a date"}, format="multipart"
        )
        assert response.status_code == 400


@pytest.mark.django_db
class TestDeleteEvent:
    """Tests for DELETE /api/events/{id}"""

    def test_delete_removes_record_and_files(self, auth_client, create_event, media_root):
        event = create_event(flyers=[image("f1.png"), image("f2.png")], photos=[image("p1.png")])
        response = auth_client.delete(f"/api/events/{event['id']}")
        assert response.status_code == 200
        assert response.data == {"message": "Event deleted successfully"}
        for ref in event["flyers"] + event["photos"]:
            assert not stored(media_root, ref)
        assert DjangoEventStore().find_by_id(EventId.from_string(event["id"])) is None

    def test_delete_not_found(self, auth_client):
        response = auth_client.delete(f"/api/events/{EventId.generate()}")
        assert response.status_code == 404


@pytest.mark.django_db
class TestEventDetail:
    """Tests for GET /api/events/get/{id}"""

    def test_get_event_with_neighbors(self, api_client, create_event):
        jan = create_event("January", "2024-01-10T12:00:00Z")
        feb = create_event("February", "2024-02-05T12:00:00Z")
        mar = create_event("March", "2024-03-01T12:00:00Z")

        response = api_client.get(f"/api/events/get/{feb['id']}")
        assert response.status_code == 200
        assert response.data["event"]["title"] == "February"
        assert response.data["previousEvent"]["id"] == jan["id"]
        assert response.data["nextEvent"]["id"] == mar["id"]
        assert set(response.data["nextEvent"]) == {"id", "title", "date"}

    def test_get_event_not_found(self, api_client):
        response = api_client.get(f"/api/events/get/{EventId.generate()}")
        assert response.status_code == 404

    def test_get_event_invalid_id_format(self, api_client):
        response = api_client.get("/api/events/get/not-a-uuid")
        assert response.status_code == 400
        assert response.data["error"]["code"] == "INVALID_EVENT_ID"


@pytest.mark.django_db
class TestListings:
    """Tests for GET /api/events/upcoming and /api/events/past"""

    @pytest.fixture
    def seeded(self):
        store = DjangoEventStore()
        today = utc_today_at(0)

        def add(title: str, date: datetime) -> Event:
            return store.save(Event.new(EventFields(title=title, date=date)))

        return {
            "later_today": add("Later today", today + timedelta(hours=23)),
            "next_week": add("Next week", today + timedelta(days=7)),
            "yesterday": add("Yesterday", today - timedelta(minutes=1)),
        }

    def test_upcoming(self, api_client, seeded):
        response = api_client.get("/api/events/upcoming")
        assert response.status_code == 200
        assert [e["title"] for e in response.data] == ["Later today", "Next week"]

    def test_past_for_year(self, api_client, seeded):
        year = seeded["yesterday"].date.year
        response = api_client.get("/api/events/past", {"year": year})
        assert response.status_code == 200
        assert [e["title"] for e in response.data] == ["Yesterday"]

    def test_past_for_other_year_is_empty(self, api_client, seeded):
        response = api_client.get("/api/events/past", {"year": 1999})
        assert response.data == []

    def test_past_invalid_year(self, api_client):
        response = api_client.get("/api/events/past", {"year": "soon"})
        assert response.status_code == 400


class Unreadable(SimpleUploadedFile):
    def read(self, *args, **kwargs):
        raise AssertionError(f"{self.name} was read")


class TestUploadDecoding:
    """Upload count and size are checked before any file content is read."""

    @pytest.fixture
    def validator(self, tmp_path) -> UploadValidator:
        return UploadValidator(
            MediaStoreConfig(root=tmp_path, max_upload_bytes=16, max_photos=2)
        )

    def request_with(self, field: str, files: list) -> SimpleNamespace:
        return SimpleNamespace(FILES=MultiValueDict({field: files}))

    def test_oversized_file_is_not_read(self, validator):
        big = Unreadable("big.png", b"x" * 64, content_type="image/png")
        with pytest.raises(ValidationError):
            _uploads(self.request_with("photos", [big]), MediaCollection.PHOTOS, validator)

    def test_too_many_files_are_not_read(self, validator):
        files = [Unreadable(f"{i}.png", b"x", content_type="image/png") for i in range(3)]
        with pytest.raises(ValidationError):
            _uploads(self.request_with("photos", files), MediaCollection.PHOTOS, validator)

    def test_accepted_files_are_read(self, validator):
        small = SimpleUploadedFile("small.png", b"tiny", content_type="image/png")
        uploads = _uploads(
            self.request_with("photos", [small]), MediaCollection.PHOTOS, validator
        )
        assert uploads == (MediaUpload("small.png", b"tiny", "image/png"),)
