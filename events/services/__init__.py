"""Service construction for the default Django-backed stores."""

from events.config import MediaStoreConfig
from events.services.event_service import EventService
from events.services.media_service import EventMediaService, MediaResult
from events.services.validation import UploadValidator
from events.stores.django_store import DjangoEventStore
from events.stores.file_store import FileSystemMediaStore


def build_event_service() -> EventService:
    return EventService(DjangoEventStore())


def build_upload_validator(config: MediaStoreConfig | None = None) -> UploadValidator:
    return UploadValidator(config or MediaStoreConfig.from_settings())


def build_media_service(config: MediaStoreConfig | None = None) -> EventMediaService:
    config = config or MediaStoreConfig.from_settings()
    return EventMediaService(
        events=DjangoEventStore(),
        media=FileSystemMediaStore(config),
        validator=build_upload_validator(config),
    )


__all__ = [
    "EventMediaService",
    "EventService",
    "MediaResult",
    "UploadValidator",
    "build_event_service",
    "build_media_service",
    "build_upload_validator",
]
