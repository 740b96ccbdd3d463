"""Event media lifecycle service.

Keeps an event's flyer/photo references and the files on disk in step:

- New uploads are stored before the event is saved, so a saved event never
  references a file that was not written.
- Superseded or removed files are deleted only after the save succeeded, so
  a failed save leaves extra files behind, never dangling references.
- Deleting an event removes its files first and the record last.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from events.domain import (
    Event,
    EventId,
    EventMediaSet,
    MediaCollection,
    MediaReference,
    MediaUpload,
)
from events.domain.errors import DomainError, EventNotFoundError, InvalidEventIdError
from events.domain.intents import (
    AppendMedia,
    CreateEvent,
    DeleteEvent,
    DeleteSelectedMedia,
    MediaIntent,
    OverwriteMedia,
    UpdateEventDetails,
)
from events.services.validation import UploadValidator
from events.stores.interfaces import EventStore, MediaStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaResult:
    """Outcome of an intent: a user-facing message and the resulting event."""

    message: str
    event: Event | None = None


class EventMediaService:
    """Applies media intents to events."""

    def __init__(
        self, events: EventStore, media: MediaStore, validator: UploadValidator
    ) -> None:
        self._events = events
        self._media = media
        self._validator = validator

    def handle(self, intent: MediaIntent) -> MediaResult:
        match intent:
            case CreateEvent():
                return self.create(intent)
            case AppendMedia():
                return self.append(intent)
            case OverwriteMedia():
                return self.overwrite(intent)
            case DeleteSelectedMedia():
                return self.delete_selected(intent)
            case DeleteEvent():
                return self.delete_event(intent)
            case UpdateEventDetails():
                return self.update_details(intent)
        raise TypeError(f"Unsupported intent: {type(intent).__name__}")

    def create(self, intent: CreateEvent) -> MediaResult:
        self._validator.check_fields(intent.fields)
        self._validator.check_media(intent.flyers, intent.photos)

        media = EventMediaSet()
        new_refs = self._store_into(media, intent.flyers, intent.photos)
        event = media.apply_to(Event.new(intent.fields))
        saved = self._save(event, new_refs)
        logger.info(
            "Created event %s with %d flyers and %d photos",
            saved.id,
            len(saved.flyers),
            len(saved.photos),
        )
        return MediaResult("Event created successfully", saved)

    def append(self, intent: AppendMedia) -> MediaResult:
        event = self._load(intent.event_id)
        self._validator.check_media(intent.flyers, intent.photos)

        media = EventMediaSet.from_event(event)
        new_refs = self._store_into(media, intent.flyers, intent.photos)
        saved = self._save(media.apply_to(event), new_refs)
        logger.info("Appended %d files to event %s", len(new_refs), saved.id)
        return MediaResult("Media updated successfully", saved)

    def overwrite(self, intent: OverwriteMedia) -> MediaResult:
        event = self._load(intent.event_id)
        self._validator.check_media(intent.flyers, intent.photos)

        flyer_refs, photo_refs = self._store_both(intent.flyers, intent.photos)
        media = EventMediaSet.from_event(event)
        superseded = media.overwrite(MediaCollection.FLYERS, flyer_refs)
        superseded += media.overwrite(MediaCollection.PHOTOS, photo_refs)

        saved = self._save(media.apply_to(event), flyer_refs + photo_refs)
        self._discard(superseded, saved)
        logger.info(
            "Overwrote media of event %s, %d files replaced", saved.id, len(superseded)
        )
        return MediaResult("Media updated successfully", saved)

    def delete_selected(self, intent: DeleteSelectedMedia) -> MediaResult:
        event = self._load(intent.event_id)

        media = EventMediaSet.from_event(event)
        removed = media.remove_where(MediaCollection.FLYERS, intent.flyers_to_delete)
        removed += media.remove_where(MediaCollection.PHOTOS, intent.photos_to_delete)

        saved = self._save(media.apply_to(event), [])
        self._discard(removed, saved)
        logger.info("Removed %d files from event %s", len(removed), saved.id)
        return MediaResult("Selected media deleted successfully", saved)

    def delete_event(self, intent: DeleteEvent) -> MediaResult:
        event = self._load(intent.event_id)

        for ref in event.media:
            self._media.delete(ref)
        if not self._events.delete(event.id):
            raise EventNotFoundError(intent.event_id)
        logger.info("Deleted event %s and %d files", event.id, len(event.media))
        return MediaResult("Event deleted successfully")

    def update_details(self, intent: UpdateEventDetails) -> MediaResult:
        event = self._load(intent.event_id)
        self._validator.check_changes(intent.changes)
        self._validator.check_media(intent.flyers, intent.photos)

        media = EventMediaSet.from_event(event)
        new_refs = self._store_into(media, intent.flyers, intent.photos)
        updated = media.apply_to(event.with_changes(**intent.changes))
        saved = self._save(updated, new_refs)
        logger.info("Updated event %s", saved.id)
        return MediaResult("Event updated successfully", saved)

    def _load(self, event_id: str) -> Event:
        try:
            parsed = EventId.from_string(event_id)
        except (ValueError, TypeError, AttributeError) as exc:
            raise InvalidEventIdError() from exc
        event = self._events.find_by_id(parsed)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def _store_all(self, uploads: Sequence[MediaUpload]) -> list[MediaReference]:
        refs: list[MediaReference] = []
        try:
            for upload in uploads:
                refs.append(self._media.store(upload))
        except DomainError:
            if refs:
                logger.warning(
                    "Storage failed, leaving %d unreferenced uploads: %s",
                    len(refs),
                    refs,
                )
            raise
        return refs

    def _store_both(
        self, flyers: Sequence[MediaUpload], photos: Sequence[MediaUpload]
    ) -> tuple[list[MediaReference], list[MediaReference]]:
        flyer_refs = self._store_all(flyers)
        try:
            photo_refs = self._store_all(photos)
        except DomainError:
            if flyer_refs:
                logger.warning("Leaving unreferenced flyers: %s", flyer_refs)
            raise
        return flyer_refs, photo_refs

    def _store_into(
        self,
        media: EventMediaSet,
        flyers: Sequence[MediaUpload],
        photos: Sequence[MediaUpload],
    ) -> list[MediaReference]:
        flyer_refs, photo_refs = self._store_both(flyers, photos)
        media.append(MediaCollection.FLYERS, flyer_refs)
        media.append(MediaCollection.PHOTOS, photo_refs)
        return flyer_refs + photo_refs

    def _save(self, event: Event, new_refs: Sequence[MediaReference]) -> Event:
        try:
            return self._events.save(event)
        except DomainError:
            if new_refs:
                logger.warning(
                    "Save of event %s failed, leaving %d unreferenced uploads",
                    event.id,
                    len(new_refs),
                )
            raise

    def _discard(self, refs: Iterable[MediaReference], saved: Event) -> None:
        still_referenced = set(saved.media)
        for ref in dict.fromkeys(refs):
            if ref not in still_referenced:
                self._media.delete(ref)
