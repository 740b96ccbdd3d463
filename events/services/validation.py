"""Input checks run before the media service writes anything."""

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from events.config import MediaStoreConfig
from events.domain import EventFields, MediaCollection, MediaUpload
from events.domain.errors import ValidationError
from events.domain.models import UPDATABLE_FIELDS


class UploadValidator:
    """Validates event fields and uploaded payloads against MediaStoreConfig."""

    def __init__(self, config: MediaStoreConfig) -> None:
        self._config = config

    def _limit(self, collection: MediaCollection) -> int:
        if collection is MediaCollection.FLYERS:
            return self._config.max_flyers
        return self._config.max_photos

    def check_sizes(
        self, collection: MediaCollection, sizes: Sequence[tuple[str, int]]
    ) -> None:
        """Check file count and per-file size from (filename, size) pairs.

        Needs no file content, so transports can call it before reading uploads.
        """
        limit = self._limit(collection)
        if len(sizes) > limit:
            raise ValidationError(
                f"Too many {collection.value}: at most {limit} files per request"
            )
        for filename, size in sizes:
            if size == 0:
                raise ValidationError(f"Uploaded file {filename!r} is empty")
            if size > self._config.max_upload_bytes:
                raise ValidationError(
                    f"Uploaded file {filename!r} exceeds "
                    f"{self._config.max_upload_bytes} bytes"
                )

    def check_uploads(
        self, collection: MediaCollection, uploads: Sequence[MediaUpload]
    ) -> None:
        self.check_sizes(collection, [(u.filename, u.size) for u in uploads])
        for upload in uploads:
            if upload.content_type not in self._config.allowed_content_types:
                raise ValidationError(
                    f"Unsupported file type {upload.content_type!r}"
                )

    def check_media(
        self, flyers: Sequence[MediaUpload], photos: Sequence[MediaUpload]
    ) -> None:
        self.check_uploads(MediaCollection.FLYERS, flyers)
        self.check_uploads(MediaCollection.PHOTOS, photos)

    def check_fields(self, fields: EventFields) -> None:
        if not fields.title or not fields.title.strip():
            raise ValidationError("Title is required")
        if not isinstance(fields.date, datetime):
            raise ValidationError("Date is required")

    def check_changes(self, changes: Mapping[str, Any]) -> None:
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
        if "title" in changes and not str(changes["title"] or "").strip():
            raise ValidationError("Title cannot be blank")
        if "date" in changes and not isinstance(changes["date"], datetime):
            raise ValidationError("Date must be a valid datetime")
