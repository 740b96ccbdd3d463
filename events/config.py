"""Media configuration for the events app.

Built once from Django settings and passed explicitly to the media store
and the upload validator.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Self

from django.conf import settings

DEFAULT_ALLOWED_CONTENT_TYPES = frozenset(
    {
        "image/jpeg",
        "image/png",
        "image/webp",
        "image/gif",
        "application/pdf",
    }
)
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_MAX_FLYERS = 20
DEFAULT_MAX_PHOTOS = 50


@dataclass(frozen=True)
class MediaStoreConfig:
    """Where event media lives and what uploads are accepted."""

    root: Path
    upload_dir: str = "assets"
    allowed_content_types: frozenset[str] = DEFAULT_ALLOWED_CONTENT_TYPES
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    max_flyers: int = DEFAULT_MAX_FLYERS
    max_photos: int = DEFAULT_MAX_PHOTOS

    @classmethod
    def from_settings(cls) -> Self:
        options = getattr(settings, "EVENTS_MEDIA", {})
        return cls(
            root=Path(options.get("ROOT", settings.MEDIA_ROOT)),
            upload_dir=options.get("UPLOAD_DIR", "assets"),
            allowed_content_types=frozenset(
                options.get("ALLOWED_CONTENT_TYPES", DEFAULT_ALLOWED_CONTENT_TYPES)
            ),
            max_upload_bytes=int(
                options.get("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)
            ),
            max_flyers=int(options.get("MAX_FLYERS", DEFAULT_MAX_FLYERS)),
            max_photos=int(options.get("MAX_PHOTOS", DEFAULT_MAX_PHOTOS)),
        )
