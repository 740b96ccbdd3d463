"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import Enum
from typing import NewType, Self
from uuid import UUID, uuid4

MediaReference = NewType("MediaReference", str)


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def generate(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


class MediaCollection(Enum):
    """Selector for one of an event's two media collections."""

    FLYERS = "flyers"
    PHOTOS = "photos"


@dataclass(frozen=True)
class MediaUpload:
    """A decoded file payload, independent of the transport that carried it."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)
