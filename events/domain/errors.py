"""Domain error codes for the events module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    STORAGE_IO = "STORAGE_IO"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class ValidationError(DomainError):
    """Raised when input is rejected before any mutation takes place."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILED, message=message)


class StorageIOError(DomainError):
    """Raised when a media file cannot be written."""

    def __init__(self, message: str = "Unable to store uploaded file") -> None:
        super().__init__(code=ErrorCode.STORAGE_IO, message=message)


class PersistenceError(DomainError):
    """Raised when the event record cannot be saved or deleted."""

    def __init__(self, message: str = "Unable to persist event") -> None:
        super().__init__(code=ErrorCode.PERSISTENCE_FAILED, message=message)


class ConcurrentModificationError(DomainError):
    """Raised when the event changed between load and save."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.CONCURRENT_MODIFICATION,
            message="Event was modified by another request",
        )
        self.event_id = event_id
