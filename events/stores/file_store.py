"""Filesystem-backed MediaStore built on Django's FileSystemStorage."""

import logging
import posixpath
import time
from collections.abc import Callable

from django.core.exceptions import SuspiciousFileOperation
from django.core.files.base import ContentFile
from django.core.files.storage import FileSystemStorage

from events.config import MediaStoreConfig
from events.domain import MediaReference, MediaUpload
from events.domain.errors import StorageIOError
from events.stores.interfaces import MediaStore

logger = logging.getLogger(__name__)

# Most filesystems cap a path component at 255 bytes. Leave room for the
# timestamp prefix and the suffix the storage adds on name collisions.
MAX_NAME_BYTES = 200
MAX_EXTENSION_BYTES = 16


def fit_filename(name: str, limit: int = MAX_NAME_BYTES) -> str:
    """Shorten name to at most ``limit`` UTF-8 bytes, keeping a short extension."""
    if len(name.encode()) <= limit:
        return name
    stem, ext = posixpath.splitext(name)
    if len(ext.encode()) > MAX_EXTENSION_BYTES:
        stem, ext = name, ""
    budget = limit - len(ext.encode())
    stem = stem.encode()[:budget].decode("utf-8", "ignore") or "upload"
    return stem + ext


class FileSystemMediaStore(MediaStore):
    """Stores each upload as ``<upload_dir>/<epoch millis>_<name>`` under config.root.

    References are storage-relative names. The storage backend picks a
    different name when one is already taken, so references are never reused.
    """

    def __init__(
        self, config: MediaStoreConfig, clock: Callable[[], float] = time.time
    ) -> None:
        self._config = config
        self._clock = clock
        self._storage = FileSystemStorage(location=str(config.root))

    def _target_name(self, filename: str) -> str:
        base = posixpath.basename(filename.replace("\\", "/")) or "upload"
        try:
            base = self._storage.get_valid_name(base)
        except SuspiciousFileOperation:
            base = "upload"
        stamp = int(self._clock() * 1000)
        return posixpath.join(self._config.upload_dir, f"{stamp}_{fit_filename(base)}")

    def store(self, upload: MediaUpload) -> MediaReference:
        name = self._target_name(upload.filename)
        try:
            saved = self._storage.save(name, ContentFile(upload.content))
        except (OSError, SuspiciousFileOperation) as exc:
            logger.error("Could not store %s: %s", name, exc)
            raise StorageIOError() from exc
        logger.debug("Stored %s (%d bytes)", saved, upload.size)
        return MediaReference(saved)

    def exists(self, ref: MediaReference) -> bool:
        try:
            return self._storage.exists(ref)
        except (OSError, SuspiciousFileOperation, ValueError):
            return False

    def delete(self, ref: MediaReference) -> None:
        try:
            self._storage.delete(ref)
        except (OSError, SuspiciousFileOperation, ValueError) as exc:
            logger.warning("Could not delete media file %s: %s", ref, exc)
            return
        logger.debug("Deleted %s", ref)

    def list_references(self) -> list[MediaReference]:
        refs: list[MediaReference] = []
        pending = [self._config.upload_dir]
        while pending:
            directory = pending.pop()
            try:
                dirs, files = self._storage.listdir(directory)
            except OSError as exc:
                if not isinstance(exc, FileNotFoundError):
                    logger.warning("Could not list %s: %s", directory, exc)
                continue
            pending.extend(posixpath.join(directory, d) for d in dirs)
            refs.extend(MediaReference(posixpath.join(directory, f)) for f in files)
        return sorted(refs)
