"""Reclaims stored media files that no event references."""

import logging

from events.domain import MediaReference
from events.stores.interfaces import EventStore, MediaStore

logger = logging.getLogger(__name__)


def find_orphans(events: EventStore, media: MediaStore) -> list[MediaReference]:
    # Files are listed before references are read so that uploads saved in
    # between are seen as referenced.
    stored = media.list_references()
    referenced = events.all_references()
    return [ref for ref in stored if ref not in referenced]


def sweep_orphans(
    events: EventStore, media: MediaStore, dry_run: bool = False
) -> list[MediaReference]:
    """Delete unreferenced files and return their references.

    An upload that is stored but not yet saved counts as an orphan, so run
    this while no media requests are in flight.
    """
    orphans = find_orphans(events, media)
    if dry_run:
        return orphans
    for ref in orphans:
        media.delete(ref)
    logger.info("Swept %d orphaned media files", len(orphans))
    return orphans
