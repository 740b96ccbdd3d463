"""In-memory mutator over an event's flyer and photo collections.

Nothing here touches storage. The media service stores new files before
calling these operations and deletes the references they hand back only
after the event has been saved.
"""

from collections.abc import Iterable

from events.domain.models import Event
from events.domain.value_objects import MediaCollection, MediaReference


class EventMediaSet:
    """The two media collections of exactly one Event."""

    def __init__(
        self,
        flyers: Iterable[MediaReference] = (),
        photos: Iterable[MediaReference] = (),
    ) -> None:
        self._collections: dict[MediaCollection, list[MediaReference]] = {
            MediaCollection.FLYERS: list(flyers),
            MediaCollection.PHOTOS: list(photos),
        }

    @classmethod
    def from_event(cls, event: Event) -> "EventMediaSet":
        return cls(flyers=event.flyers, photos=event.photos)

    def apply_to(self, event: Event) -> Event:
        return event.with_changes(flyers=self.flyers, photos=self.photos)

    @property
    def flyers(self) -> tuple[MediaReference, ...]:
        return tuple(self._collections[MediaCollection.FLYERS])

    @property
    def photos(self) -> tuple[MediaReference, ...]:
        return tuple(self._collections[MediaCollection.PHOTOS])

    def get(self, collection: MediaCollection) -> tuple[MediaReference, ...]:
        return tuple(self._collections[collection])

    def append(
        self, collection: MediaCollection, new_refs: Iterable[MediaReference]
    ) -> None:
        """Add new_refs to the end of the collection, keeping existing order."""
        self._collections[collection].extend(new_refs)

    def overwrite(
        self, collection: MediaCollection, new_refs: Iterable[MediaReference]
    ) -> list[MediaReference]:
        """Replace the collection and return every reference it held before."""
        previous = self._collections[collection]
        self._collections[collection] = list(new_refs)
        return previous

    def remove_where(
        self, collection: MediaCollection, refs_to_delete: Iterable[MediaReference]
    ) -> list[MediaReference]:
        """Drop the listed references and return the ones actually removed."""
        targets = set(refs_to_delete)
        kept: list[MediaReference] = []
        removed: list[MediaReference] = []
        for ref in self._collections[collection]:
            (removed if ref in targets else kept).append(ref)
        self._collections[collection] = kept
        return removed
