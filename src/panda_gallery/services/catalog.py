"""Read-only interface to the photo catalog."""

from collections.abc import Sequence
from typing import Protocol

from panda_gallery.domain.photos import Entity, PhotoRecord, RecentUpdates


class PhotoCatalog(Protocol):
    """Lookup and search interface for entities and their photos."""

    def get_entity(self, entity_id: str) -> Entity | None:
        """Return an entity with its photo manifest, if present."""

    def list_residents(self, location_id: str) -> list[Entity]:
        """Return individuals currently living at a location."""

    def search_credit(self, credit: str) -> list[Entity]:
        """Return entities with at least one photo by a contributor."""

    def search_photo_tags(
        self,
        tags: Sequence[str],
        entity_ids: Sequence[str] | None = None,
        intersect: bool = False,
    ) -> list[PhotoRecord]:
        """Return photos carrying any (or, when intersecting, all) of the tags."""

    def search_group_media(self, entity_id: str) -> list[Entity]:
        """Return group media entities that include an individual."""

    def search_group_media_intersect(
        self, entity_ids: Sequence[str]
    ) -> list[Entity]:
        """Return group media entities that include every listed individual."""

    def recent_updates(self) -> RecentUpdates:
        """Return locators for recently added entities, authors and photos."""

    def credit_photo_count(self, credit: str) -> int:
        """Return how many catalogued photos a contributor has."""
