"""Front-page feed of recently updated photos."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from itertools import chain
from random import Random

from panda_gallery.domain.gallery import FeedItem
from panda_gallery.domain.photos import Entity, EntityKind, PhotoLocator, PhotoRecord
from panda_gallery.services.catalog import PhotoCatalog
from panda_gallery.services.ordering import random_choice, unique

MAX_CONTRIBUTORS_BEFORE_COLLAPSE = 10

_logger = logging.getLogger(__name__)


@dataclass
class FeedService:
    """Orders recent updates into location, contributor, new and catch-all photos.

    Each location photo is followed by photos of the animals living there.
    Contributor photos come next, then newly added animals, then everything
    else that was updated. One budget is shared across all sections.
    """

    catalog: PhotoCatalog
    reserved_credits: frozenset[str] = frozenset()
    photo_count: int = 19
    debug: bool = False
    rng: Random = field(default_factory=Random)

    def build_feed(
        self,
        photo_count: int | None = None,
        language: str = "en",
        seed: int | None = None,
    ) -> list[FeedItem]:
        """Return at most ``photo_count`` feed items in display order."""
        run = _FeedRun(
            catalog=self.catalog,
            reserved_credits=self.reserved_credits,
            language=language,
            rng=self.rng if seed is None else Random(seed),
            remaining=self.photo_count if photo_count is None else photo_count,
        )
        items = run.build()
        if self.debug:
            _logger.info(
                "Feed built: items=%s sections=%s",
                len(items),
                sorted({item.section for item in items}),
            )
        return items


@dataclass
class _FeedRun:
    catalog: PhotoCatalog
    reserved_credits: frozenset[str]
    language: str
    rng: Random
    remaining: int
    items: list[FeedItem] = field(default_factory=list)
    entities: dict[str, Entity | None] = field(default_factory=dict)
    new_credits: set[str | None] = field(default_factory=set)

    def build(self) -> list[FeedItem]:  # noqa: PLR0912, PLR0915
        updates = self.catalog.recent_updates()
        author_locators = set(updates.authors)
        entity_locators = set(updates.entities)

        location_photos = [
            photo
            for photo in self._unique_open(_of_kind(updates.entities, EntityKind.ZOO))
            if self._has_photographed_residents(photo.entity_id)
        ]
        location_chosen = self._choose(location_photos)

        author_photos_all = [
            photo for photo in self._photos(updates.authors) if self._is_open(photo)
        ]
        self.new_credits = {photo.credit for photo in author_photos_all}
        author_photos = list(unique(author_photos_all, "entity_id"))
        author_chosen = random_choice(
            [p for p in author_photos if p.entity_kind != EntityKind.ZOO],
            self.remaining,
            self.rng,
        )
        if len(author_chosen) > MAX_CONTRIBUTORS_BEFORE_COLLAPSE:
            author_chosen = list(unique(author_chosen, "credit"))
        author_chosen = self._sorted(author_chosen)

        new_entity_photos = self._unique_open(
            locator
            for locator in _of_kind(updates.entities, EntityKind.PANDA)
            if locator not in author_locators
        )
        new_entity_chosen = self._choose(new_entity_photos)

        entity_photos = self._unique_open(
            locator
            for locator in updates.entities
            if EntityKind.for_id(locator.entity_id) != EntityKind.ZOO
        )
        new_entity_ids = {photo.entity_id for photo in entity_photos}
        update_photos = self._unique_open(
            locator
            for locator in updates.photos
            if locator not in entity_locators
            and locator not in author_locators
            and EntityKind.for_id(locator.entity_id) != EntityKind.ZOO
        )

        residents_shown: set[str] = set()
        for group, location_photo in enumerate(location_chosen):
            if not self._add(location_photo, "location", group=group):
                return self.items
            resident_ids = {
                entity.id
                for entity in self.catalog.list_residents(location_photo.entity_id)
            }
            residents = self._sorted(
                unique(
                    (
                        photo
                        for photo in chain(author_photos, entity_photos, update_photos)
                        if photo.entity_id in resident_ids
                    ),
                    "entity_id",
                )
            )
            for resident in residents:
                if not self._add(resident, "location", group=group, resident=True):
                    return self.items
                residents_shown.add(resident.entity_id)

        for author_photo in author_chosen:
            if author_photo.entity_id in residents_shown:
                continue
            is_new = (
                author_photo.entity_id in new_entity_ids
                and author_photo.entity_kind != EntityKind.GROUP_MEDIA
            )
            if not self._add(
                author_photo, "contributor", new_entity=is_new, new_contributor=True
            ):
                return self.items

        for new_photo in new_entity_chosen:
            if new_photo.entity_id in residents_shown:
                continue
            if not self._add(
                new_photo, "new_entity", new_entity=True, new_contributor=False
            ):
                return self.items

        shown_elsewhere = (
            {photo.entity_id for photo in author_photos}
            | new_entity_ids
            | residents_shown
        )
        leftovers = [p for p in update_photos if p.entity_id not in shown_elsewhere]
        for update_photo in self._choose(leftovers):
            if not self._add(update_photo, "update", new_contributor=False):
                return self.items
        return self.items

    def _add(  # noqa: PLR0913
        self,
        record: PhotoRecord,
        section: str,
        group: int | None = None,
        resident: bool = False,
        new_entity: bool = False,
        new_contributor: bool | None = None,
    ) -> bool:
        """Append an item unless the budget is spent; return False once spent."""
        if self.remaining <= 0:
            return False
        if new_contributor is None:
            new_contributor = self._is_new_contributor(record.credit)
        self.items.append(
            FeedItem(
                record=record,
                display_name=self._name(record.entity_id),
                section=section,
                group=group,
                resident=resident,
                new_entity=new_entity,
                new_contributor=new_contributor,
            )
        )
        self.remaining -= 1
        return True

    def _photos(self, locators: Iterable[PhotoLocator]) -> Iterator[PhotoRecord]:
        for locator in locators:
            entity = self._entity(locator.entity_id)
            if entity is None:
                _logger.warning("Feed locator for unknown entity %s", locator.entity_id)
                continue
            record = entity.manifest.get(locator.index)
            if record is not None:
                yield record

    def _unique_open(self, locators: Iterable[PhotoLocator]) -> list[PhotoRecord]:
        return [
            photo
            for photo in unique(self._photos(locators), "entity_id")
            if self._is_open(photo)
        ]

    def _choose(self, photos: list[PhotoRecord]) -> list[PhotoRecord]:
        return self._sorted(random_choice(photos, self.remaining, self.rng))

    def _sorted(self, photos: Iterable[PhotoRecord]) -> list[PhotoRecord]:
        return sorted(photos, key=lambda photo: self._name(photo.entity_id))

    def _entity(self, entity_id: str) -> Entity | None:
        if entity_id not in self.entities:
            self.entities[entity_id] = self.catalog.get_entity(entity_id)
        return self.entities[entity_id]

    def _name(self, entity_id: str) -> str:
        entity = self._entity(entity_id)
        return entity.display_name(self.language) if entity else entity_id

    def _is_open(self, photo: PhotoRecord) -> bool:
        return photo.credit not in self.reserved_credits

    def _is_new_contributor(self, credit: str | None) -> bool:
        if credit is None:
            return False
        if credit in self.new_credits:
            return True
        return self.catalog.credit_photo_count(credit) == 1

    def _has_photographed_residents(self, location_id: str) -> bool:
        return any(
            len(resident.manifest) > 0
            for resident in self.catalog.list_residents(location_id)
        )


def _of_kind(
    locators: Iterable[PhotoLocator], kind: EntityKind
) -> Iterator[PhotoLocator]:
    return (
        locator
        for locator in locators
        if EntityKind.for_id(locator.entity_id) == kind
    )
