"""Assembly of paged galleries from catalog searches."""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from itertools import chain
from random import Random

from panda_gallery.domain.gallery import (
    DEFAULT_FRAME_ID,
    Continuation,
    GalleryKind,
    GalleryPage,
    GallerySource,
    GallerySummary,
    SpotlightGroup,
)
from panda_gallery.domain.photos import (
    NULL_PHOTO_INDEX,
    Entity,
    PhotoRecord,
    ResultSet,
)
from panda_gallery.errors import EntityNotFound
from panda_gallery.services.catalog import PhotoCatalog
from panda_gallery.services.ordering import random_choice, shuffle_with_seed, unique
from panda_gallery.services.paging import PagingCursor

_TAG_SUBJECT_MODES = {"set_tag", "set_tag_subject", "set_baby_subject"}
_TAG_COMBO_MODES = {"set_tag_intersection", "set_tag_intersection_subject"}
_CREDIT_MODE = "credit"
_SEED_LIMIT = 2**31

_logger = logging.getLogger(__name__)


@dataclass
class GalleryAssembler:
    """Builds full record lists for each gallery shape and pages through them."""

    catalog: PhotoCatalog
    page_size: int = 20
    shown_pages: int = 1
    debug: bool = False
    rng: Random = field(default_factory=Random)

    def open(  # noqa: PLR0913
        self,
        source: GallerySource,
        base_size: int | None = None,
        first_page_multiplier: int | None = None,
        seed: int | None = None,
        frame_id: str = DEFAULT_FRAME_ID,
    ) -> GalleryPage:
        """Start a new result set and return its first page."""
        cursor = PagingCursor(
            source=source,
            base_size=self.page_size if base_size is None else base_size,
            first_page_multiplier=(
                self.shown_pages
                if first_page_multiplier is None
                else first_page_multiplier
            ),
            seed=self.new_seed() if seed is None else seed,
            frame_id=frame_id,
        )
        return self._page(cursor)

    def request_page(self, continuation: Continuation) -> GalleryPage:
        """Return the page a continuation points at."""
        return self._page(PagingCursor.from_continuation(continuation))

    def new_seed(self) -> int:
        """Draw a shuffle seed for a new result set."""
        return self.rng.randrange(1, _SEED_LIMIT)

    def build(
        self, source: GallerySource, seed: int
    ) -> tuple[list[PhotoRecord], GallerySummary | None]:
        """Derive the full ordered record list for a source."""
        if source.kind == GalleryKind.CREDIT:
            result_set = self.credit_result_set(source.subject)
            records = self.credit_records(result_set)
            return records, summarize(result_set, len(records))
        if source.kind == GalleryKind.TAG:
            result_set = self.tag_result_set(source)
            records = self.tag_records(result_set, seed)
            return records, summarize(result_set, len(records))
        if source.kind == GalleryKind.GROUP:
            return self.group_records(source.entity_ids, seed), None
        return self.group_intersection_records(source.entity_ids, seed), None

    def credit_result_set(self, credit: str) -> ResultSet:
        """Search entities carrying photos by a contributor."""
        return ResultSet(
            subject=credit,
            hits=tuple(self.catalog.search_credit(credit)),
            parsed=_CREDIT_MODE,
        )

    def tag_result_set(self, source: GallerySource) -> ResultSet:
        """Search photos matching the tags of a source."""
        hits = []
        if source.tags:
            hits = self.catalog.search_photo_tags(
                source.tags,
                entity_ids=source.entity_ids or None,
                intersect=source.parsed in _TAG_COMBO_MODES,
            )
        return ResultSet(
            subject=source.subject,
            hits=tuple(hits),
            parsed=source.parsed,
            tag=", ".join(source.tags),
        )

    @staticmethod
    def credit_records(result_set: ResultSet) -> list[PhotoRecord]:
        """Every photo by the result set's subject, in hit order."""
        records = []
        for hit in result_set.hits:
            photos = hit.manifest if isinstance(hit, Entity) else (hit,)
            records.extend(
                photo for photo in photos if photo.credit == result_set.subject
            )
        return records

    @staticmethod
    def tag_records(result_set: ResultSet, seed: int) -> list[PhotoRecord]:
        """Tagged photos without null-photo hits, shuffled by the seed."""
        records = [
            hit
            for hit in result_set.hits
            if isinstance(hit, PhotoRecord) and hit.index != NULL_PHOTO_INDEX
        ]
        return shuffle_with_seed(records, seed)

    def group_records(self, entity_ids: Sequence[str], seed: int) -> list[PhotoRecord]:
        """Group photos of any of the ids, one per url, shuffled by the seed."""
        expanded = chain.from_iterable(
            _group_photos(self.catalog.search_group_media(entity_id))
            for entity_id in entity_ids
        )
        return shuffle_with_seed(unique(expanded, "url"), seed)

    def group_intersection_records(
        self, entity_ids: Sequence[str], seed: int
    ) -> list[PhotoRecord]:
        """Group photos showing all of the ids together, shuffled by the seed."""
        if not entity_ids:
            return []
        entities = self.catalog.search_group_media_intersect(entity_ids)
        return shuffle_with_seed(_group_photos(entities), seed)

    def spotlight(
        self,
        entity_ids: Sequence[str],
        photo_count: int = 3,
        tag: str = "portrait",
        seed: int | None = None,
    ) -> list[SpotlightGroup]:
        """Pick a few tagged photos for each entity, e.g. for birthdays."""
        rng = Random(self.new_seed() if seed is None else seed)
        groups = []
        for entity_id in entity_ids:
            entity = self.catalog.get_entity(entity_id)
            if entity is None:
                raise EntityNotFound(entity_id)
            tagged = [
                record
                for record in entity.manifest
                if tag in record.tags and record.url is not None
            ]
            groups.append(
                SpotlightGroup(
                    entity=entity, records=random_choice(tagged, photo_count, rng)
                )
            )
        return groups

    def _page(self, cursor: PagingCursor) -> GalleryPage:
        records, summary = self.build(cursor.source, cursor.seed)
        page = cursor.request_page(records, summary)
        if self.debug:
            _logger.info(
                "Gallery page: kind=%s page=%s shown=%s total=%s more=%s",
                cursor.source.kind.value,
                cursor.page,
                len(page.records),
                page.total_hit_count,
                page.has_more,
            )
        return page


def summarize(result_set: ResultSet, hit_count: int) -> GallerySummary:
    """Pick the header a gallery shows from how its query was parsed."""
    tag = result_set.tag or result_set.subject
    if hit_count == 0:
        return GallerySummary(mode="empty", hit_count=0, subject=result_set.subject)
    if result_set.parsed == _CREDIT_MODE:
        return GallerySummary(
            mode="credit", hit_count=hit_count, subject=result_set.subject
        )
    if result_set.parsed in _TAG_SUBJECT_MODES:
        return GallerySummary(
            mode="tag_subject",
            hit_count=hit_count,
            subject=result_set.subject,
            tags=(tag.split(", ")[0],),
        )
    if result_set.parsed in _TAG_COMBO_MODES:
        return GallerySummary(
            mode="tag_combo",
            hit_count=hit_count,
            subject=result_set.subject,
            tags=tuple(tag.split(", ")),
        )
    return GallerySummary(mode="empty", hit_count=hit_count, subject=result_set.subject)


def _group_photos(entities: Sequence[Entity]) -> Iterator[PhotoRecord]:
    for entity in entities:
        for record in entity.manifest:
            if record.url is not None:
                yield record
