"""Domain models for paged galleries."""

from dataclasses import dataclass
from enum import Enum

from panda_gallery.domain.photos import Entity, PhotoRecord

DEFAULT_FRAME_ID = "contentFrame"


class GalleryKind(str, Enum):
    """Source shapes a paged gallery can be built from."""

    CREDIT = "credit"
    TAG = "tag"
    GROUP = "group"
    GROUP_INTERSECTION = "group_intersection"


@dataclass(frozen=True)
class GallerySource:
    """Arguments needed to re-derive the full record list of a gallery."""

    kind: GalleryKind
    subject: str = ""
    entity_ids: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    parsed: str = ""


@dataclass(frozen=True)
class Continuation:
    """Resumption record for the next page of a gallery."""

    source: GallerySource
    page: int
    base_size: int
    first_page_multiplier: int
    seed: int
    frame_id: str = DEFAULT_FRAME_ID

    @property
    def kind(self) -> GalleryKind:
        return self.source.kind


@dataclass(frozen=True)
class GallerySummary:
    """Header choice for a gallery, computed from its hits."""

    mode: str
    hit_count: int
    subject: str = ""
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class GalleryPage:
    """One page of records plus the data needed to fetch the next one."""

    records: list[PhotoRecord]
    total_hit_count: int
    has_more: bool
    continuation: Continuation | None = None
    summary: GallerySummary | None = None


@dataclass(frozen=True)
class SpotlightGroup:
    """A handful of photos chosen for one entity."""

    entity: Entity
    records: list[PhotoRecord]


@dataclass(frozen=True)
class FeedItem:
    """A front-page feed photo with the section it was chosen for."""

    record: PhotoRecord
    display_name: str
    section: str
    group: int | None = None
    resident: bool = False
    new_entity: bool = False
    new_contributor: bool = False
