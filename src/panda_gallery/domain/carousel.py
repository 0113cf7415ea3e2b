"""Domain models for photo carousels."""

from dataclasses import dataclass, field
from uuid import UUID

from panda_gallery.domain.photos import EntityKind


@dataclass(frozen=True)
class CarouselView:
    """What a carousel widget should display right now."""

    session_id: UUID
    entity_id: str
    kind: EntityKind
    index: int
    count: int
    url: str
    placeholder: bool
    disabled: bool
    preload_urls: list[str] = field(default_factory=list)
    credit: str | None = None
    credit_link: str | None = None
    credit_photo_count: int | None = None
