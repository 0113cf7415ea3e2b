"""Pydantic models for the gallery HTTP API."""

from uuid import UUID

from pydantic import BaseModel, Field

from panda_gallery.domain.carousel import CarouselView
from panda_gallery.domain.gallery import (
    DEFAULT_FRAME_ID,
    Continuation,
    FeedItem,
    GalleryKind,
    GalleryPage,
    GallerySource,
    SpotlightGroup,
)
from panda_gallery.domain.photos import PhotoRecord


class PhotoModel(BaseModel):
    """Photo payload."""

    entity_id: str
    index: int
    url: str | None = None
    credit: str | None = None
    link: str | None = None
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: PhotoRecord) -> "PhotoModel":
        return cls(
            entity_id=record.entity_id,
            index=record.index,
            url=record.url,
            credit=record.credit,
            link=record.link,
            tags=sorted(record.tags),
        )


class OpenCarouselRequest(BaseModel):
    """Request to open a carousel on an entity."""

    entity_id: str
    index: int | None = None


class CarouselViewModel(BaseModel):
    """Current state of a carousel widget."""

    session_id: UUID
    entity_id: str
    kind: str
    index: int
    count: int
    url: str
    placeholder: bool
    disabled: bool
    preload_urls: list[str] = Field(default_factory=list)
    credit: str | None = None
    credit_link: str | None = None
    credit_photo_count: int | None = None

    @classmethod
    def from_view(cls, view: CarouselView) -> "CarouselViewModel":
        return cls(
            session_id=view.session_id,
            entity_id=view.entity_id,
            kind=view.kind.value,
            index=view.index,
            count=view.count,
            url=view.url,
            placeholder=view.placeholder,
            disabled=view.disabled,
            preload_urls=list(view.preload_urls),
            credit=view.credit,
            credit_link=view.credit_link,
            credit_photo_count=view.credit_photo_count,
        )


class PagingOptions(BaseModel):
    """Optional paging overrides shared by gallery requests."""

    page_size: int | None = None
    first_page_multiplier: int | None = None
    seed: int | None = None
    frame_id: str = DEFAULT_FRAME_ID


class CreditGalleryRequest(PagingOptions):
    """Gallery of every photo by one contributor."""

    credit: str


class TagGalleryRequest(PagingOptions):
    """Gallery of photos carrying one or more tags."""

    tags: list[str] = Field(min_length=1)
    subject: str = ""
    entity_ids: list[str] = Field(default_factory=list)
    mode: str = "set_tag"


class GroupGalleryRequest(PagingOptions):
    """Gallery of group photos featuring the listed individuals."""

    entity_ids: list[str] = Field(min_length=1)


class ContinuationModel(BaseModel):
    """Opaque-to-clients resumption record, re-submitted for the next page."""

    kind: GalleryKind
    page: int = Field(ge=0)
    base_size: int = Field(gt=0)
    first_page_multiplier: int = Field(default=1, ge=1)
    seed: int
    frame_id: str = DEFAULT_FRAME_ID
    subject: str = ""
    entity_ids: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    parsed: str = ""

    @classmethod
    def from_continuation(cls, continuation: Continuation) -> "ContinuationModel":
        source = continuation.source
        return cls(
            kind=source.kind,
            page=continuation.page,
            base_size=continuation.base_size,
            first_page_multiplier=continuation.first_page_multiplier,
            seed=continuation.seed,
            frame_id=continuation.frame_id,
            subject=source.subject,
            entity_ids=list(source.entity_ids),
            tags=list(source.tags),
            parsed=source.parsed,
        )

    def to_continuation(self) -> Continuation:
        return Continuation(
            source=GallerySource(
                kind=self.kind,
                subject=self.subject,
                entity_ids=tuple(self.entity_ids),
                tags=tuple(self.tags),
                parsed=self.parsed,
            ),
            page=self.page,
            base_size=self.base_size,
            first_page_multiplier=self.first_page_multiplier,
            seed=self.seed,
            frame_id=self.frame_id,
        )


class GallerySummaryModel(BaseModel):
    """Header the gallery should render."""

    mode: str
    hit_count: int
    subject: str = ""
    tags: list[str] = Field(default_factory=list)


class GalleryPageModel(BaseModel):
    """One page of a gallery."""

    records: list[PhotoModel]
    total_hit_count: int
    has_more: bool
    continuation: ContinuationModel | None = None
    summary: GallerySummaryModel | None = None

    @classmethod
    def from_page(cls, page: GalleryPage) -> "GalleryPageModel":
        summary = None
        if page.summary is not None:
            summary = GallerySummaryModel(
                mode=page.summary.mode,
                hit_count=page.summary.hit_count,
                subject=page.summary.subject,
                tags=list(page.summary.tags),
            )
        return cls(
            records=[PhotoModel.from_record(record) for record in page.records],
            total_hit_count=page.total_hit_count,
            has_more=page.has_more,
            continuation=(
                ContinuationModel.from_continuation(page.continuation)
                if page.continuation
                else None
            ),
            summary=summary,
        )


class FeedItemModel(BaseModel):
    """Front-page feed entry."""

    photo: PhotoModel
    display_name: str
    section: str
    group: int | None = None
    resident: bool = False
    new_entity: bool = False
    new_contributor: bool = False

    @classmethod
    def from_item(cls, item: FeedItem) -> "FeedItemModel":
        return cls(
            photo=PhotoModel.from_record(item.record),
            display_name=item.display_name,
            section=item.section,
            group=item.group,
            resident=item.resident,
            new_entity=item.new_entity,
            new_contributor=item.new_contributor,
        )


class SpotlightGroupModel(BaseModel):
    """Photos picked for one spotlighted entity."""

    entity_id: str
    display_name: str
    photos: list[PhotoModel]

    @classmethod
    def from_group(
        cls, group: SpotlightGroup, language: str = "en"
    ) -> "SpotlightGroupModel":
        return cls(
            entity_id=group.entity.id,
            display_name=group.entity.display_name(language),
            photos=[PhotoModel.from_record(record) for record in group.records],
        )
