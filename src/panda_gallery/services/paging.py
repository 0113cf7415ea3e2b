"""Windowing of derived record lists into "load more" pages."""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from panda_gallery.domain.gallery import (
    DEFAULT_FRAME_ID,
    Continuation,
    GalleryPage,
    GallerySource,
    GallerySummary,
)
from panda_gallery.domain.photos import PhotoRecord
from panda_gallery.errors import InvalidPageSize

T = TypeVar("T")


@dataclass(frozen=True)
class PageWindow(Generic[T]):
    """Result of slicing one page out of a full record list."""

    records: list[T]
    total_hit_count: int
    has_more: bool
    next_page: int | None


def validate_page_size(base_size: int, first_page_multiplier: int = 1) -> None:
    """Reject page sizes that cannot produce a page."""
    if base_size <= 0:
        raise InvalidPageSize(f"Page size must be positive, got {base_size}")
    if first_page_multiplier < 1:
        raise InvalidPageSize(
            f"First page multiplier must be at least 1, got {first_page_multiplier}"
        )


def effective_page_size(page: int, base_size: int, first_page_multiplier: int) -> int:
    """Return how many records a page shows; the first page may be wider."""
    if page == 0 and first_page_multiplier > 1:
        return first_page_multiplier * base_size
    return base_size


def paginate(
    records: Sequence[T],
    page: int,
    base_size: int,
    first_page_multiplier: int = 1,
) -> PageWindow[T]:
    """Slice page ``page`` out of ``records``.

    The start offset is always ``page * base_size`` so page boundaries stay
    aligned even when page 0 is rendered wider.
    """
    validate_page_size(base_size, first_page_multiplier)
    if page < 0:
        raise InvalidPageSize(f"Page must not be negative, got {page}")
    size = effective_page_size(page, base_size, first_page_multiplier)
    remaining = records[page * base_size :]
    if len(remaining) <= size:
        return PageWindow(
            records=list(remaining),
            total_hit_count=len(records),
            has_more=False,
            next_page=None,
        )
    return PageWindow(
        records=list(remaining[:size]),
        total_hit_count=len(records),
        has_more=True,
        next_page=page + 1,
    )


@dataclass(frozen=True)
class PagingCursor:
    """Windowing state for one result set.

    The seed is fixed for the whole result set so that every page is cut from
    the same shuffled order.
    """

    source: GallerySource
    base_size: int
    first_page_multiplier: int = 1
    seed: int = 0
    frame_id: str = DEFAULT_FRAME_ID
    page: int = 0
    exhausted: bool = False

    def __post_init__(self) -> None:
        validate_page_size(self.base_size, self.first_page_multiplier)
        if self.page < 0:
            raise InvalidPageSize(f"Page must not be negative, got {self.page}")

    @classmethod
    def from_continuation(cls, continuation: Continuation) -> "PagingCursor":
        """Rebuild the cursor a continuation was issued from."""
        return cls(
            source=continuation.source,
            base_size=continuation.base_size,
            first_page_multiplier=continuation.first_page_multiplier,
            seed=continuation.seed,
            frame_id=continuation.frame_id,
            page=continuation.page,
        )

    @property
    def continuation(self) -> Continuation | None:
        """Descriptor for requesting this cursor's page, unless exhausted."""
        if self.exhausted:
            return None
        return Continuation(
            source=self.source,
            page=self.page,
            base_size=self.base_size,
            first_page_multiplier=self.first_page_multiplier,
            seed=self.seed,
            frame_id=self.frame_id,
        )

    def advance(self, window: PageWindow[PhotoRecord]) -> "PagingCursor":
        """Return the cursor state that follows ``window``.

        After a widened page 0 of ``m * base_size`` records the next page is
        ``m``, not 1, so pages already shown are not served again.
        """
        if window.next_page is None:
            return replace(self, exhausted=True)
        shown = effective_page_size(
            self.page, self.base_size, self.first_page_multiplier
        )
        return replace(self, page=window.next_page + shown // self.base_size - 1)

    def request_page(
        self,
        records: Sequence[PhotoRecord],
        summary: GallerySummary | None = None,
    ) -> GalleryPage:
        """Cut this cursor's page out of the full record list."""
        if self.exhausted:
            return GalleryPage(
                records=[], total_hit_count=len(records), has_more=False
            )
        window = paginate(
            records, self.page, self.base_size, self.first_page_multiplier
        )
        following = self.advance(window)
        return GalleryPage(
            records=window.records,
            total_hit_count=window.total_hit_count,
            has_more=window.has_more,
            continuation=following.continuation,
            summary=summary,
        )
