"""Tests for page windows and continuations."""

import pytest

from panda_gallery.domain.gallery import GalleryKind, GallerySource
from panda_gallery.domain.photos import PhotoRecord
from panda_gallery.errors import InvalidPageSize
from panda_gallery.services.paging import PagingCursor, paginate

_SOURCE = GallerySource(kind=GalleryKind.CREDIT, subject="alice")


def _records(count: int) -> list[PhotoRecord]:
    return [
        PhotoRecord(entity_id=str(position), index=1, url=f"{position}.jpg")
        for position in range(count)
    ]


def test_paginate_widened_first_page() -> None:
    records = list(range(7))

    first = paginate(records, 0, 3, 2)
    second = paginate(records, 1, 3, 2)
    third = paginate(records, 2, 3, 2)

    assert first.records == [0, 1, 2, 3, 4, 5]
    assert first.has_more
    assert first.next_page == 1
    assert second.records == [3, 4, 5]
    assert second.has_more
    assert third.records == [6]
    assert not third.has_more
    assert third.next_page is None
    assert third.total_hit_count == 7


def test_paginate_exact_fit_has_no_more() -> None:
    window = paginate(list(range(6)), 1, 3)

    assert window.records == [3, 4, 5]
    assert not window.has_more


def test_paginate_empty_list() -> None:
    window = paginate([], 0, 20)

    assert window.records == []
    assert window.total_hit_count == 0
    assert not window.has_more


@pytest.mark.parametrize(("base_size", "multiplier"), [(0, 1), (-2, 1), (3, 0)])
def test_invalid_page_sizes_raise(base_size: int, multiplier: int) -> None:
    with pytest.raises(InvalidPageSize):
        paginate([1, 2, 3], 0, base_size, multiplier)
    with pytest.raises(InvalidPageSize):
        PagingCursor(
            source=_SOURCE, base_size=base_size, first_page_multiplier=multiplier
        )


def test_negative_page_raises() -> None:
    with pytest.raises(InvalidPageSize):
        paginate([1, 2, 3], -1, 2)
    with pytest.raises(InvalidPageSize):
        PagingCursor(source=_SOURCE, base_size=2, page=-1)


def test_following_continuations_covers_every_record_once() -> None:
    for count in range(0, 18):
        records = _records(count)
        for base_size in range(1, 6):
            for multiplier in range(1, 5):
                cursor = PagingCursor(
                    source=_SOURCE,
                    base_size=base_size,
                    first_page_multiplier=multiplier,
                    seed=9,
                )
                page = cursor.request_page(records)
                shown = list(page.records)
                while page.continuation is not None:
                    assert page.has_more
                    page = PagingCursor.from_continuation(
                        page.continuation
                    ).request_page(records)
                    shown.extend(page.records)

                assert shown == records, (count, base_size, multiplier)


def test_continuation_carries_paging_state() -> None:
    cursor = PagingCursor(
        source=_SOURCE, base_size=3, first_page_multiplier=2, seed=77, frame_id="more"
    )

    page = cursor.request_page(_records(10))

    assert page.continuation is not None
    assert page.continuation.page == 2
    assert page.continuation.seed == 77
    assert page.continuation.frame_id == "more"
    assert page.continuation.kind == GalleryKind.CREDIT


def test_exhausted_cursor_returns_empty_page() -> None:
    cursor = PagingCursor(source=_SOURCE, base_size=5, exhausted=True)

    page = cursor.request_page(_records(3))

    assert page.records == []
    assert not page.has_more
    assert cursor.continuation is None


def test_narrow_pages_continue_one_page_at_a_time() -> None:
    cursor = PagingCursor(source=_SOURCE, base_size=3, page=1)

    page = cursor.request_page(_records(10))

    assert [record.entity_id for record in page.records] == ["3", "4", "5"]
    assert page.continuation is not None
    assert page.continuation.page == 2
