"""Tests for dedupe, seeded shuffle and sampling helpers."""

from random import Random

from panda_gallery.domain.photos import PhotoRecord
from panda_gallery.services.ordering import random_choice, shuffle_with_seed, unique


def test_unique_keeps_first_occurrence() -> None:
    records = [
        {"id": 1, "url": "a"},
        {"id": 2, "url": "b"},
        {"id": 3, "url": "a"},
    ]

    result = list(unique(records, lambda record: record["url"]))

    assert result == [{"id": 1, "url": "a"}, {"id": 2, "url": "b"}]


def test_unique_accepts_attribute_name() -> None:
    records = [
        PhotoRecord(entity_id="1", index=1, url="a.jpg"),
        PhotoRecord(entity_id="1", index=2, url="b.jpg"),
        PhotoRecord(entity_id="2", index=1, url="a.jpg"),
    ]

    assert [r.index for r in unique(records, "entity_id")] == [1, 1]
    assert [r.url for r in unique(records, "url")] == ["a.jpg", "b.jpg"]


def test_shuffle_with_seed_is_deterministic_permutation() -> None:
    records = list(range(30))

    first = shuffle_with_seed(records, 42)
    second = shuffle_with_seed(records, 42)

    assert first == second
    assert sorted(first) == records
    assert records == list(range(30))


def test_shuffle_with_seed_differs_across_seeds() -> None:
    records = list(range(30))

    orders = {tuple(shuffle_with_seed(records, seed)) for seed in range(1, 6)}

    assert len(orders) > 1


def test_shuffle_with_seed_handles_short_lists() -> None:
    assert shuffle_with_seed([], 7) == []
    assert shuffle_with_seed(["only"], 7) == ["only"]


def test_random_choice_keeps_input_order() -> None:
    items = list(range(10))

    chosen = random_choice(items, 4, Random(3))

    assert len(chosen) == 4
    assert chosen == sorted(chosen)
    assert set(chosen) <= set(items)


def test_random_choice_edges() -> None:
    rng = Random(1)

    assert random_choice([1, 2], 0, rng) == []
    assert random_choice([1, 2], -3, rng) == []
    assert random_choice([1, 2], 5, rng) == [1, 2]
