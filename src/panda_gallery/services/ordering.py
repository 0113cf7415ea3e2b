"""Ordering helpers shared by galleries: dedupe, seeded shuffle, sampling."""

import random
from collections.abc import Callable, Hashable, Iterable, Iterator, Sequence
from typing import TypeVar

T = TypeVar("T")


def unique(
    records: Iterable[T], key: str | Callable[[T], Hashable]
) -> Iterator[T]:
    """Yield only the first record seen for each key, preserving order.

    ``key`` is either a callable or the name of an attribute on each record.
    """
    key_fn = key if callable(key) else _attribute_getter(key)
    seen: set[Hashable] = set()
    for record in records:
        value = key_fn(record)
        if value in seen:
            continue
        seen.add(value)
        yield record


def shuffle_with_seed(records: Iterable[T], seed: int) -> list[T]:
    """Return a Fisher-Yates permutation of the records fixed by the seed."""
    shuffled = list(records)
    rng = random.Random(seed)
    for position in range(len(shuffled) - 1, 0, -1):
        swap = rng.randint(0, position)
        shuffled[position], shuffled[swap] = shuffled[swap], shuffled[position]
    return shuffled


def random_choice(items: Sequence[T], count: int, rng: random.Random) -> list[T]:
    """Pick up to ``count`` items without replacement, keeping input order."""
    if count <= 0:
        return []
    if len(items) <= count:
        return list(items)
    chosen = sorted(rng.sample(range(len(items)), count))
    return [items[position] for position in chosen]


def _attribute_getter(name: str) -> Callable[[object], Hashable]:
    def getter(record: object) -> Hashable:
        return getattr(record, name)

    return getter
