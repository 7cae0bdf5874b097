from __future__ import annotations

from typing import Any, Callable, Iterator, List, Sequence

from propgen.random_source import SourceOfRandomness
from propgen.sequences import halving


def is_distinct(items: Sequence[Any]) -> bool:
    # Equality only; generated values need not be hashable.
    for index, each in enumerate(items):
        if each in items[:index]:
            return False
    return True


def remove_from(items: Sequence[Any], how_many: int) -> List[List[Any]]:
    """Every list obtained by cutting one aligned window of ``how_many`` items."""
    if how_many < 0:
        raise ValueError(f"Cannot remove a negative number of items: {how_many}")
    if how_many > len(items):
        raise ValueError(f"Cannot remove {how_many} items from a list of {len(items)}")
    if how_many == 0:
        return [list(items)]

    removals: List[List[Any]] = []
    for start in range(0, len(items), how_many):
        removals.append(list(items[:start]) + list(items[start + how_many:]))
    return removals


def removals(items: Sequence[Any]) -> Iterator[List[Any]]:
    """Removal shrinks with windows of half the length, then halving down to one."""
    if not items:
        return
    for how_many in halving(max(1, len(items) // 2)):
        yield from remove_from(items, how_many)


def shrinks_of_one_item(
    random: SourceOfRandomness,
    items: Sequence[Any],
    shrink: Callable[[SourceOfRandomness, Any], List[Any]],
) -> List[List[Any]]:
    """Lists equal to ``items`` except at one randomly chosen position, which
    holds one of that item's shrinks."""
    if not items:
        return []

    index = random.next_int(0, len(items) - 1)
    results: List[List[Any]] = []
    for smaller in shrink(random, items[index]):
        candidate = list(items)
        candidate[index] = smaller
        results.append(candidate)
    return results
