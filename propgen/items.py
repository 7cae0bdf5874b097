from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from propgen.errors import GeneratorConfigurationError, generator_error
from propgen.random_source import SourceOfRandomness

T = TypeVar("T")


@dataclass(frozen=True)
class Weighted(Generic[T]):
    item: T
    weight: int

    def __post_init__(self) -> None:
        if isinstance(self.weight, bool) or not isinstance(self.weight, int) or self.weight <= 0:
            raise GeneratorConfigurationError(
                generator_error(
                    "Weighted",
                    f"weight must be a positive integer, got {self.weight!r}",
                    "use a weight of 1 or greater",
                )
            )


def choose_weighted(items: Sequence[Weighted[T]], random: SourceOfRandomness) -> T:
    if not items:
        raise ValueError("cannot choose from an empty list of weighted items")
    if len(items) == 1:
        return items[0].item

    total = sum(each.weight for each in items)
    sample = random.next_long(0, total - 1)

    threshold = 0
    for each in items:
        threshold += each.weight
        if sample < threshold:
            return each.item
    raise AssertionError(f"sample {sample} not below total weight {total}")
