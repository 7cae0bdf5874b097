from __future__ import annotations

from typing import Iterator


def halving(start: int) -> Iterator[int]:
    """Yield start, start // 2, start // 4, ... down to 1."""
    current = start
    while current > 0:
        yield current
        current //= 2


def _toward_zero_half(value: int) -> int:
    return value // 2 if value >= 0 else -((-value) // 2)


def halving_integral(larger: int, target: int) -> Iterator[int]:
    """Yield points from ``target`` back toward ``larger``, halving the gap.

    The first value is ``target`` itself; each later one closes half of the
    remaining distance to ``larger``. ``larger`` is never yielded.
    """
    distance = target - larger
    while distance != 0:
        yield larger + distance
        distance = _toward_zero_half(distance)


def halving_decimal(larger: float, target: float, limit: int = 64) -> Iterator[float]:
    """Floating counterpart of ``halving_integral``; stops once halving stalls."""
    distance = target - larger
    previous = None
    for _ in range(limit):
        candidate = larger + distance
        if candidate == larger or candidate == previous:
            return
        yield candidate
        previous = candidate
        distance /= 2
