from __future__ import annotations

from typing import Any, Callable, Optional

from propgen.errors import GeneratorConfigurationError, generator_error
from propgen.random_source import SourceOfRandomness


def check_range(location: str, min_v: Any, max_v: Any) -> None:
    if min_v is not None and max_v is not None and min_v > max_v:
        raise GeneratorConfigurationError(
            generator_error(
                location,
                f"bad range, {min_v} > {max_v}",
                "set max >= min",
            )
        )


def choose_big_integer(random: SourceOfRandomness, min_v: int, max_v: int) -> int:
    """Uniform integer in [min_v, max_v] by rejection sampling over bit draws."""
    if min_v > max_v:
        raise ValueError(f"bad range, {min_v} > {max_v}")
    span = max_v - min_v + 1
    return min_v + _below(random, span)


def choose_big_integer_exclusive(random: SourceOfRandomness, min_v: int, max_v: int) -> int:
    """Uniform integer in [min_v, max_v), or min_v when the interval is empty."""
    if min_v > max_v:
        raise ValueError(f"bad range, {min_v} > {max_v}")
    span = max_v - min_v
    if span == 0:
        return min_v
    return min_v + _below(random, span)


def _below(random: SourceOfRandomness, span: int) -> int:
    bits = span.bit_length()
    generated = random.next_big_integer(bits)
    while generated >= span:
        generated = random.next_big_integer(bits)
    return generated


def in_range(min_v: Optional[Any], max_v: Optional[Any]) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        if min_v is not None and value < min_v:
            return False
        if max_v is not None and value > max_v:
            return False
        return True

    return check


def least_magnitude(min_v: Optional[Any], max_v: Optional[Any], zero: Any) -> Any:
    """The permitted value closest to ``zero``."""
    if min_v is not None and min_v > zero:
        return min_v
    if max_v is not None and max_v < zero:
        return max_v
    return zero
