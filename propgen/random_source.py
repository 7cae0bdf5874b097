"""A source of randomness shared by every generator call.

``SourceOfRandomness`` wraps ``random.Random`` and offers the bounded draws
generators need. All bounds are inclusive unless stated otherwise. The
source holds sequential state, so one instance must not be shared across
threads without external locking.
"""

from __future__ import annotations

import random
import struct
from typing import Any, Iterable, Optional, Sequence

BYTE_MIN, BYTE_MAX = -(2**7), 2**7 - 1
SHORT_MIN, SHORT_MAX = -(2**15), 2**15 - 1
INT_MIN, INT_MAX = -(2**31), 2**31 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1
CHAR_MIN, CHAR_MAX = 0, 0xFFFF
FLOAT_MAX = 3.4028234663852886e38
DOUBLE_MAX = 1.7976931348623157e308


def to_float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _check_bounds(min_v: Any, max_v: Any) -> None:
    if min_v > max_v:
        raise ValueError(f"bad range, {min_v} > {max_v}")


def _check_width(min_v: int, max_v: int, low: int, high: int, label: str) -> None:
    _check_bounds(min_v, max_v)
    if min_v < low or max_v > high:
        raise ValueError(f"{label} range [{min_v}, {max_v}] exceeds [{low}, {high}]")


class SourceOfRandomness:
    def __init__(self, delegate: Optional[random.Random] = None, seed: Optional[int] = None):
        self._delegate = delegate if delegate is not None else random.Random()
        self._seed = seed
        if seed is not None:
            self._delegate.seed(seed)

    @property
    def delegate(self) -> random.Random:
        return self._delegate

    def seed(self) -> Optional[int]:
        return self._seed

    def set_seed(self, seed: int) -> None:
        self._seed = seed
        self._delegate.seed(seed)

    def next_boolean(self) -> bool:
        return self._delegate.random() < 0.5

    def next_int(self, min_v: int = INT_MIN, max_v: int = INT_MAX) -> int:
        _check_width(min_v, max_v, INT_MIN, INT_MAX, "int")
        return self._delegate.randint(min_v, max_v)

    def next_long(self, min_v: int = LONG_MIN, max_v: int = LONG_MAX) -> int:
        _check_width(min_v, max_v, LONG_MIN, LONG_MAX, "long")
        return self._delegate.randint(min_v, max_v)

    def next_short(self, min_v: int = SHORT_MIN, max_v: int = SHORT_MAX) -> int:
        _check_width(min_v, max_v, SHORT_MIN, SHORT_MAX, "short")
        return self._delegate.randint(min_v, max_v)

    def next_byte(self, min_v: int = BYTE_MIN, max_v: int = BYTE_MAX) -> int:
        _check_width(min_v, max_v, BYTE_MIN, BYTE_MAX, "byte")
        return self._delegate.randint(min_v, max_v)

    def next_char(self, min_c: str = chr(CHAR_MIN), max_c: str = chr(CHAR_MAX)) -> str:
        _check_bounds(min_c, max_c)
        return chr(self._delegate.randint(ord(min_c), ord(max_c)))

    def next_code_point(self, min_v: int, max_v: int) -> int:
        _check_bounds(min_v, max_v)
        return self._delegate.randint(min_v, max_v)

    def next_double(self, min_v: float = 0.0, max_v: float = 1.0) -> float:
        _check_bounds(min_v, max_v)
        if min_v == max_v:
            return min_v
        u = self._delegate.random()
        # Interpolating keeps the draw finite even for [-DOUBLE_MAX, DOUBLE_MAX].
        value = min_v * (1.0 - u) + max_v * u
        return min(max(value, min_v), max_v)

    def next_float(self, min_v: float = 0.0, max_v: float = 1.0) -> float:
        return to_float32(self.next_double(min_v, max_v))

    def next_big_integer(self, number_of_bits: int) -> int:
        if number_of_bits < 0:
            raise ValueError(f"negative number of bits: {number_of_bits}")
        return self._delegate.getrandbits(number_of_bits)

    def choose(self, items: Iterable[Any]) -> Any:
        pool: Sequence[Any] = items if isinstance(items, (list, tuple)) else list(items)
        if not pool:
            raise ValueError("cannot choose from an empty collection")
        return self._delegate.choice(pool)
