"""Declarative constraints handed to generators at configuration time.

Each constraint is an immutable value. A generator advertises which
constraint types it understands through ``Generator.accepts``; the registry
and the composite generator use that to narrow their candidates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class InRange:
    """Numeric range. ``min``/``max`` are decimal strings and win over the
    type-specific bounds whenever they are non-empty."""

    min: str = ""
    max: str = ""
    min_byte: Optional[int] = None
    max_byte: Optional[int] = None
    min_short: Optional[int] = None
    max_short: Optional[int] = None
    min_int: Optional[int] = None
    max_int: Optional[int] = None
    min_long: Optional[int] = None
    max_long: Optional[int] = None
    min_float: Optional[float] = None
    max_float: Optional[float] = None
    min_double: Optional[float] = None
    max_double: Optional[float] = None
    min_char: Optional[str] = None
    max_char: Optional[str] = None


@dataclass(frozen=True)
class Size:
    """Inclusive bounds on the number of elements of a container."""

    min: int = 0
    max: int = 0


@dataclass(frozen=True)
class Precision:
    """Number of digits after the decimal point for big decimals."""

    scale: int


@dataclass(frozen=True)
class Distinct:
    pass


@dataclass(frozen=True)
class NullAllowed:
    probability: float = 0.2


Constraint = Union[InRange, Size, Precision, Distinct, NullAllowed]


def describe(constraints) -> list[str]:
    return [type(c).__name__ for c in constraints]
