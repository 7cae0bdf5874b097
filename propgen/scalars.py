from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from propgen import code_points
from propgen.constraints import InRange, Size
from propgen.errors import GeneratorConfigurationError, generator_error
from propgen.generator import Configurator, Generator
from propgen.lists import removals, shrinks_of_one_item
from propgen.random_source import CHAR_MAX, CHAR_MIN, SourceOfRandomness
from propgen.ranges import check_range
from propgen.registry import register
from propgen.status import GenerationStatus

_SURROGATE_COUNT = code_points.SURROGATES[1] - code_points.SURROGATES[0] + 1


@register("bool", "boolean")
class BooleanGenerator(Generator[bool]):
    TYPES = ("bool", "boolean")
    VALUE_TYPES = (bool,)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> bool:
        return random.next_boolean()

    def do_shrink(self, random: SourceOfRandomness, larger: bool) -> List[bool]:
        return [False] if larger else []

    def magnitude(self, value: Any) -> Decimal:
        return Decimal(1 if value else 0)


@register("char", "character")
class CharacterGenerator(Generator[str]):
    """Single characters from the basic multilingual plane, surrogates excluded."""

    TYPES = ("char", "character")
    VALUE_TYPES = (str,)

    def __init__(self) -> None:
        self._min = CHAR_MIN
        self._max = CHAR_MAX

    def _configurators(self) -> Dict[type, Configurator]:
        return {InRange: self.configure_in_range}

    def configure_in_range(self, range_: InRange) -> None:
        location = "CharacterGenerator InRange"
        min_v = self._code_point(range_.min or range_.min_char, location, "min", CHAR_MIN)
        max_v = self._code_point(range_.max or range_.max_char, location, "max", CHAR_MAX)
        check_range(location, min_v, max_v)
        if all(code_points.is_surrogate(cp) for cp in (min_v, max_v)):
            raise GeneratorConfigurationError(
                generator_error(
                    location,
                    "range holds only surrogate code points",
                    "choose a range outside U+D800..U+DFFF",
                )
            )
        self._min, self._max = min_v, max_v

    @staticmethod
    def _code_point(value: Optional[str], location: str, label: str, default: int) -> int:
        if value is None:
            return default
        if not isinstance(value, str) or len(value) != 1:
            raise GeneratorConfigurationError(
                generator_error(location, f"{label} must be a single character", f"set {label} like 'a'")
            )
        return ord(value)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> str:
        code_point = random.next_code_point(self._min, self._max)
        while code_points.is_surrogate(code_point):
            code_point = random.next_code_point(self._min, self._max)
        return chr(code_point)

    def _permitted(self, code_point: int) -> bool:
        return self._min <= code_point <= self._max and code_points.is_legal(code_point)

    def can_shrink(self, larger: Any) -> bool:
        return isinstance(larger, str) and len(larger) == 1 and code_points.is_legal(ord(larger))

    def do_shrink(self, random: SourceOfRandomness, larger: str) -> List[str]:
        shrinker = code_points.CodePointShrink(self._permitted)
        return [chr(each) for each in shrinker.shrink(random, ord(larger))]

    def magnitude(self, value: Any) -> Decimal:
        return code_points.magnitude(ord(value))


@register("str", "string")
class StringGenerator(Generator[str]):
    """Strings of independently drawn code points.

    Shrinks remove runs of characters first, then nudge single characters
    toward lowercase ASCII.
    """

    TYPES = ("str", "string")
    VALUE_TYPES = (str,)

    def __init__(self) -> None:
        self._length_range: Optional[Size] = None

    def _configurators(self) -> Dict[type, Configurator]:
        return {Size: self.configure_size}

    def configure_size(self, size: Size) -> None:
        location = "StringGenerator Size"
        if size.min < 0:
            raise GeneratorConfigurationError(
                generator_error(location, f"min must be >= 0, got {size.min}", "use a non-negative length")
            )
        check_range(location, size.min, size.max)
        self._length_range = size

    def _length(self, random: SourceOfRandomness, status: GenerationStatus) -> int:
        if self._length_range is not None:
            return random.next_int(self._length_range.min, self._length_range.max)
        return status.size()

    def _in_length_range(self, text: str) -> bool:
        return self._length_range is None or (
            self._length_range.min <= len(text) <= self._length_range.max
        )

    def _next_code_point(self, random: SourceOfRandomness) -> int:
        # Draw from the legal count and step over the surrogate block.
        code_point = random.next_code_point(0, code_points.MAX_CODE_POINT - _SURROGATE_COUNT)
        if code_point >= code_points.SURROGATES[0]:
            code_point += _SURROGATE_COUNT
        return code_point

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> str:
        length = self._length(random, status)
        return "".join(chr(self._next_code_point(random)) for _ in range(length))

    def can_shrink(self, larger: Any) -> bool:
        return isinstance(larger, str) and all(code_points.is_legal(ord(c)) for c in larger)

    def do_shrink(self, random: SourceOfRandomness, larger: str) -> List[str]:
        points = [ord(c) for c in larger]
        shrinker = code_points.CodePointShrink(code_points.is_legal)

        shrinks: List[str] = []
        for candidate in removals(points):
            text = "".join(chr(cp) for cp in candidate)
            if self._in_length_range(text) and text not in shrinks:
                shrinks.append(text)
        for candidate in shrinks_of_one_item(random, points, shrinker.shrink):
            text = "".join(chr(cp) for cp in candidate)
            if self._in_length_range(text) and text not in shrinks:
                shrinks.append(text)
        return shrinks

    def magnitude(self, value: Any) -> Decimal:
        if not value:
            return Decimal(0)
        total = sum((code_points.magnitude(ord(c)) for c in value), Decimal(0))
        return Decimal(len(value)) * total


@register("enum")
class EnumGenerator(Generator[Enum]):
    """Members of one ``Enum`` class; earlier members count as smaller."""

    TYPES = ("enum",)

    def __init__(self, enum_class: Type[Enum]):
        members = list(enum_class)
        if not members:
            raise GeneratorConfigurationError(
                generator_error(
                    "EnumGenerator",
                    f"{enum_class.__name__} has no members",
                    "generate from an enum with at least one member",
                )
            )
        self._enum_class = enum_class
        self._members = members

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> Enum:
        return random.choose(self._members)

    def can_shrink(self, larger: Any) -> bool:
        return isinstance(larger, self._enum_class)

    def do_shrink(self, random: SourceOfRandomness, larger: Enum) -> List[Enum]:
        return self._members[: self._members.index(larger)]

    def magnitude(self, value: Any) -> Decimal:
        return Decimal(self._members.index(value))

    def __repr__(self) -> str:
        return f"EnumGenerator({self._enum_class.__name__})"
