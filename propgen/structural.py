"""Generators that compose values out of component generators."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional, Tuple

from propgen.constraints import Distinct, Size
from propgen.errors import GeneratorConfigurationError, generator_error
from propgen.generator import ComponentizedGenerator, Configurator, Generator
from propgen.lists import is_distinct, removals, shrinks_of_one_item
from propgen.random_source import SourceOfRandomness
from propgen.ranges import check_range
from propgen.registry import register
from propgen.status import GenerationStatus


# Consecutive duplicate draws tolerated before giving up on a distinct fill.
DISTINCT_DRAW_LIMIT = 1000

OPTIONAL_EMPTY_PROBABILITY = 0.25


def _stream(generator: Generator[Any], random: SourceOfRandomness, status: GenerationStatus) -> Iterator[Any]:
    while True:
        yield generator.generate(random, status)


def _take_distinct(items: Iterator[Any], length: int, location: str) -> List[Any]:
    taken: List[Any] = []
    misses = 0
    while len(taken) < length:
        each = next(items)
        if each in taken:
            misses += 1
            if misses > DISTINCT_DRAW_LIMIT:
                raise ValueError(
                    generator_error(
                        location,
                        f"could not draw {length} distinct values after {DISTINCT_DRAW_LIMIT} duplicates",
                        "widen the component range or lower the Size max",
                    )
                )
            continue
        misses = 0
        taken.append(each)
    return taken


def _sum_magnitudes(generator: Generator[Any], values: Any) -> Decimal:
    return sum((generator.magnitude(each) for each in values), Decimal(0))


class SizedGenerator(ComponentizedGenerator[Any]):
    """Shared ``Size``/``Distinct`` handling for container generators."""

    def __init__(self, *components: Generator[Any]):
        super().__init__(*components)
        self._length_range: Optional[Size] = None
        self._distinct = False

    def _configurators(self) -> Dict[type, Configurator]:
        return {Size: self.configure_size, Distinct: self.configure_distinct}

    def configure_size(self, size: Size) -> None:
        location = f"{type(self).__name__} Size"
        if size.min < 0:
            raise GeneratorConfigurationError(
                generator_error(location, f"min must be >= 0, got {size.min}", "use a non-negative size")
            )
        check_range(location, size.min, size.max)
        self._length_range = size

    def configure_distinct(self, distinct: Distinct) -> None:
        self._distinct = distinct is not None

    def _length(self, random: SourceOfRandomness, status: GenerationStatus) -> int:
        if self._length_range is not None:
            return random.next_int(self._length_range.min, self._length_range.max)
        return status.size()

    def _in_length_range(self, items: Any) -> bool:
        return self._length_range is None or (
            self._length_range.min <= len(items) <= self._length_range.max
        )


@register("array", "list")
class ArrayGenerator(SizedGenerator):
    """Lists of component values.

    Without a ``Size`` constraint the length is the status size. With
    ``Distinct`` no two elements compare equal.
    """

    TYPES = ("array", "list")
    VALUE_TYPES = (list,)

    def __init__(self, component: Generator[Any]):
        super().__init__(component)
        self._component = component

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> List[Any]:
        length = self._length(random, status)
        items = _stream(self._component, random, status)
        if self._distinct:
            return _take_distinct(items, length, "ArrayGenerator")
        return [next(items) for _ in range(length)]

    def can_shrink(self, larger: Any) -> bool:
        return isinstance(larger, list) and all(self._component.can_shrink(e) for e in larger)

    def do_shrink(self, random: SourceOfRandomness, larger: List[Any]) -> List[List[Any]]:
        shrinks = [each for each in removals(larger) if self._in_length_range(each)]

        one_item_shrinks = shrinks_of_one_item(random, larger, self._component.shrink)
        if self._distinct:
            one_item_shrinks = [each for each in one_item_shrinks if is_distinct(each)]
        shrinks.extend(each for each in one_item_shrinks if self._in_length_range(each))
        return shrinks

    def magnitude(self, value: Any) -> Decimal:
        if not value:
            return Decimal(0)
        return Decimal(len(value)) * _sum_magnitudes(self._component, value)


@register("set")
class SetGenerator(SizedGenerator):
    """Frozen sets of hashable component values; always distinct."""

    TYPES = ("set",)
    VALUE_TYPES = (frozenset, set)

    def __init__(self, component: Generator[Any]):
        super().__init__(component)
        self._component = component
        self._distinct = True

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> frozenset:
        length = self._length(random, status)
        return frozenset(_take_distinct(_stream(self._component, random, status), length, "SetGenerator"))

    def can_shrink(self, larger: Any) -> bool:
        return isinstance(larger, (set, frozenset)) and all(self._component.can_shrink(e) for e in larger)

    def _ordered(self, items: Any) -> List[Any]:
        return sorted(items, key=lambda e: (self._component.magnitude(e), repr(e)))

    def do_shrink(self, random: SourceOfRandomness, larger: Any) -> List[frozenset]:
        ordered = self._ordered(larger)
        shrinks: List[frozenset] = []
        for each in removals(ordered):
            if self._in_length_range(each):
                shrinks.append(frozenset(each))
        for each in shrinks_of_one_item(random, ordered, self._component.shrink):
            candidate = frozenset(each)
            # Collapsing two elements into one would change the size silently.
            if len(candidate) == len(each) and self._in_length_range(candidate) and candidate not in shrinks:
                shrinks.append(candidate)
        return shrinks

    def magnitude(self, value: Any) -> Decimal:
        if not value:
            return Decimal(0)
        return Decimal(len(value)) * _sum_magnitudes(self._component, value)


@register("map", "dict")
class MapGenerator(SizedGenerator):
    """Dicts whose keys and values come from two component generators."""

    TYPES = ("map", "dict")
    VALUE_TYPES = (dict,)
    NEEDED_COMPONENTS = 2

    def __init__(self, key: Generator[Any], value: Generator[Any]):
        super().__init__(key, value)
        self._key = key
        self._value = value

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> Dict[Any, Any]:
        length = self._length(random, status)
        keys = _take_distinct(_stream(self._key, random, status), length, "MapGenerator")
        return {key: self._value.generate(random, status) for key in keys}

    def can_shrink(self, larger: Any) -> bool:
        return isinstance(larger, dict) and all(
            self._key.can_shrink(k) and self._value.can_shrink(v) for k, v in larger.items()
        )

    def _entry_shrinks(self, random: SourceOfRandomness, entry: Tuple[Any, Any]) -> List[Tuple[Any, Any]]:
        key, value = entry
        shrinks = [(smaller, value) for smaller in self._key.shrink(random, key)]
        shrinks.extend((key, smaller) for smaller in self._value.shrink(random, value))
        return shrinks

    def do_shrink(self, random: SourceOfRandomness, larger: Dict[Any, Any]) -> List[Dict[Any, Any]]:
        entries = list(larger.items())
        shrinks = [dict(each) for each in removals(entries) if self._in_length_range(each)]

        for each in shrinks_of_one_item(random, entries, self._entry_shrinks):
            if is_distinct([key for key, _ in each]) and self._in_length_range(each):
                shrinks.append(dict(each))
        return shrinks

    def magnitude(self, value: Any) -> Decimal:
        if not value:
            return Decimal(0)
        keys = _sum_magnitudes(self._key, value.keys())
        values = _sum_magnitudes(self._value, value.values())
        return Decimal(len(value)) * keys + values


@register("optional")
class OptionalGenerator(ComponentizedGenerator[Any]):
    """``None`` a quarter of the time, otherwise a component value.

    Unlike ``NullableGenerator``, absence is part of this generator's own
    value space: a present value shrinks to ``None`` first.
    """

    TYPES = ("optional",)

    def __init__(self, component: Generator[Any]):
        super().__init__(component)
        self._component = component

    def accepts(self, constraint: Any) -> bool:
        return self._component.accepts(constraint)

    def configure(self, *constraints: Any) -> "OptionalGenerator":
        self._component.configure(*constraints)
        return self

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> Optional[Any]:
        if random.next_double() < OPTIONAL_EMPTY_PROBABILITY:
            return None
        return self._component.generate(random, status)

    def can_shrink(self, larger: Any) -> bool:
        return larger is None or self._component.can_shrink(larger)

    def do_shrink(self, random: SourceOfRandomness, larger: Optional[Any]) -> List[Optional[Any]]:
        if larger is None:
            return []
        return [None, *self._component.shrink(random, larger)]

    def magnitude(self, value: Any) -> Decimal:
        if value is None:
            return Decimal(0)
        return self._component.magnitude(value)

