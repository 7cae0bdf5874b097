"""Generator contract and the ``Gen`` combinators.

A ``Gen`` is anything that can produce a value from a source of randomness
and a generation status. A ``Generator`` adds what a shrinking driver
needs: the set of type tags it produces, the constraints it understands,
``shrink`` and ``magnitude``.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

from propgen.constraints import describe
from propgen.errors import GeneratorConfigurationError, generator_error
from propgen.items import Weighted, choose_weighted
from propgen.random_source import SourceOfRandomness
from propgen.status import GenerationStatus

logger = logging.getLogger("propgen.generator")

T = TypeVar("T")
U = TypeVar("U")

Configurator = Callable[[Any], None]


class Gen(Generic[T]):
    """A strategy for generating random values."""

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> T:
        raise NotImplementedError

    def map(self, mapper: Callable[[T], U]) -> "Gen[U]":
        return FunctionGen(lambda random, status: mapper(self.generate(random, status)))

    def flat_map(self, mapper: Callable[[T], "Gen[U]"]) -> "Gen[U]":
        return FunctionGen(
            lambda random, status: mapper(self.generate(random, status)).generate(random, status)
        )

    def filter(self, condition: Callable[[T], bool]) -> "Gen[T]":
        """Regenerate until ``condition`` holds. Loops forever if it never does."""

        def generate(random: SourceOfRandomness, status: GenerationStatus) -> T:
            value = self.generate(random, status)
            while not condition(value):
                value = self.generate(random, status)
            return value

        return FunctionGen(generate)

    def filter_optional(self, condition: Callable[[T], bool]) -> "Gen[Optional[T]]":
        """One draw; the value when it meets ``condition``, else ``None``."""

        def generate(random: SourceOfRandomness, status: GenerationStatus) -> Optional[T]:
            value = self.generate(random, status)
            return value if condition(value) else None

        return FunctionGen(generate)

    def times(self, times: int) -> "Gen[List[T]]":
        if times < 0:
            raise ValueError(f"negative times: {times}")
        return FunctionGen(
            lambda random, status: [self.generate(random, status) for _ in range(times)]
        )

    @staticmethod
    def pure(constant: U) -> "Gen[U]":
        return FunctionGen(lambda random, status: constant)

    @staticmethod
    def one_of(first: Any, *rest: Any) -> "Gen[Any]":
        """Uniform choice among values, or among generators when given generators."""
        choices = [first, *rest]
        if all(isinstance(each, Gen) for each in choices):
            return FunctionGen(
                lambda random, status: random.choose(choices).generate(random, status)
            )
        return FunctionGen(lambda random, status: random.choose(choices))

    @staticmethod
    def frequency(first: Tuple[int, "Gen[U]"], *rest: Tuple[int, "Gen[U]"]) -> "Gen[U]":
        weighted = [Weighted(gen, weight) for weight, gen in (first, *rest)]
        return FunctionGen(
            lambda random, status: choose_weighted(weighted, random).generate(random, status)
        )


def freq(weight: int, generator: Gen[U]) -> Tuple[int, Gen[U]]:
    return (weight, generator)


class FunctionGen(Gen[T]):
    def __init__(self, fn: Callable[[SourceOfRandomness, GenerationStatus], T]):
        self._fn = fn

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> T:
        return self._fn(random, status)


class Generator(Gen[T]):
    """Base class for configurable, shrinkable generators.

    Subclasses declare ``TYPES`` (the type tags they can be registered for)
    and ``VALUE_TYPES`` (the Python classes their values are instances of),
    and return their constraint handlers from ``_configurators``.
    """

    TYPES: Tuple[str, ...] = ()
    VALUE_TYPES: Tuple[type, ...] = (object,)

    def types(self) -> List[str]:
        return list(self.TYPES)

    def can_register_as(self, tag: str) -> bool:
        return tag in self.TYPES

    def can_shrink(self, larger: Any) -> bool:
        if isinstance(larger, bool) and bool not in self.VALUE_TYPES:
            return False
        return isinstance(larger, self.VALUE_TYPES)

    def shrink(self, random: SourceOfRandomness, larger: Any) -> List[T]:
        if not self.can_shrink(larger):
            raise ValueError(
                generator_error(
                    type(self).__name__,
                    f"cannot shrink {larger!r}",
                    "shrink only values this generator can produce",
                )
            )
        shrinks = [
            each
            for each in self.do_shrink(random, larger)
            if not _same_value(each, larger) and self.can_shrink(each)
        ]
        logger.debug("%s: %d shrinks of %r", type(self).__name__, len(shrinks), larger)
        return shrinks

    def do_shrink(self, random: SourceOfRandomness, larger: T) -> List[T]:
        return []

    def magnitude(self, value: Any) -> Decimal:
        return Decimal(0)

    def _configurators(self) -> Dict[type, Configurator]:
        return {}

    def accepts(self, constraint: Any) -> bool:
        return type(constraint) in self._configurators()

    def configure(self, *constraints: Any) -> "Generator[T]":
        configurators = self._configurators()
        for constraint in constraints:
            handler = configurators.get(type(constraint))
            if handler is None:
                raise GeneratorConfigurationError(
                    generator_error(
                        type(self).__name__,
                        f"does not understand constraint {type(constraint).__name__}",
                        f"use one of: {', '.join(sorted(c.__name__ for c in configurators)) or '(none)'}",
                    )
                )
            handler(constraint)
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ComponentizedGenerator(Generator[T]):
    """Generator whose values are built from values of component generators."""

    NEEDED_COMPONENTS = 1

    def __init__(self, *components: Generator[Any]):
        if len(components) != self.NEEDED_COMPONENTS:
            raise GeneratorConfigurationError(
                generator_error(
                    type(self).__name__,
                    f"needs {self.NEEDED_COMPONENTS} component generator(s), got {len(components)}",
                    "pass one generator per component type",
                )
            )
        self._components: List[Generator[Any]] = list(components)

    def component_generators(self) -> List[Generator[Any]]:
        return list(self._components)

    def configure_component(self, index: int, *constraints: Any) -> "ComponentizedGenerator[T]":
        self._components[index].configure(*constraints)
        return self

    def __repr__(self) -> str:
        inner = ", ".join(repr(c) for c in self._components)
        return f"{type(self).__name__}({inner})"


def _same_value(left: Any, right: Any) -> bool:
    if type(left) is not type(right):
        return False
    return left == right


def constraint_names(constraints: Sequence[Any]) -> str:
    return ", ".join(describe(constraints))
