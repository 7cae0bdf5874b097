"""Generators over fixed sets of literal values."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, List

from propgen.errors import DomainExhaustedError, GeneratorConfigurationError, generator_error
from propgen.generator import Generator
from propgen.random_source import SourceOfRandomness
from propgen.status import GenerationStatus


def _deduplicated(values: Iterable[Any]) -> List[Any]:
    unique: List[Any] = []
    for each in values:
        if each not in unique:
            unique.append(each)
    return unique


class ExhaustiveDomainGenerator(Generator[Any]):
    """Hands out each literal once, in order. Check ``has_more`` before drawing."""

    def __init__(self, values: Iterable[Any]):
        self._values = _deduplicated(values)
        self._next_index = 0

    def has_more(self) -> bool:
        return self._next_index < len(self._values)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> Any:
        if not self.has_more():
            raise DomainExhaustedError(
                generator_error(
                    "ExhaustiveDomainGenerator",
                    f"all {len(self._values)} values have already been generated",
                    "check has_more() before generating",
                )
            )
        value = self._values[self._next_index]
        self._next_index += 1
        return value

    def can_shrink(self, larger: Any) -> bool:
        return larger in self._values

    def __repr__(self) -> str:
        return f"ExhaustiveDomainGenerator({self._values!r})"


class SamplingDomainGenerator(Generator[Any]):
    def __init__(self, values: Iterable[Any]):
        self._values = _deduplicated(values)
        if not self._values:
            raise GeneratorConfigurationError(
                generator_error(
                    "SamplingDomainGenerator",
                    "domain is empty",
                    "provide at least one value to sample from",
                )
            )

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> Any:
        return random.choose(self._values)

    def can_shrink(self, larger: Any) -> bool:
        return larger in self._values

    def __repr__(self) -> str:
        return f"SamplingDomainGenerator({self._values!r})"


class GuaranteeValuesGenerator(Generator[Any]):
    """Every guaranteed value first, then whatever the fallback produces."""

    def __init__(self, guaranteed: ExhaustiveDomainGenerator, fallback: Generator[Any]):
        self._guaranteed = guaranteed
        self._fallback = fallback

    def types(self) -> List[str]:
        return self._fallback.types()

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> Any:
        if self._guaranteed.has_more():
            return self._guaranteed.generate(random, status)
        return self._fallback.generate(random, status)

    def can_shrink(self, larger: Any) -> bool:
        return self._fallback.can_shrink(larger)

    def do_shrink(self, random: SourceOfRandomness, larger: Any) -> List[Any]:
        return self._fallback.shrink(random, larger)

    def magnitude(self, value: Any) -> Decimal:
        return self._fallback.magnitude(value)

    def accepts(self, constraint: Any) -> bool:
        return self._fallback.accepts(constraint)

    def configure(self, *constraints: Any) -> "GuaranteeValuesGenerator":
        self._fallback.configure(*constraints)
        return self
