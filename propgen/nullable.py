from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional

from propgen.constraints import NullAllowed
from propgen.errors import GeneratorConfigurationError, generator_error
from propgen.generator import Generator
from propgen.random_source import SourceOfRandomness
from propgen.status import GenerationStatus


def check_probability(probability: float) -> float:
    if isinstance(probability, bool) or not 0.0 <= probability <= 1.0:
        raise GeneratorConfigurationError(
            generator_error(
                "NullAllowed",
                f"probability must be in [0, 1], got {probability!r}",
                "set probability between 0 and 1 inclusive",
            )
        )
    return float(probability)


class NullableGenerator(Generator[Optional[Any]]):
    """Returns ``None`` with the configured probability, else the delegate's value.

    Everything except ``generate`` is forwarded to the delegate.
    """

    def __init__(self, delegate: Generator[Any], probability: float = 0.2):
        self._delegate = delegate
        self._probability = check_probability(probability)

    @property
    def delegate(self) -> Generator[Any]:
        return self._delegate

    @property
    def probability(self) -> float:
        return self._probability

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> Optional[Any]:
        if random.next_double() < self._probability:
            return None
        return self._delegate.generate(random, status)

    def types(self) -> List[str]:
        return self._delegate.types()

    def can_register_as(self, tag: str) -> bool:
        return self._delegate.can_register_as(tag)

    def can_shrink(self, larger: Any) -> bool:
        return self._delegate.can_shrink(larger)

    def shrink(self, random: SourceOfRandomness, larger: Any) -> List[Any]:
        return self._delegate.shrink(random, larger)

    def do_shrink(self, random: SourceOfRandomness, larger: Any) -> List[Any]:
        return self._delegate.do_shrink(random, larger)

    def magnitude(self, value: Any) -> Decimal:
        return self._delegate.magnitude(value)

    def accepts(self, constraint: Any) -> bool:
        return isinstance(constraint, NullAllowed) or self._delegate.accepts(constraint)

    def configure(self, *constraints: Any) -> "NullableGenerator":
        passed_on = []
        for constraint in constraints:
            if isinstance(constraint, NullAllowed):
                self._probability = check_probability(constraint.probability)
            else:
                passed_on.append(constraint)
        if passed_on:
            self._delegate.configure(*passed_on)
        return self

    def __repr__(self) -> str:
        return f"NullableGenerator({self._delegate!r}, probability={self._probability})"
