"""Per-attempt generation status: the size hint plus a typed side channel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from propgen.distribution import GeometricDistribution
from propgen.random_source import SourceOfRandomness

T = TypeVar("T")


@dataclass(frozen=True)
class Key(Generic[T]):
    """Typed token for values stored on a generation status."""

    name: str
    type: Type[T]

    def cast(self, value: Any) -> T:
        if not isinstance(value, self.type):
            raise TypeError(
                f"Key '{self.name}' holds {self.type.__name__} values, got {type(value).__name__}"
            )
        return value


class GenerationStatus:
    def __init__(self, attempts: int):
        if attempts < 0:
            raise ValueError(f"attempts must be >= 0, got {attempts}")
        self._attempts = attempts
        self._context: Dict[Key[Any], Any] = {}

    def size(self) -> int:
        raise NotImplementedError

    def attempts(self) -> int:
        return self._attempts

    def set_value(self, key: Key[T], value: T) -> "GenerationStatus":
        self._context[key] = key.cast(value)
        return self

    def value(self, key: Key[T]) -> Optional[T]:
        if key not in self._context:
            return None
        return key.cast(self._context[key])


class SimpleGenerationStatus(GenerationStatus):
    """Samples its size once from a geometric distribution with mean attempts + 1."""

    def __init__(
        self,
        distribution: GeometricDistribution,
        random: SourceOfRandomness,
        attempts: int,
    ):
        super().__init__(attempts)
        self._size = distribution.sample_with_mean(attempts + 1, random)

    def size(self) -> int:
        return self._size


class FixedGenerationStatus(GenerationStatus):
    def __init__(self, size: int, attempts: int = 0):
        super().__init__(attempts)
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")
        self._size = size

    def size(self) -> int:
        return self._size
