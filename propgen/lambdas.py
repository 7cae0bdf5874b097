from __future__ import annotations

from typing import Any

from propgen.distribution import GeometricDistribution
from propgen.generator import ComponentizedGenerator, Generator
from propgen.random_source import SourceOfRandomness
from propgen.registry import register
from propgen.status import GenerationStatus, SimpleGenerationStatus


class GeneratedFunction:
    """A callable whose results are generated, repeatably, from its arguments."""

    def __init__(self, return_generator: Generator[Any], attempts: int):
        self._return_generator = return_generator
        self._attempts = attempts

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        # Arguments must be hashable; equal arguments seed equal sources.
        seed = hash((args, tuple(sorted(kwargs.items()))))
        source = SourceOfRandomness(seed=seed)
        status = SimpleGenerationStatus(GeometricDistribution(), source, self._attempts)
        return self._return_generator.generate(source, status)

    def __repr__(self) -> str:
        return f"a randomly generated function returning values of {self._return_generator!r}"


@register("function", "callable")
class LambdaGenerator(ComponentizedGenerator[GeneratedFunction]):
    TYPES = ("function", "callable")
    VALUE_TYPES = (GeneratedFunction,)

    def __init__(self, return_generator: Generator[Any]):
        super().__init__(return_generator)
        self._return_generator = return_generator

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> GeneratedFunction:
        return GeneratedFunction(self._return_generator, status.attempts())

    def can_shrink(self, larger: Any) -> bool:
        return False
