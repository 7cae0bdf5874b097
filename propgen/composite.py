"""Weighted union of alternative generators for the same requested type."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, List, Sequence

from propgen.errors import GeneratorConfigurationError, generator_error
from propgen.generator import Generator, constraint_names
from propgen.items import Weighted, choose_weighted
from propgen.random_source import SourceOfRandomness
from propgen.status import GenerationStatus

logger = logging.getLogger("propgen.composite")


class CompositeGenerator(Generator[Any]):
    def __init__(self, composed: Sequence[Weighted[Generator[Any]]]):
        if not composed:
            raise GeneratorConfigurationError(
                generator_error(
                    "CompositeGenerator",
                    "needs at least one candidate generator",
                    "pass one or more Weighted(generator, weight) entries",
                )
            )
        self._composed: List[Weighted[Generator[Any]]] = list(composed)

    def types(self) -> List[str]:
        tags: List[str] = []
        for each in self._composed:
            for tag in each.item.types():
                if tag not in tags:
                    tags.append(tag)
        return tags

    def can_register_as(self, tag: str) -> bool:
        return any(each.item.can_register_as(tag) for each in self._composed)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> Any:
        choice = choose_weighted(self._composed, random)
        return choice.generate(random, status)

    def can_shrink(self, larger: Any) -> bool:
        return any(each.item.can_shrink(larger) for each in self._composed)

    def _shrinkers(self, value: Any) -> List[Weighted[Generator[Any]]]:
        return [each for each in self._composed if each.item.can_shrink(value)]

    def do_shrink(self, random: SourceOfRandomness, larger: Any) -> List[Any]:
        choice = choose_weighted(self._shrinkers(larger), random)
        return list(choice.shrink(random, larger))

    def magnitude(self, value: Any) -> Decimal:
        shrinkers = self._shrinkers(value)
        if not shrinkers:
            raise ValueError(f"no candidate generator can measure {value!r}")
        return shrinkers[0].item.magnitude(value)

    def composed(self, index: int) -> Generator[Any]:
        return self._composed[index].item

    def number_of_composed_generators(self) -> int:
        return len(self._composed)

    def accepts(self, constraint: Any) -> bool:
        return any(each.item.accepts(constraint) for each in self._composed)

    def configure(self, *constraints: Any) -> "CompositeGenerator":
        candidates: List[Weighted[Generator[Any]]] = []
        for each in self._composed:
            if not all(each.item.accepts(c) for c in constraints):
                logger.debug("Dropping %r: does not accept %s", each.item, constraint_names(constraints))
                continue
            try:
                each.item.configure(*constraints)
            except GeneratorConfigurationError as exc:
                logger.debug("Dropping %r: %s", each.item, exc)
                continue
            candidates.append(each)

        if not candidates:
            described = [type(each.item).__name__ for each in self._composed]
            raise GeneratorConfigurationError(
                generator_error(
                    "CompositeGenerator",
                    f"none of the candidate generators {described} understands all of the "
                    f"constraints [{constraint_names(constraints)}]",
                    "remove constraints that no candidate supports or register a generator that supports them",
                )
            )
        self._composed = candidates
        return self

    def __repr__(self) -> str:
        inner = ", ".join(f"{each.item!r}*{each.weight}" for each in self._composed)
        return f"CompositeGenerator([{inner}])"
