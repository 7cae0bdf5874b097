"""Explicit registry from type tags to generator factories.

Generator classes register themselves with ``@register(tag, ...)``; every
tag must be one the class declares in ``TYPES``. ``generator_for`` builds
a fresh generator per request, or a composite over all registered
candidates when more than one class serves the tag.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Sequence, Type

from propgen.composite import CompositeGenerator
from propgen.constraints import NullAllowed
from propgen.generator import Generator
from propgen.items import Weighted
from propgen.nullable import NullableGenerator

logger = logging.getLogger("propgen.registry")

GeneratorFactory = Callable[..., Generator[Any]]

REGISTRY: Dict[str, List[GeneratorFactory]] = {}


def register(*tags: str):
    def deco(cls: Type[Generator[Any]]) -> Type[Generator[Any]]:
        for tag in tags:
            if tag not in cls.TYPES:
                raise KeyError(
                    f"Generator '{cls.__name__}' cannot register as '{tag}'. Declared types: {list(cls.TYPES)}"
                )
            factories = REGISTRY.setdefault(tag, [])
            if cls in factories:
                raise KeyError(
                    f"Generator '{cls.__name__}' is already registered for '{tag}'. Existing: {sorted(REGISTRY.keys())}"
                )
            factories.append(cls)
        return cls
    return deco


def unregister(tag: str, cls: Type[Generator[Any]]) -> None:
    factories = REGISTRY.get(tag, [])
    if cls in factories:
        factories.remove(cls)
    if not factories:
        REGISTRY.pop(tag, None)


def factories_for(tag: str) -> List[GeneratorFactory]:
    if tag not in REGISTRY or not REGISTRY[tag]:
        raise KeyError(f"Unknown generator type '{tag}'. Registered: {sorted(REGISTRY.keys())}")
    return list(REGISTRY[tag])


def generator_for(
    tag: str,
    *components: Any,
    constraints: Sequence[Any] = (),
) -> Generator[Any]:
    candidates = [factory(*components) for factory in factories_for(tag)]
    if len(candidates) == 1:
        generator: Generator[Any] = candidates[0]
    else:
        generator = CompositeGenerator([Weighted(each, 1) for each in candidates])

    nulls = [c for c in constraints if isinstance(c, NullAllowed)]
    others = [c for c in constraints if not isinstance(c, NullAllowed)]
    if others:
        generator.configure(*others)
    if nulls:
        generator = NullableGenerator(generator, nulls[-1].probability)
    logger.debug("Resolved '%s' to %r", tag, generator)
    return generator
