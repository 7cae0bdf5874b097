"""Seeded helpers for drawing and shrinking values outside of a test runner."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from propgen.config import EngineConfig
from propgen.distribution import GeometricDistribution
from propgen.generator import Generator
from propgen.random_source import SourceOfRandomness
from propgen.status import SimpleGenerationStatus

logger = logging.getLogger("propgen.sampling")


def generate_values(
    generator: Generator[Any],
    n: Optional[int] = None,
    seed: Optional[int] = None,
    cfg: EngineConfig = EngineConfig(),
) -> List[Any]:
    """Draw ``n`` values, attempt ``i`` getting a fresh status with attempts=i."""
    count = cfg.default_sample_count if n is None else n
    if count <= 0:
        raise ValueError("n must be > 0")
    seed_to_use = cfg.seed if seed is None else seed

    random = SourceOfRandomness(seed=seed_to_use)
    distribution = GeometricDistribution()
    values = [
        generator.generate(random, SimpleGenerationStatus(distribution, random, attempts))
        for attempts in range(count)
    ]

    logger.info("Generated %d values with %r (seed=%d).", count, generator, seed_to_use)
    return values


def shrink_path(
    generator: Generator[Any],
    random: SourceOfRandomness,
    value: Any,
    keep: Callable[[Any], bool] = lambda candidate: True,
    limit: int = EngineConfig().max_shrink_rounds,
) -> List[Any]:
    """Repeatedly move to the smallest kept shrink; the values visited, in order.

    Stops when no candidate is kept or after ``limit`` steps.
    """
    path = [value]
    current = value
    for _ in range(limit):
        candidates = [each for each in generator.shrink(random, current) if keep(each)]
        if not candidates:
            break
        current = min(candidates, key=generator.magnitude)
        path.append(current)

    logger.debug("Shrank %r to %r in %d steps.", value, current, len(path) - 1)
    return path
