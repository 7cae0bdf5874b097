from __future__ import annotations

import math

from propgen.random_source import SourceOfRandomness


class GeometricDistribution:
    """Samples generation sizes; larger means make larger sizes likelier."""

    def sample_with_mean(self, mean: float, random: SourceOfRandomness) -> int:
        return self.sample(self.probability_of_mean(mean), random)

    def sample(self, p: float, random: SourceOfRandomness) -> int:
        if p <= 0 or p > 1:
            raise ValueError(f"Need a probability in (0, 1], got {p}")
        if p == 1:
            return 0

        uniform = random.next_double()
        return int(math.ceil(math.log(1 - uniform) / math.log(1 - p)))

    def probability_of_mean(self, mean: float) -> float:
        if mean <= 0:
            raise ValueError(f"Need a positive mean, got {mean}")
        return 1 / mean
