from __future__ import annotations

import random

from mastermind.pattern import CARDINALITY, Pattern


class SecretSampler:
    """Draws hidden patterns for the codemaker."""

    def __init__(self, seed: int | None = None) -> None:
        # Create RNG (deterministic if seed provided)
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def seed(self) -> int | None:
        return self._seed

    def set_seed(self, seed: int) -> None:
        self._rng = random.Random(seed)
        self._seed = seed

    def choice_index(self) -> int:
        return self._rng.randrange(CARDINALITY)

    def choice_pattern(self) -> Pattern:
        return Pattern.at(self.choice_index())

    def batch_indices(self, k: int) -> list[int]:
        if not isinstance(k, int) or k <= 0:
            raise ValueError("k must be a positive integer")
        return [self.choice_index() for _ in range(k)]
