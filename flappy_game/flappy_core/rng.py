"""
RNG - Gap Sampler
=================

Seedable random source for obstacle gap offsets.
"""

from __future__ import annotations

import random
from typing import Optional

from flappy_game.flappy_core.config_loader import GameConfig, get_config


class GapSampler:
    """
    Draws obstacle gap offsets uniformly from [0, height - gap_height).

    One sampler is shared by every obstacle of a session, so a fixed seed
    reproduces the whole sequence of gaps, including recycled obstacles.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize gap sampler.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._rng = random.Random(seed)
        self._upper = config.max_gap_offset

    @property
    def upper_bound(self) -> float:
        """Exclusive upper bound of sampled offsets."""
        return self._upper

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def sample(self) -> float:
        """Return a fresh gap offset."""
        return self._rng.random() * self._upper

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reseed the sampler.

        Args:
            seed: New random seed. Keeps the current stream if None.
        """
        if seed is not None:
            self._seed = seed
            self._rng = random.Random(seed)
