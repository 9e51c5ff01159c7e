"""
Obstacle
========

A pair of solid segments with a passable gap, scrolling leftward.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from flappy_game.flappy_core.config_loader import GameConfig, get_config
from flappy_game.flappy_core.rng import GapSampler

if TYPE_CHECKING:
    from flappy_game.flappy_core.actor import Actor
    from flappy_game.flappy_core.surface import DrawSurface


class Obstacle:
    """
    Scrolling pipe pair.

    Obstacles are never destroyed: once fully past the left edge they jump
    back to the right edge with a new gap, so a session's obstacles form a
    fixed ring.

    Attributes:
        x: Left edge of both segments.
        gap_y: Top of the gap, in [0, screen_height - gap_height).
        scored: True once this pass has been counted.
    """

    def __init__(
        self,
        x: float,
        sampler: GapSampler,
        config: Optional[GameConfig] = None
    ):
        if config is None:
            config = get_config()

        self._config = config
        self._sampler = sampler

        self.width = config.obstacles.width
        self.gap_height = config.obstacles.gap_height
        self.speed = config.obstacles.speed
        self.screen_width = config.screen.width
        self.screen_height = config.screen.height
        self.color = config.colors.obstacle

        self.x = float(x)
        self.gap_y = sampler.sample()
        self.scored = False

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def gap_bottom(self) -> float:
        return self.gap_y + self.gap_height

    def update(self) -> bool:
        """
        Scroll one tick to the left, recycling when off-screen.

        Returns:
            True if the obstacle was recycled this tick.
        """
        self.x -= self.speed
        if self.x < -self.width:
            self.x = float(self.screen_width)
            self.gap_y = self._sampler.sample()
            self.scored = False
            return True
        return False

    def passed_bird(self, actor: "Actor") -> bool:
        """True once the right edge is strictly left of the actor."""
        return self.x + self.width < actor.x

    def reset(self, x: float) -> None:
        """Reposition to ``x`` with a fresh gap."""
        self.x = float(x)
        self.gap_y = self._sampler.sample()
        self.scored = False

    def draw(self, surface: "DrawSurface") -> None:
        surface.fill_rect(self.x, 0, self.width, self.gap_y, self.color)
        surface.fill_rect(
            self.x,
            self.gap_bottom,
            self.width,
            self.screen_height - self.gap_bottom,
            self.color
        )

    def __repr__(self) -> str:
        return f"Obstacle(x={self.x:.1f}, gap_y={self.gap_y:.1f}, scored={self.scored})"
