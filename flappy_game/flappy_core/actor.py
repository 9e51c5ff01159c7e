"""
Actor
=====

The gravity-affected, player-controlled object.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from flappy_game.flappy_core.config_loader import GameConfig, get_config

if TYPE_CHECKING:
    from flappy_game.flappy_core.obstacle import Obstacle
    from flappy_game.flappy_core.surface import DrawSurface


class Actor:
    """
    Falling actor with a fixed X and a square bounding box.

    Velocity grows by ``gravity`` every tick until a jump or reset. There is
    no clamping: y may run past the bottom of the screen, which the session
    treats as a fall.
    """

    def __init__(
        self,
        x: float,
        y: float,
        config: Optional[GameConfig] = None
    ):
        if config is None:
            config = get_config()

        self._config = config
        self.x = float(x)
        self.y = float(y)
        self.velocity = 0.0

        self.size = config.actor.size
        self.gravity = config.actor.gravity
        self.jump_impulse = config.actor.jump_impulse
        self.color = config.colors.actor

    def update(self) -> None:
        """Integrate one tick of gravity."""
        self.velocity += self.gravity
        self.y += self.velocity

    def jump(self) -> None:
        """Replace the current velocity with the jump impulse."""
        self.velocity = self.jump_impulse

    def reset(self, x: float, y: float) -> None:
        """Move to (x, y) and zero the velocity."""
        self.x = float(x)
        self.y = float(y)
        self.velocity = 0.0

    def check_collision(self, obstacle: "Obstacle") -> bool:
        """
        True if the actor overlaps a solid segment of ``obstacle``.

        Horizontal overlap is required, then the actor's vertical span must
        leave the gap. An actor whose top sits exactly on the gap top does
        not collide.
        """
        overlaps_x = (
            self.x + self.size > obstacle.x
            and self.x < obstacle.x + obstacle.width
        )
        if not overlaps_x:
            return False

        gap_top = obstacle.gap_y
        gap_bottom = obstacle.gap_y + obstacle.gap_height
        return self.y < gap_top or self.y + self.size > gap_bottom

    def draw(self, surface: "DrawSurface") -> None:
        surface.fill_oval(self.x, self.y, self.size, self.size, self.color)

    def __repr__(self) -> str:
        return f"Actor(x={self.x:.1f}, y={self.y:.2f}, velocity={self.velocity:.3f})"
