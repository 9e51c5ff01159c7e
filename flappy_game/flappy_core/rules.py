"""
Game Rules
==========

Collision, pass-through and fall checks evaluated once per tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

from flappy_game.flappy_core.config_loader import GameConfig, get_config

if TYPE_CHECKING:
    from flappy_game.flappy_core.actor import Actor
    from flappy_game.flappy_core.obstacle import Obstacle


REASON_COLLISION = "collision"
REASON_FELL = "fell"


class ObstacleOutcome(Enum):
    """What an obstacle means for the actor this tick."""
    CLEAR = "clear"
    COLLISION = "collision"
    PASSED = "passed"


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, reason)


class GameRules:
    """
    Per-tick evaluator for one actor against the obstacle ring.

    Only the bottom of the screen ends the game; flying above the top edge
    is allowed.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._screen_height = config.screen.height

    def evaluate_obstacle(self, actor: "Actor", obstacle: "Obstacle") -> ObstacleOutcome:
        """
        Classify a single obstacle.

        Collision takes precedence over pass-through.
        """
        if actor.check_collision(obstacle):
            return ObstacleOutcome.COLLISION
        if obstacle.passed_bird(actor):
            return ObstacleOutcome.PASSED
        return ObstacleOutcome.CLEAR

    def fell_off_screen(self, actor: "Actor") -> bool:
        """True once the actor's top is below the screen bottom."""
        return actor.y > self._screen_height
