"""
Scoring System
==============

Awards one point per obstacle cleared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from flappy_game.flappy_core.obstacle import Obstacle


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    total: int
    obstacle_index: int

    def __repr__(self) -> str:
        return f"ScoreEvent(+{self.points} from obstacle {self.obstacle_index}, total={self.total})"


class ScoreTracker:
    """
    Tracks the session score.

    ``Obstacle.passed_bird`` stays true for every tick the obstacle is left
    of the actor, so points are only awarded on the obstacle's first pass.
    The obstacle's ``scored`` flag is cleared again when it recycles.
    """

    POINTS_PER_PASS = 1

    def __init__(self):
        self._score: int = 0
        self._passes: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def passes(self) -> int:
        """Obstacles cleared this session."""
        return self._passes

    def award_pass(self, obstacle: "Obstacle", obstacle_index: int = 0) -> Optional[ScoreEvent]:
        """
        Award points for clearing ``obstacle`` if not already counted.

        Returns:
            ScoreEvent when points were awarded, otherwise None.
        """
        if obstacle.scored:
            return None

        obstacle.scored = True
        self._score += self.POINTS_PER_PASS
        self._passes += 1
        return ScoreEvent(
            points=self.POINTS_PER_PASS,
            total=self._score,
            obstacle_index=obstacle_index
        )

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
        self._passes = 0
