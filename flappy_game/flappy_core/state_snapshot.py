"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from flappy_game.flappy_core.config_loader import GameConfig, get_config


@dataclass
class GameSnapshot:
    """
    Game state snapshot.

    Obstacle arrays are ordered like the session's obstacle ring.
    """
    actor_y: float
    actor_velocity: float
    score: int
    game_over: bool

    obstacle_x: np.ndarray        # (N,) float32
    obstacle_gap_y: np.ndarray    # (N,) float32
    obstacle_scored: np.ndarray   # (N,) int8

    # Optional image
    board_rgb: Optional[np.ndarray] = None

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        obs = {
            "actor_y": np.array(self.actor_y, dtype=np.float32),
            "actor_velocity": np.array(self.actor_velocity, dtype=np.float32),
            "score": np.array(self.score, dtype=np.int64),
            "game_over": int(self.game_over),
            "obstacle_x": self.obstacle_x,
            "obstacle_gap_y": self.obstacle_gap_y,
            "obstacle_scored": self.obstacle_scored,
        }
        if self.board_rgb is not None:
            obs["board_rgb"] = self.board_rgb
        return obs


class SnapshotBuilder:
    """Builds GameSnapshot objects from CoreGame render data."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()
        self._config = config
        self._count = config.obstacles.count

    def build(
        self,
        render_data: Dict[str, Any],
        board_rgb: Optional[np.ndarray] = None
    ) -> GameSnapshot:
        """
        Build a snapshot.

        Args:
            render_data: Data from CoreGame.get_render_data().
            board_rgb: Optional rendered image.
        """
        obstacles = render_data["obstacles"]
        if len(obstacles) != self._count:
            raise ValueError(
                f"Expected {self._count} obstacles, got {len(obstacles)}"
            )

        actor = render_data["actor"]
        return GameSnapshot(
            actor_y=float(actor["y"]),
            actor_velocity=float(actor["velocity"]),
            score=int(render_data["score"]),
            game_over=bool(render_data["game_over"]),
            obstacle_x=np.array([o["x"] for o in obstacles], dtype=np.float32),
            obstacle_gap_y=np.array([o["gap_y"] for o in obstacles], dtype=np.float32),
            obstacle_scored=np.array([o["scored"] for o in obstacles], dtype=np.int8),
            board_rgb=board_rgb
        )
