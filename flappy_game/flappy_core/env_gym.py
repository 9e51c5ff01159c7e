"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the Flappy game.
One env step = one frame tick.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from flappy_game.flappy_core.config_loader import GameConfig, load_config
from flappy_game.flappy_core.game import CoreGame, InputEvent
from flappy_game.flappy_core.state_snapshot import SnapshotBuilder


ACTION_NOOP = 0
ACTION_JUMP = 1


class FlappyEnv(gym.Env):
    """
    Flappy game as a Gymnasium environment.

    Action Space:
        Discrete(2): 0 = do nothing, 1 = jump.

    Observation Space:
        Dict with actor state, obstacle arrays, score and game-over flag,
        plus an optional RGB image.

    Reward:
        Points scored during the step (1 per obstacle cleared).

    Info:
        Contains score, delta_score, ticks, terminated_reason.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        image_obs: bool = False,
        max_ticks: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Initialize Flappy environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            image_obs: If True, include board_rgb in observations.
            max_ticks: Truncate episodes after this many ticks. None for no limit.
            debug: If True, enables verbose debug output.
        """
        super().__init__()

        self._config = load_config(config_path)
        self.metadata = {**self.metadata, "render_fps": self._config.timing.fps}

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode!r}")

        self.render_mode = render_mode
        self._image_obs = image_obs
        self._max_ticks = max_ticks
        self._debug = debug

        self._img_width = self._config.observation.image_width
        self._img_height = self._config.observation.image_height

        self._game = CoreGame(config=self._config, debug=debug)
        self._snapshot_builder = SnapshotBuilder(self._config)

        # Renderers (lazy)
        self._array_surface = None
        self._window_surface = None

        self.action_space = spaces.Discrete(2)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] FlappyEnv initialized")
            print(f"[DEBUG]   Screen: {self._config.screen.width}x{self._config.screen.height}")
            print(f"[DEBUG]   Obstacles: {self._config.obstacles.count}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        count = self._config.obstacles.count
        screen = self._config.screen

        obs_dict = {
            "actor_y": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "actor_velocity": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "game_over": spaces.Discrete(2),
            "obstacle_x": spaces.Box(
                low=-self._config.obstacles.width - self._config.obstacles.speed,
                high=screen.width + count * self._config.obstacles.spacing,
                shape=(count,),
                dtype=np.float32
            ),
            "obstacle_gap_y": spaces.Box(
                low=0, high=self._config.max_gap_offset, shape=(count,), dtype=np.float32
            ),
            "obstacle_scored": spaces.MultiBinary(count),
        }

        if self._image_obs:
            obs_dict["board_rgb"] = spaces.Box(
                low=0,
                high=255,
                shape=(self._img_height, self._img_width, 3),
                dtype=np.uint8
            )

        return spaces.Dict(obs_dict)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.reset(seed=seed)

        obs = self._build_obs()
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: 0 (no-op) or 1 (jump).

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        if isinstance(action, np.ndarray):
            action = action.item() if action.ndim == 0 else action[0]
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action}; expected 0 or 1")

        if action == ACTION_JUMP:
            self._game.handle_input(InputEvent.JUMP)

        result = self._game.tick()

        obs = self._build_obs()
        reward = float(result.delta_score)
        terminated = result.game_over
        truncated = (
            not terminated
            and self._max_ticks is not None
            and self._game.ticks >= self._max_ticks
        )

        info = self._game.get_info()
        info["delta_score"] = result.delta_score

        if self._debug and terminated:
            print(f"[DEBUG] TERMINATED: {info.get('terminated_reason', 'unknown')}")

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, bool(truncated), info

    def _build_obs(self) -> Dict[str, np.ndarray]:
        """Convert game state to observation dict."""
        board_rgb = self._render_to_array() if self._image_obs else None
        snapshot = self._snapshot_builder.build(self._game.get_render_data(), board_rgb)
        return snapshot.to_obs_dict()

    def _render_to_array(self) -> np.ndarray:
        """Render board to RGB array."""
        from flappy_game.flappy_core.render_solid import ArraySurface

        if self._array_surface is None:
            self._array_surface = ArraySurface(self._config, self._img_width, self._img_height)

        self._game.draw(self._array_surface)
        return self._array_surface.to_array()

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode == "human":
            if self._window_surface is None:
                from flappy_game.flappy_core.render_full_pygame import PygameSurface
                self._window_surface = PygameSurface(self._config, window=True)

            self._game.draw(self._window_surface)
            self._window_surface.present()
            return None

        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._window_surface is not None:
            self._window_surface.close()
            self._window_surface = None
        self._array_surface = None

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
