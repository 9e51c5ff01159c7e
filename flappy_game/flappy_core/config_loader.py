"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple, Optional

import yaml


Color = Tuple[int, int, int]


@dataclass(frozen=True)
class ScreenConfig:
    """Playfield size in pixels."""
    width: int
    height: int


@dataclass(frozen=True)
class ActorConfig:
    """Falling actor parameters."""
    size: float          # Diameter of the bounding square
    gravity: float       # Velocity increment per tick
    jump_impulse: float  # Velocity set by a jump (negative is up)


@dataclass(frozen=True)
class ObstacleConfig:
    """Obstacle (pipe pair) parameters."""
    width: float
    gap_height: float
    speed: float         # Pixels moved left per tick
    count: int           # Number of obstacles in the ring
    spacing: float       # Horizontal stagger between initial positions


@dataclass(frozen=True)
class TimingConfig:
    """Frame clock settings."""
    fps: int


@dataclass(frozen=True)
class ColorConfig:
    """RGB colors used by draw commands."""
    background: Color
    actor: Color
    obstacle: Color
    score_text: Color
    game_over_text: Color


@dataclass(frozen=True)
class TextConfig:
    """HUD text placement and sizes."""
    score_x: float
    score_y: float
    score_font_size: int
    game_over_font_size: int
    restart_hint_font_size: int


@dataclass(frozen=True)
class ControlsConfig:
    """Physical input mapping used by the presentation layer."""
    jump_keys: Tuple[str, ...]
    restart_keys: Tuple[str, ...]
    pointer_enabled: bool


@dataclass(frozen=True)
class ObservationConfig:
    """Observation image parameters."""
    image_width: int
    image_height: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    screen: ScreenConfig
    actor: ActorConfig
    obstacles: ObstacleConfig
    timing: TimingConfig
    colors: ColorConfig
    text: TextConfig
    controls: ControlsConfig
    observation: ObservationConfig

    @property
    def actor_start_x(self) -> float:
        """Actor spawn X (a quarter of the screen width)."""
        return self.screen.width / 4

    @property
    def actor_start_y(self) -> float:
        """Actor spawn Y (middle of the screen)."""
        return self.screen.height / 2

    @property
    def max_gap_offset(self) -> float:
        """Upper (exclusive) bound of an obstacle's gap offset."""
        return self.screen.height - self.obstacles.gap_height

    def obstacle_start_x(self, index: int) -> float:
        """Initial staggered X of the obstacle at ``index``."""
        return self.screen.width + index * self.obstacles.spacing


def _parse_color(color_data: List) -> Color:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_keys(keys_data) -> Tuple[str, ...]:
    """Parse a key name or list of key names."""
    if isinstance(keys_data, str):
        return (keys_data,)
    return tuple(str(k) for k in keys_data)


def validate_config(config: GameConfig) -> None:
    """
    Validate configuration consistency.

    Raises:
        ValueError: If any gameplay precondition is violated.
    """
    screen = config.screen
    if screen.width <= 0 or screen.height <= 0:
        raise ValueError(f"Screen size must be positive, got {screen.width}x{screen.height}")

    if config.actor.size <= 0:
        raise ValueError(f"actor.size must be positive, got {config.actor.size}")

    obstacles = config.obstacles
    if obstacles.width <= 0:
        raise ValueError(f"obstacles.width must be positive, got {obstacles.width}")
    if obstacles.gap_height <= 0:
        raise ValueError(f"obstacles.gap_height must be positive, got {obstacles.gap_height}")

    # Gap offsets are drawn from [0, height - gap_height)
    if screen.height <= obstacles.gap_height:
        raise ValueError(
            f"screen.height ({screen.height}) must exceed "
            f"obstacles.gap_height ({obstacles.gap_height})"
        )

    if obstacles.count < 1:
        raise ValueError(f"obstacles.count must be at least 1, got {obstacles.count}")
    if obstacles.spacing <= 0:
        raise ValueError(f"obstacles.spacing must be positive, got {obstacles.spacing}")
    if obstacles.speed <= 0:
        raise ValueError(f"obstacles.speed must be positive, got {obstacles.speed}")

    if config.timing.fps <= 0:
        raise ValueError(f"timing.fps must be positive, got {config.timing.fps}")

    for name in ("background", "actor", "obstacle", "score_text", "game_over_text"):
        color = getattr(config.colors, name)
        if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
            raise ValueError(f"colors.{name} must be an RGB triple in [0, 255], got {color}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Config file is empty or not a mapping: {config_path}")

    try:
        config = _build_config(raw)
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Missing or malformed entry in {config_path}: {e}") from e

    validate_config(config)
    return config


def _build_config(raw: Dict[str, Any]) -> GameConfig:
    """Build a GameConfig from the parsed YAML mapping."""
    screen_data = raw["screen"]
    screen = ScreenConfig(
        width=int(screen_data["width"]),
        height=int(screen_data["height"])
    )

    actor_data = raw["actor"]
    actor = ActorConfig(
        size=float(actor_data["size"]),
        gravity=float(actor_data["gravity"]),
        jump_impulse=float(actor_data["jump_impulse"])
    )

    obstacle_data = raw["obstacles"]
    obstacles = ObstacleConfig(
        width=float(obstacle_data["width"]),
        gap_height=float(obstacle_data["gap_height"]),
        speed=float(obstacle_data["speed"]),
        count=int(obstacle_data.get("count", 2)),
        spacing=float(obstacle_data["spacing"])
    )

    timing_data = raw.get("timing", {})
    timing = TimingConfig(fps=int(timing_data.get("fps", 60)))

    colors_data = raw["colors"]
    colors = ColorConfig(
        background=_parse_color(colors_data.get("background", [255, 255, 255])),
        actor=_parse_color(colors_data["actor"]),
        obstacle=_parse_color(colors_data["obstacle"]),
        score_text=_parse_color(colors_data.get("score_text", [0, 0, 0])),
        game_over_text=_parse_color(colors_data.get("game_over_text", [255, 0, 0]))
    )

    text_data = raw.get("text", {})
    text = TextConfig(
        score_x=float(text_data.get("score_x", 10)),
        score_y=float(text_data.get("score_y", 20)),
        score_font_size=int(text_data.get("score_font_size", 16)),
        game_over_font_size=int(text_data.get("game_over_font_size", 48)),
        restart_hint_font_size=int(text_data.get("restart_hint_font_size", 24))
    )

    controls_data = raw.get("controls", {})
    controls = ControlsConfig(
        jump_keys=_parse_keys(controls_data.get("jump_keys", ["space"])),
        restart_keys=_parse_keys(controls_data.get("restart_keys", ["return"])),
        pointer_enabled=bool(controls_data.get("pointer_enabled", True))
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        image_width=int(obs_data.get("image_width", screen.width)),
        image_height=int(obs_data.get("image_height", screen.height))
    )

    return GameConfig(
        screen=screen,
        actor=actor,
        obstacles=obstacles,
        timing=timing,
        colors=colors,
        text=text,
        controls=controls,
        observation=observation
    )


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
