"""
Flappy Core - The heart of the game.

This module provides the frame-driven game simulation, its drawing-surface
boundary, and a Gymnasium environment wrapper.

Main exports:
- CoreGame: Session controller (tick, draw, input, restart)
- FlappyEnv: Gymnasium environment for single-agent training
- Actor / Obstacle: The two drawable game objects
- GameConfig: Configuration loaded from game_config.yaml
"""

from flappy_game.flappy_core.config_loader import GameConfig, load_config, validate_config
from flappy_game.flappy_core.rng import GapSampler
from flappy_game.flappy_core.actor import Actor
from flappy_game.flappy_core.obstacle import Obstacle
from flappy_game.flappy_core.surface import DrawSurface, Drawable, RecordingSurface
from flappy_game.flappy_core.game import CoreGame, GameState, InputEvent, TickResult
from flappy_game.flappy_core.env_gym import FlappyEnv

__all__ = [
    "GameConfig",
    "load_config",
    "validate_config",
    "GapSampler",
    "Actor",
    "Obstacle",
    "DrawSurface",
    "Drawable",
    "RecordingSurface",
    "CoreGame",
    "GameState",
    "InputEvent",
    "TickResult",
    "FlappyEnv",
]
