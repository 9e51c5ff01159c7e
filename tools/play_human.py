"""
Human Play Mode
================

Play Flappy interactively in a pygame window.

Controls:
    - Click: Jump (restart after game over)
    - Space: Jump
    - Enter: Restart after game over
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--fps FPS] [--scale SCALE]
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Set

import pygame

from flappy_game.flappy_core.config_loader import load_config, GameConfig
from flappy_game.flappy_core.game import CoreGame, InputEvent, TickResult
from flappy_game.flappy_core.render_full_pygame import PygameSurface


def resolve_keys(names) -> Set[int]:
    """
    Map configured key names to pygame key codes.

    Raises:
        ValueError: If a name is not a pygame key.
    """
    codes = set()
    for name in names:
        try:
            codes.add(pygame.key.key_code(name))
        except ValueError:
            raise ValueError(f"Unknown key name in controls config: {name!r}")
    return codes


class HumanPlayer:
    """Runs the frame loop and maps physical input to game events."""

    def __init__(
        self,
        config: GameConfig,
        seed: Optional[int] = None,
        target_fps: Optional[int] = None,
        scale: float = 1.0
    ):
        pygame.init()

        self._config = config
        self._game = CoreGame(config=config, seed=seed)
        self._surface = PygameSurface(config, window=True, scale=scale)
        self._clock = pygame.time.Clock()
        self._target_fps = target_fps or config.timing.fps

        self._jump_keys = resolve_keys(config.controls.jump_keys)
        self._restart_keys = resolve_keys(config.controls.restart_keys)
        self._pointer_enabled = config.controls.pointer_enabled

        self._running = True
        self._was_over = False

    def map_event(self, event) -> List[InputEvent]:
        """
        Translate one pygame event into game input.

        A click jumps while playing and restarts after game over. Jump keys
        are ignored after game over and restart keys while playing.
        """
        is_over = self._game.is_over

        if event.type == pygame.MOUSEBUTTONDOWN and self._pointer_enabled:
            return [InputEvent.RESTART if is_over else InputEvent.JUMP]

        if event.type == pygame.KEYDOWN:
            if event.key in self._jump_keys and not is_over:
                return [InputEvent.JUMP]
            if event.key in self._restart_keys and is_over:
                return [InputEvent.RESTART]

        return []

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Flappy ===")
        print("Click or Space to jump, Enter to restart, ESC to quit")
        print()

        while self._running:
            self._handle_events()

            result = self._game.frame(self._surface)
            self._surface.present()
            self._report(result)

            self._clock.tick(self._target_fps)

        score = self._game.score
        self.close()
        return score

    def close(self) -> None:
        """Close the window and shut pygame down."""
        self._surface.close()
        pygame.quit()

    @property
    def game(self) -> CoreGame:
        return self._game

    def _report(self, result: TickResult) -> None:
        """Print score changes and state transitions for one frame."""
        if self._was_over and not result.game_over:
            print("\n=== Game Restarted ===\n")
        if result.delta_score > 0:
            print(f"  +{result.delta_score} (Total: {result.score})")
        if result.game_over and not self._was_over:
            print(f"\nGAME OVER ({result.termination_reason}) - Score: {result.score}")
        self._was_over = result.game_over

    def _handle_events(self) -> None:
        """Process pygame events into the game's input queue."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._running = False
            else:
                for game_event in self.map_event(event):
                    self._game.queue_input(game_event)


def main():
    parser = argparse.ArgumentParser(description="Play Flappy interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--fps", type=int, default=None, help="Target FPS (default: from config)")
    parser.add_argument("--scale", type=float, default=1.0, help="Window scale factor")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            target_fps=args.fps,
            scale=args.scale
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except (ImportError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
