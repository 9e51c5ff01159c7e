"""
Core Game
=========

Session controller: owns the actor, the obstacle ring, score and state, and
drives the per-frame update/draw sequence.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, List, Optional

from flappy_game.flappy_core.actor import Actor
from flappy_game.flappy_core.config_loader import GameConfig, get_config, validate_config
from flappy_game.flappy_core.obstacle import Obstacle
from flappy_game.flappy_core.rng import GapSampler
from flappy_game.flappy_core.rules import (
    GameRules,
    ObstacleOutcome,
    TerminationResult,
    REASON_COLLISION,
    REASON_FELL,
)
from flappy_game.flappy_core.scoring import ScoreEvent, ScoreTracker
from flappy_game.flappy_core.surface import DrawSurface, Drawable


GAME_OVER_TEXT = "Game Over"
RESTART_HINT_TEXT = "Press Enter to Restart"


class GameState(Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


class InputEvent(Enum):
    """Discrete input delivered by the presentation layer."""
    JUMP = "jump"
    RESTART = "restart"


@dataclass
class TickResult:
    """Result of a single frame tick."""
    state: GameState
    score: int
    delta_score: int
    termination_reason: str
    events: List[ScoreEvent] = field(default_factory=list)
    recycled: int = 0

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER


class CoreGame:
    """
    Main game session.

    States:
    - PLAYING: jumps reach the actor, collisions and passes are evaluated
    - GAME_OVER: entered on collision or fall; only RESTART leaves it

    One tick = update actor, update obstacles, evaluate (PLAYING only).
    The actor and obstacles keep moving after game over; only evaluation
    stops.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        debug: bool = False
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for gap generation.
            debug: If True, prints state transitions and score events.

        Raises:
            ValueError: If the configuration violates gameplay preconditions.
        """
        if config is None:
            config = get_config()
        validate_config(config)

        self._config = config
        self._seed = seed
        self._debug = debug

        # Subsystems
        self._sampler = GapSampler(config, seed)
        self._rules = GameRules(config)
        self._scorer = ScoreTracker()

        self._actor = Actor(config.actor_start_x, config.actor_start_y, config)
        self._obstacles: List[Obstacle] = [
            Obstacle(config.obstacle_start_x(i), self._sampler, config)
            for i in range(config.obstacles.count)
        ]

        # Session state
        self._state = GameState.PLAYING
        self._termination_reason: str = ""
        self._ticks: int = 0
        self._pending_inputs: Deque[InputEvent] = deque()

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def actor(self) -> Actor:
        return self._actor

    @property
    def obstacles(self) -> List[Obstacle]:
        """Obstacles in update/draw order."""
        return self._obstacles

    def drawables(self) -> List[Drawable]:
        """Actor first, then obstacles in ring order."""
        return [self._actor, *self._obstacles]

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_over(self) -> bool:
        """True if the session is in GAME_OVER."""
        return self._state is GameState.GAME_OVER

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def ticks(self) -> int:
        """Ticks since the last restart."""
        return self._ticks

    @property
    def termination_reason(self) -> str:
        """Reason for game over, or empty string."""
        return self._termination_reason

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    # ------------------------------------------------------------------
    # Input

    def handle_input(self, event: InputEvent) -> bool:
        """
        Apply an input event immediately.

        JUMP only acts while playing and RESTART only after game over.

        Returns:
            True if the event changed anything.

        Raises:
            ValueError: For anything that is not an InputEvent.
        """
        if event is InputEvent.JUMP:
            if self._state is GameState.PLAYING:
                self._actor.jump()
                return True
            return False

        if event is InputEvent.RESTART:
            if self._state is GameState.GAME_OVER:
                self.restart()
                return True
            return False

        raise ValueError(f"Unknown input event: {event!r}")

    def queue_input(self, event: InputEvent) -> None:
        """
        Queue an input event for the start of the next tick.

        Lets an event source running outside the frame loop feed the session
        without touching its state mid-tick.
        """
        if not isinstance(event, InputEvent):
            raise ValueError(f"Unknown input event: {event!r}")
        self._pending_inputs.append(event)

    def _drain_inputs(self) -> None:
        while self._pending_inputs:
            self.handle_input(self._pending_inputs.popleft())

    # ------------------------------------------------------------------
    # Frame

    def tick(self) -> TickResult:
        """
        Advance the session by one frame.

        Returns:
            TickResult with the new state and this tick's score change.
        """
        self._drain_inputs()

        score_before = self._scorer.score
        events: List[ScoreEvent] = []

        self._actor.update()
        recycled = 0
        for obstacle in self._obstacles:
            if obstacle.update():
                recycled += 1

        if self._state is GameState.PLAYING:
            result = self._evaluate(events)
            if result.terminated:
                self._end_session(result.reason)

        self._ticks += 1

        return TickResult(
            state=self._state,
            score=self._scorer.score,
            delta_score=self._scorer.score - score_before,
            termination_reason=self._termination_reason,
            events=events,
            recycled=recycled
        )

    def _evaluate(self, events: List[ScoreEvent]) -> TerminationResult:
        """Collision and pass checks, then the fall check."""
        for index, obstacle in enumerate(self._obstacles):
            outcome = self._rules.evaluate_obstacle(self._actor, obstacle)
            if outcome is ObstacleOutcome.COLLISION:
                return TerminationResult.game_over(REASON_COLLISION)
            if outcome is ObstacleOutcome.PASSED:
                event = self._scorer.award_pass(obstacle, index)
                if event is not None:
                    events.append(event)
                    if self._debug:
                        print(f"[DEBUG] tick {self._ticks}: {event}")

        if self._rules.fell_off_screen(self._actor):
            return TerminationResult.game_over(REASON_FELL)
        return TerminationResult.none()

    def _end_session(self, reason: str) -> None:
        self._state = GameState.GAME_OVER
        self._termination_reason = reason
        if self._debug:
            print(f"[DEBUG] tick {self._ticks}: GAME OVER ({reason}), score={self.score}")

    def draw(self, surface: DrawSurface) -> None:
        """Issue this frame's draw commands."""
        screen = self._config.screen
        colors = self._config.colors
        text = self._config.text

        surface.clear(0, 0, screen.width, screen.height)

        for drawable in self.drawables():
            drawable.draw(surface)

        surface.fill_text(
            f"Score: {self.score}",
            text.score_x,
            text.score_y,
            colors.score_text,
            text.score_font_size
        )

        if self.is_over:
            surface.fill_text(
                GAME_OVER_TEXT,
                screen.width / 2 - 100,
                screen.height / 2 - 10,
                colors.game_over_text,
                text.game_over_font_size
            )
            surface.fill_text(
                RESTART_HINT_TEXT,
                screen.width / 2 - 110,
                screen.height / 2 + 30,
                colors.game_over_text,
                text.restart_hint_font_size
            )

    def frame(self, surface: DrawSurface) -> TickResult:
        """Frame-clock callback: tick, then draw."""
        result = self.tick()
        self.draw(surface)
        return result

    # ------------------------------------------------------------------
    # Session lifecycle

    def restart(self) -> None:
        """Start a new session, keeping the same obstacle ring."""
        config = self._config
        self._scorer.reset()
        self._state = GameState.PLAYING
        self._termination_reason = ""
        self._ticks = 0
        self._actor.reset(config.actor_start_x, config.actor_start_y)
        for i, obstacle in enumerate(self._obstacles):
            obstacle.reset(config.obstacle_start_x(i))

        if self._debug:
            print("[DEBUG] session restarted")

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Restart from any state.

        Args:
            seed: New random seed for gap generation. Keeps the stream if None.
        """
        if seed is not None:
            self._seed = seed
            self._sampler.reset(seed)
        self._pending_inputs.clear()
        self.restart()

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._scorer.score,
            "passes": self._scorer.passes,
            "ticks": self._ticks,
            "game_over": self.is_over,
            "terminated_reason": self._termination_reason,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with actor, obstacles and screen info.
        """
        return {
            "screen_width": self._config.screen.width,
            "screen_height": self._config.screen.height,
            "actor": {
                "x": self._actor.x,
                "y": self._actor.y,
                "velocity": self._actor.velocity,
                "size": self._actor.size,
            },
            "obstacles": [
                {
                    "x": o.x,
                    "gap_y": o.gap_y,
                    "width": o.width,
                    "gap_height": o.gap_height,
                    "scored": o.scored,
                }
                for o in self._obstacles
            ],
            "score": self._scorer.score,
            "game_over": self.is_over,
        }
