"""
Tests for the session controller: tick sequencing, state machine, scoring
and restart.
"""

import dataclasses

import pytest

from flappy_game.flappy_core.config_loader import load_config
from flappy_game.flappy_core.game import CoreGame, GameState, InputEvent
from flappy_game.flappy_core.surface import RecordingSurface


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def game(config):
    return CoreGame(config=config, seed=42)


@pytest.fixture
def floating_game(config):
    """
    Game with zero gravity: the actor hovers at y=300, which lies inside
    every possible gap, so the session never ends.
    """
    cfg = dataclasses.replace(
        config,
        actor=dataclasses.replace(config.actor, gravity=0.0)
    )
    return CoreGame(config=cfg, seed=42)


def run_ticks(game, n):
    results = []
    for _ in range(n):
        results.append(game.tick())
    return results


class TestInitialState:
    """Session start."""

    def test_initial_positions(self, game, config):
        """Actor at (width/4, height/2), obstacles staggered off-screen."""
        assert game.state is GameState.PLAYING
        assert not game.is_over
        assert game.score == 0
        assert (game.actor.x, game.actor.y, game.actor.velocity) == (100, 300, 0.0)
        assert [o.x for o in game.obstacles] == [400, 750]
        for o in game.obstacles:
            assert 0 <= o.gap_y < config.max_gap_offset

    def test_seeded_placement(self, config):
        """Same seed gives the same gaps."""
        g1 = CoreGame(config=config, seed=5)
        g2 = CoreGame(config=config, seed=5)
        assert [o.gap_y for o in g1.obstacles] == [o.gap_y for o in g2.obstacles]

        run_ticks(g1, 300)
        run_ticks(g2, 300)
        assert [o.gap_y for o in g1.obstacles] == [o.gap_y for o in g2.obstacles]


class TestTick:
    """Per-frame sequencing."""

    def test_tick_moves_everything(self, game, config):
        """One tick applies gravity and scrolls every obstacle."""
        game.tick()
        assert game.actor.velocity == pytest.approx(config.actor.gravity)
        assert game.actor.y == pytest.approx(300 + config.actor.gravity)
        assert [o.x for o in game.obstacles] == [398, 748]
        assert game.ticks == 1

    def test_fall_ends_game(self, game):
        """Falling below the screen ends the game on the first tick past the edge."""
        for o in game.obstacles:
            o.x = 5000

        results = run_ticks(game, 155)
        assert not results[153].game_over
        assert results[154].game_over
        assert game.termination_reason == "fell"

    def test_collision_ends_game(self, game):
        """Hitting the lower segment ends the game."""
        game.obstacles[0].gap_y = 0.0
        game.obstacles[1].x = 5000

        results = run_ticks(game, 136)
        assert not results[134].game_over
        assert results[135].game_over
        assert game.termination_reason == "collision"

    def test_objects_keep_moving_after_game_over(self, game):
        """Actor and obstacles still update while GAME_OVER."""
        for o in game.obstacles:
            o.x = 5000
        run_ticks(game, 160)
        assert game.is_over

        y_before = game.actor.y
        x_before = game.obstacles[0].x
        game.tick()
        assert game.actor.y > y_before
        assert game.obstacles[0].x < x_before

    def test_thousand_ticks_without_jump(self, game, config):
        """With no input the actor falls off and the game stays over."""
        over_at = None
        exceeded = False
        for t in range(1000):
            result = game.tick()
            if game.actor.y > config.screen.height:
                exceeded = True
            if result.game_over and over_at is None:
                over_at = t
            if over_at is not None:
                assert result.game_over
                assert game.state is GameState.GAME_OVER

        assert exceeded
        assert over_at is not None
        assert over_at <= 155


class TestScoring:
    """Pass-through scoring in the loop."""

    def test_scores_once_per_pass(self, floating_game):
        """Each obstacle scores once per trip past the actor."""
        game = floating_game

        run_ticks(game, 200)
        assert game.score == 0

        result = game.tick()  # tick 201: first obstacle's right edge is left of the actor
        assert result.delta_score == 1
        assert game.score == 1

        run_ticks(game, 99)  # tick 300, obstacle 0 still left of the actor
        assert game.score == 1

        run_ticks(game, 76)  # tick 376: second obstacle passes
        assert game.score == 2

        run_ticks(game, 76)  # tick 452: recycled first obstacle passes again
        assert game.score == 3
        assert not game.is_over

    def test_score_events(self, floating_game):
        """Tick results carry the score events."""
        results = run_ticks(floating_game, 201)
        events = [e for r in results for e in r.events]
        assert len(events) == 1
        assert events[0].obstacle_index == 0


class TestInput:
    """Input dispatch by state."""

    def test_jump_while_playing(self, game, config):
        """JUMP reaches the actor while playing."""
        run_ticks(game, 10)
        assert game.handle_input(InputEvent.JUMP)
        assert game.actor.velocity == config.actor.jump_impulse

    def test_restart_ignored_while_playing(self, game):
        """RESTART does nothing while playing."""
        run_ticks(game, 10)
        y = game.actor.y
        assert not game.handle_input(InputEvent.RESTART)
        assert game.actor.y == y
        assert game.ticks == 10

    def test_jump_ignored_after_game_over(self, game):
        """JUMP does nothing after game over."""
        for o in game.obstacles:
            o.x = 5000
        run_ticks(game, 160)
        assert game.is_over

        velocity = game.actor.velocity
        assert not game.handle_input(InputEvent.JUMP)
        assert game.actor.velocity == velocity

    def test_unknown_event(self, game):
        """Non-InputEvent values are rejected."""
        with pytest.raises(ValueError):
            game.handle_input("jump")
        with pytest.raises(ValueError):
            game.queue_input("jump")

    def test_queued_input_applies_at_tick(self, game, config):
        """Queued events are applied at the start of the next tick."""
        game.queue_input(InputEvent.JUMP)
        assert game.actor.velocity == 0.0

        game.tick()
        assert game.actor.velocity == pytest.approx(
            config.actor.jump_impulse + config.actor.gravity
        )


class TestRestart:
    """GAME_OVER -> PLAYING."""

    def _finish(self, game):
        for o in game.obstacles:
            o.x = 5000
        run_ticks(game, 160)
        assert game.is_over

    def test_restart_resets_session(self, game, config):
        """Restart yields a fresh session with the same obstacle ring."""
        obstacles = list(game.obstacles)
        self._finish(game)

        assert game.handle_input(InputEvent.RESTART)

        assert game.state is GameState.PLAYING
        assert game.score == 0
        assert game.termination_reason == ""
        assert (game.actor.x, game.actor.y, game.actor.velocity) == (100, 300, 0.0)
        assert len(game.obstacles) == config.obstacles.count
        assert all(a is b for a, b in zip(game.obstacles, obstacles))
        assert [o.x for o in game.obstacles] == [400, 750]
        assert not any(o.scored for o in game.obstacles)
        for o in game.obstacles:
            assert 0 <= o.gap_y < config.max_gap_offset

    def test_restart_repeatable(self, game):
        """Restarting several times always gives the same start state."""
        for _ in range(3):
            self._finish(game)
            game.queue_input(InputEvent.RESTART)
            game.tick()
            assert not game.is_over
            assert game.score == 0
            assert game.ticks == 1
            assert len(game.obstacles) == 2

    def test_reset_with_seed(self, config):
        """reset(seed) reproduces the gaps of a fresh game with that seed."""
        game = CoreGame(config=config, seed=1)
        run_ticks(game, 50)
        game.reset(seed=99)

        fresh = CoreGame(config=config, seed=99)
        assert [o.gap_y for o in game.obstacles] == [o.gap_y for o in fresh.obstacles]


class TestDraw:
    """Draw command sequence."""

    def test_playing_frame(self, game, config):
        """Clear, actor, obstacles, then score text."""
        surface = RecordingSurface()
        game.draw(surface)

        names = [c.name for c in surface.commands]
        assert names == ["clear", "fill_oval"] + ["fill_rect"] * 4 + ["fill_text"]
        assert surface.commands[0].args == (0, 0, 400, 600)
        assert surface.texts() == ["Score: 0"]

    def test_game_over_overlay(self, game):
        """Game over adds the title and restart hint."""
        for o in game.obstacles:
            o.x = 5000
        run_ticks(game, 160)

        surface = RecordingSurface()
        game.draw(surface)
        assert surface.texts() == ["Score: 0", "Game Over", "Press Enter to Restart"]

        title = surface.named("fill_text")[1]
        assert title.args[1:3] == (100.0, 290.0)
        assert title.args[4] == 48

    def test_frame_ticks_then_draws(self, game):
        """frame() advances one tick and draws it."""
        surface = RecordingSurface()
        result = game.frame(surface)
        assert result.state is GameState.PLAYING
        assert game.ticks == 1
        assert surface.named("fill_oval")[0].args[1] == pytest.approx(game.actor.y)
