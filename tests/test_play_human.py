"""
Tests for the interactive player's input mapping and console output.
"""

import dataclasses
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from flappy_game.flappy_core.config_loader import load_config
from flappy_game.flappy_core.game import GameState, InputEvent
from tools.play_human import HumanPlayer, resolve_keys


CLICK = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10))
SPACE = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)
ENTER = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RETURN)
ESCAPE = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def player(config):
    player = HumanPlayer(config, seed=0)
    yield player
    player.close()


def end_game(player):
    """Drop the actor below the floor and tick once."""
    player.game.actor.y = 10_000
    result = player.game.tick()
    assert player.game.is_over
    return result


def feed(monkeypatch, player, events):
    """Run the player's event handler over a fixed batch of pygame events."""
    monkeypatch.setattr(pygame.event, "get", lambda: list(events))
    player._handle_events()


class TestResolveKeys:
    """Key names from the controls config."""

    def test_default_names(self):
        pygame.init()
        assert resolve_keys(["space"]) == {pygame.K_SPACE}
        assert resolve_keys(["return"]) == {pygame.K_RETURN}

    def test_unknown_name(self):
        pygame.init()
        with pytest.raises(ValueError):
            resolve_keys(["not-a-key"])


class TestMapEvent:
    """Click, Space and Enter in each session state."""

    @pytest.mark.parametrize(
        "event, expected",
        [
            (CLICK, [InputEvent.JUMP]),
            (SPACE, [InputEvent.JUMP]),
            (ENTER, []),
        ],
        ids=["click", "space", "enter"],
    )
    def test_while_playing(self, player, event, expected):
        assert player.game.state is GameState.PLAYING
        assert player.map_event(event) == expected

    @pytest.mark.parametrize(
        "event, expected",
        [
            (CLICK, [InputEvent.RESTART]),
            (SPACE, []),
            (ENTER, [InputEvent.RESTART]),
        ],
        ids=["click", "space", "enter"],
    )
    def test_after_game_over(self, player, event, expected):
        end_game(player)
        assert player.map_event(event) == expected

    def test_pointer_disabled(self, config):
        """Clicks are ignored when the pointer is turned off."""
        no_pointer = dataclasses.replace(
            config,
            controls=dataclasses.replace(config.controls, pointer_enabled=False)
        )
        player = HumanPlayer(no_pointer, seed=0)
        try:
            assert player.map_event(CLICK) == []
            assert player.map_event(SPACE) == [InputEvent.JUMP]
        finally:
            player.close()


class TestEventQueue:
    """Events reach the game at the next tick, not when they are read."""

    def test_jump_applied_at_next_tick(self, monkeypatch, player, config):
        feed(monkeypatch, player, [SPACE])
        assert player.game.actor.velocity == 0

        player.game.tick()
        expected = config.actor.jump_impulse + config.actor.gravity
        assert player.game.actor.velocity == pytest.approx(expected)

    def test_restart_applied_at_next_tick(self, monkeypatch, player):
        end_game(player)
        feed(monkeypatch, player, [ENTER])
        assert player.game.is_over

        result = player.game.tick()
        assert result.state is GameState.PLAYING
        assert result.score == 0

    def test_escape_stops_loop(self, monkeypatch, player):
        feed(monkeypatch, player, [ESCAPE])
        assert not player._running

    def test_quit_stops_loop(self, monkeypatch, player):
        feed(monkeypatch, player, [pygame.event.Event(pygame.QUIT)])
        assert not player._running


class TestReport:
    """Console status lines."""

    def test_game_over_printed_once(self, player, capsys):
        player._report(end_game(player))
        player._report(player.game.tick())
        assert capsys.readouterr().out.count("GAME OVER (fell)") == 1

    def test_double_click_restart_printed_once(self, monkeypatch, player, capsys):
        """Two clicks after game over restart once and print the banner once."""
        player._report(end_game(player))
        capsys.readouterr()

        feed(monkeypatch, player, [CLICK, CLICK])
        player._report(player.game.tick())

        assert not player.game.is_over
        assert capsys.readouterr().out.count("=== Game Restarted ===") == 1

    def test_no_restart_banner_while_playing(self, player, capsys):
        player._report(player.game.tick())
        assert "Game Restarted" not in capsys.readouterr().out
