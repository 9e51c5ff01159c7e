"""
Full Pygame Renderer
====================

DrawSurface backed by pygame. Supports both display mode (human play) and
headless RGB output.
"""

from __future__ import annotations

from typing import Dict, Optional

import numpy as np
import pygame

from flappy_game.flappy_core.config_loader import GameConfig, get_config


class PygameSurface:
    """
    Draws game commands onto a pygame Surface.

    With ``window=True`` the target is the display surface; otherwise an
    offscreen Surface of the configured screen size is used.
    Text ``y`` is a baseline, so glyphs are blitted one font ascent higher.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        window: bool = False,
        scale: float = 1.0,
        caption: str = "Flappy Bird"
    ):
        """
        Initialize surface.

        Args:
            config: Game configuration. Uses default if None.
            window: Open a display window instead of drawing offscreen.
            scale: Window scale factor applied to every coordinate.
            caption: Window title.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._scale = float(scale)
        self._bg_color = config.colors.background

        if not pygame.get_init():
            pygame.init()
        pygame.font.init()

        size = (
            int(config.screen.width * self._scale),
            int(config.screen.height * self._scale)
        )
        if window:
            self._surface = pygame.display.set_mode(size)
            pygame.display.set_caption(caption)
        else:
            self._surface = pygame.Surface(size)
        self._window = window

        self._fonts: Dict[int, pygame.font.Font] = {}

    @property
    def surface(self) -> pygame.Surface:
        return self._surface

    def _font(self, size: int) -> pygame.font.Font:
        """Cached default font at the given point size."""
        px = max(1, int(size * self._scale))
        font = self._fonts.get(px)
        if font is None:
            font = pygame.font.Font(None, px)
            self._fonts[px] = font
        return font

    def _rect(self, x: float, y: float, w: float, h: float) -> pygame.Rect:
        s = self._scale
        return pygame.Rect(int(x * s), int(y * s), int(round(w * s)), int(round(h * s)))

    def clear(self, x: float, y: float, w: float, h: float) -> None:
        self._surface.fill(self._bg_color, self._rect(x, y, w, h))

    def fill_rect(self, x: float, y: float, w: float, h: float, color) -> None:
        if w <= 0 or h <= 0:
            return
        pygame.draw.rect(self._surface, color, self._rect(x, y, w, h))

    def fill_oval(self, x: float, y: float, w: float, h: float, color) -> None:
        if w <= 0 or h <= 0:
            return
        pygame.draw.ellipse(self._surface, color, self._rect(x, y, w, h))

    def fill_text(self, text: str, x: float, y: float, color, font_size: int) -> None:
        font = self._font(font_size)
        rendered = font.render(text, True, color)
        top = int(y * self._scale) - font.get_ascent()
        self._surface.blit(rendered, (int(x * self._scale), top))

    def present(self) -> None:
        """Flip the display (window mode only)."""
        if self._window:
            pygame.display.flip()

    def to_array(self) -> np.ndarray:
        """
        Render to RGB array.

        Returns:
            (height, width, 3) uint8 array.
        """
        array = pygame.surfarray.array3d(self._surface)
        return np.transpose(array, (1, 0, 2))

    def close(self) -> None:
        """Clean up pygame resources."""
        self._fonts.clear()
        if self._window:
            pygame.display.quit()
