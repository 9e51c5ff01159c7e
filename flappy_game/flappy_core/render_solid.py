"""
Solid Renderer
==============

Fast numpy-based DrawSurface that rasterizes shapes into an RGB array.
Text commands are counted but not rasterized (no font backend).
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from flappy_game.flappy_core.config_loader import GameConfig, get_config


class ArraySurface:
    """
    Headless DrawSurface backed by a (height, width, 3) uint8 array.

    Game coordinates are scaled to the array size, so a 400x600 playfield
    can be rendered into a smaller observation image.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        width: Optional[int] = None,
        height: Optional[int] = None
    ):
        """
        Initialize surface.

        Args:
            config: Game configuration. Uses default if None.
            width: Output image width. Defaults to the screen width.
            height: Output image height. Defaults to the screen height.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._width = int(width or config.screen.width)
        self._height = int(height or config.screen.height)
        self._scale_x = self._width / config.screen.width
        self._scale_y = self._height / config.screen.height

        self._bg_color = np.array(config.colors.background, dtype=np.uint8)
        self._img = np.zeros((self._height, self._width, 3), dtype=np.uint8)
        self._img[:] = self._bg_color
        self.text_count = 0

    @property
    def image(self) -> np.ndarray:
        """The live canvas (not a copy)."""
        return self._img

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self._img.shape

    def _to_pixels(self, x: float, y: float, w: float, h: float) -> Tuple[int, int, int, int]:
        """Convert a game-space box to clipped pixel bounds (x0, y0, x1, y1)."""
        x0 = int(round(x * self._scale_x))
        y0 = int(round(y * self._scale_y))
        x1 = int(round((x + w) * self._scale_x))
        y1 = int(round((y + h) * self._scale_y))
        return (
            max(0, x0), max(0, y0),
            min(self._width, x1), min(self._height, y1)
        )

    def clear(self, x: float, y: float, w: float, h: float) -> None:
        x0, y0, x1, y1 = self._to_pixels(x, y, w, h)
        if x0 < x1 and y0 < y1:
            self._img[y0:y1, x0:x1] = self._bg_color
        self.text_count = 0

    def fill_rect(self, x: float, y: float, w: float, h: float, color) -> None:
        if w <= 0 or h <= 0:
            return
        x0, y0, x1, y1 = self._to_pixels(x, y, w, h)
        if x0 >= x1 or y0 >= y1:
            return
        self._img[y0:y1, x0:x1] = np.array(color, dtype=np.uint8)

    def fill_oval(self, x: float, y: float, w: float, h: float, color) -> None:
        """Draw a filled ellipse inscribed in the box using numpy."""
        if w <= 0 or h <= 0:
            return
        x0, y0, x1, y1 = self._to_pixels(x, y, w, h)
        if x0 >= x1 or y0 >= y1:
            return

        # Ellipse center and radii in pixels
        cx = (x + w / 2) * self._scale_x
        cy = (y + h / 2) * self._scale_y
        rx = w / 2 * self._scale_x
        ry = h / 2 * self._scale_y

        y_coords = np.arange(y0, y1) + 0.5
        x_coords = np.arange(x0, x1) + 0.5
        yy, xx = np.meshgrid(y_coords, x_coords, indexing='ij')

        mask = ((xx - cx) / rx) ** 2 + ((yy - cy) / ry) ** 2 <= 1.0
        self._img[y0:y1, x0:x1][mask] = np.array(color, dtype=np.uint8)

    def fill_text(self, text: str, x: float, y: float, color, font_size: int) -> None:
        self.text_count += 1

    def to_array(self) -> np.ndarray:
        """Copy of the current canvas."""
        return self._img.copy()
