"""
Drawing Surface
===============

The boundary between the game core and whatever renders it.

The core never talks to a window directly: each frame it issues a handful of
fire-and-forget shape commands to a DrawSurface. Backends in this package:

- RecordingSurface: keeps the command list (tests, debugging)
- ArraySurface (render_solid): rasterizes into a numpy RGB array
- PygameSurface (render_full_pygame): draws onto a pygame Surface
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Tuple, runtime_checkable

Color = Tuple[int, int, int]


@runtime_checkable
class DrawSurface(Protocol):
    """Shape-drawing commands accepted by every render backend."""

    def clear(self, x: float, y: float, w: float, h: float) -> None: ...

    def fill_oval(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...

    def fill_text(self, text: str, x: float, y: float, color: Color, font_size: int) -> None: ...


@runtime_checkable
class Drawable(Protocol):
    """Anything the session advances once per tick and draws once per frame."""

    def update(self): ...

    def draw(self, surface: DrawSurface) -> None: ...


@dataclass(frozen=True)
class DrawCommand:
    """A single recorded draw call."""
    name: str
    args: tuple

    def __repr__(self) -> str:
        return f"{self.name}{self.args}"


class RecordingSurface:
    """DrawSurface that stores every command it receives."""

    def __init__(self):
        self.commands: List[DrawCommand] = []

    def clear(self, x, y, w, h) -> None:
        self.commands.append(DrawCommand("clear", (x, y, w, h)))

    def fill_oval(self, x, y, w, h, color) -> None:
        self.commands.append(DrawCommand("fill_oval", (x, y, w, h, tuple(color))))

    def fill_rect(self, x, y, w, h, color) -> None:
        self.commands.append(DrawCommand("fill_rect", (x, y, w, h, tuple(color))))

    def fill_text(self, text, x, y, color, font_size) -> None:
        self.commands.append(DrawCommand("fill_text", (text, x, y, tuple(color), font_size)))

    def named(self, name: str) -> List[DrawCommand]:
        """All recorded commands with the given name, in order."""
        return [c for c in self.commands if c.name == name]

    def texts(self) -> List[str]:
        """Text strings drawn so far."""
        return [c.args[0] for c in self.named("fill_text")]

    def reset(self) -> None:
        self.commands.clear()
