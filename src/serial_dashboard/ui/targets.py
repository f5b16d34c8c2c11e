"""Render targets: where a finished frame is drawn."""

from __future__ import annotations

from rich.console import Console, ConsoleDimensions, RenderableType
from rich.live import Live


class LiveRenderTarget:
    """Full-screen target backed by `rich.live.Live` on the alternate screen."""

    def __init__(self, live: Live) -> None:
        self.live = live

    @property
    def size(self) -> ConsoleDimensions:
        return self.live.console.size

    def draw(self, renderable: RenderableType) -> None:
        self.live.update(renderable, refresh=True)


class ConsoleRenderTarget:
    """Print each frame to a console; used for plain output and tests."""

    def __init__(self, console: Console, *, height: int | None = None) -> None:
        self.console = console
        self.height = height
        self.frames = 0

    @property
    def size(self) -> ConsoleDimensions:
        return ConsoleDimensions(self.console.width, self.height or self.console.height)

    def draw(self, renderable: RenderableType) -> None:
        self.console.print(renderable, height=self.height)
        self.frames += 1
