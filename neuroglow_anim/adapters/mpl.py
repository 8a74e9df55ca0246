"""
Matplotlib environment: an Axes-backed drawing surface, a scheduler built on
single-shot canvas timers, and resize notifications from ``resize_event``.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

import matplotlib.patheffects as pe
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Circle, PathPatch
from matplotlib.path import Path

from neuroglow_core.colors import RGBA

from neuroglow_anim.adapters.base import DrawingSurface, FrameScheduler, Point, ResizeNotifier


class MatplotlibSurface(DrawingSurface):
    """
    Draws onto an `Axes` whose data coordinates are figure pixels.

    Artists of the previous frame are removed on `clear()` instead of clearing
    the whole axes, which keeps axis styling intact.
    """

    def __init__(self, ax: Axes, background: str = "black"):
        self.ax = ax
        self.figure: Figure = ax.figure
        self.background = background
        self._artists: List[Any] = []
        self._stroke_color = RGBA(0, 0, 0, 0.0)
        self._stroke_width = 0.0
        self._glow_blur = 0.0
        self._glow_color = RGBA(0, 0, 0, 0.0)

        ax.set_axis_off()
        ax.set_position((0.0, 0.0, 1.0, 1.0))
        self.figure.patch.set_facecolor(background)
        ax.set_facecolor(background)
        self._apply_limits()

    @property
    def width(self) -> float:
        return float(self.figure.get_figwidth() * self.figure.dpi)

    @property
    def height(self) -> float:
        return float(self.figure.get_figheight() * self.figure.dpi)

    def _apply_limits(self) -> None:
        # Canvas convention: origin top-left, y grows downwards
        self.ax.set_xlim(0.0, self.width)
        self.ax.set_ylim(self.height, 0.0)
        self.ax.set_aspect("auto")

    def clear(self) -> None:
        for artist in self._artists:
            artist.remove()
        self._artists = []
        self._apply_limits()

    def set_stroke_style(self, color: RGBA, width: float, glow_blur: float, glow_color: RGBA) -> None:
        self._stroke_color = color
        self._stroke_width = width
        self._glow_blur = glow_blur
        self._glow_color = glow_color

    def _effects(self):
        if self._glow_blur <= 0.0 or self._glow_color.a <= 0.0:
            return None
        return [
            pe.Stroke(
                linewidth=self._stroke_width + self._glow_blur,
                foreground=self._glow_color.to_float_tuple(),
            ),
            pe.Normal(),
        ]

    def stroke_segment(self, start: Point, end: Point, control: Optional[Point] = None) -> None:
        color = self._stroke_color.to_float_tuple()
        if control is None:
            artist = Line2D(
                [start[0], end[0]],
                [start[1], end[1]],
                color=color,
                linewidth=self._stroke_width,
                solid_capstyle="round",
            )
            self.ax.add_line(artist)
        else:
            path = Path([start, control, end], [Path.MOVETO, Path.CURVE3, Path.CURVE3])
            artist = PathPatch(path, facecolor="none", edgecolor=color, linewidth=self._stroke_width)
            self.ax.add_patch(artist)
        effects = self._effects()
        if effects:
            artist.set_path_effects(effects)
        self._artists.append(artist)

    def fill_circle(self, center: Point, radius: float, color: RGBA) -> None:
        artist = Circle(center, radius, facecolor=color.to_float_tuple(), edgecolor="none")
        self.ax.add_patch(artist)
        self._artists.append(artist)

    def present(self) -> None:
        self.figure.canvas.draw_idle()


class TimerScheduler(FrameScheduler):
    """Requests ticks with single-shot canvas timers firing after `interval_ms`."""

    def __init__(self, figure: Figure, interval_ms: int = 16):
        self.figure = figure
        self.interval_ms = int(interval_ms)

    def request_tick(self, callback: Callable[[], None]) -> Any:
        timer = self.figure.canvas.new_timer(interval=self.interval_ms)
        timer.single_shot = True
        timer.add_callback(callback)
        timer.start()
        return timer

    def cancel(self, handle: Any) -> None:
        handle.stop()


class FigureResizeNotifier(ResizeNotifier):
    def __init__(self, figure: Figure):
        self.figure = figure

    def subscribe(self, callback: Callable[..., None]) -> Any:
        return self.figure.canvas.mpl_connect("resize_event", callback)

    def unsubscribe(self, token: Any) -> None:
        self.figure.canvas.mpl_disconnect(token)
