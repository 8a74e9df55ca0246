from __future__ import annotations

from typing import Any, List, Optional

import numpy as np
from manim import Circle, CubicBezier, Line, Mobject, Scene
from manim import config as manim_config

from neuroglow_core.colors import RGBA
from neuroglow_core.config import AnimationConfig

from neuroglow_anim.adapters.base import DrawingSurface, Point
from neuroglow_anim.adapters.recording import ManualScheduler
from neuroglow_anim.controller import AnimationController


class ManimSurface(DrawingSurface):
    """Maps canvas pixels (y down) onto the manim frame (y up, centered)."""

    def __init__(self, scene: Scene, width: float | None = None, height: float | None = None):
        self.scene = scene
        self._width = float(width or manim_config.pixel_width)
        self._height = float(height or manim_config.pixel_height)
        self._mobjects: List[Mobject] = []
        self._stroke_color = RGBA(0, 0, 0, 0.0)
        self._stroke_width = 0.0
        self._glow_blur = 0.0
        self._glow_color = RGBA(0, 0, 0, 0.0)

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def scale(self) -> float:
        return float(manim_config.frame_width) / self._width

    def to_scene(self, p: Point) -> np.ndarray:
        s = self.scale
        return np.array([(p[0] - self._width / 2.0) * s, (self._height / 2.0 - p[1]) * s, 0.0])

    def _add(self, mob: Mobject) -> None:
        self._mobjects.append(mob)
        self.scene.add(mob)

    def clear(self) -> None:
        if self._mobjects:
            self.scene.remove(*self._mobjects)
        self._mobjects = []

    def set_stroke_style(self, color: RGBA, width: float, glow_blur: float, glow_color: RGBA) -> None:
        self._stroke_color = color
        self._stroke_width = width
        self._glow_blur = glow_blur
        self._glow_color = glow_color

    def _segment(self, start: Point, end: Point, control: Optional[Point], color: RGBA, width: float) -> Mobject:
        p0 = self.to_scene(start)
        p2 = self.to_scene(end)
        if control is None:
            mob = Line(p0, p2)
        else:
            # Degree-elevate the quadratic curve to the cubic manim draws
            c = self.to_scene(control)
            mob = CubicBezier(p0, p0 + 2.0 / 3.0 * (c - p0), p2 + 2.0 / 3.0 * (c - p2), p2)
        mob.set_stroke(color=color.to_hex(), width=width, opacity=color.a)
        return mob

    def stroke_segment(self, start: Point, end: Point, control: Optional[Point] = None) -> None:
        if self._glow_blur > 0.0 and self._glow_color.a > 0.0:
            self._add(
                self._segment(start, end, control, self._glow_color, self._stroke_width + self._glow_blur)
            )
        self._add(self._segment(start, end, control, self._stroke_color, self._stroke_width))

    def fill_circle(self, center: Point, radius: float, color: RGBA) -> None:
        mob = Circle(radius=radius * self.scale, stroke_width=0)
        mob.set_fill(color.to_hex(), opacity=color.a)
        mob.move_to(self.to_scene(center))
        self._add(mob)


class NetworkScene(Scene):
    """
    Renders `_frames` ticks of the animation.

    The runner attaches `_anim_config`, `_frames` and `_seed` before calling
    `render()`; defaults apply otherwise.
    """

    def construct(self):
        config: AnimationConfig = getattr(self, "_anim_config", None) or AnimationConfig()
        frames = int(getattr(self, "_frames", 120))
        seed: Any = getattr(self, "_seed", None)

        frame_time = 1.0 / float(manim_config.frame_rate)
        elapsed = {"t": 0.0}

        surface = ManimSurface(self)
        scheduler = ManualScheduler()
        controller = AnimationController(
            surface, scheduler, config=config, seed=seed, clock=lambda: elapsed["t"]
        )
        self.controller = controller
        controller.start()
        for _ in range(frames):
            scheduler.run_pending()
            self.wait(frame_time)
            elapsed["t"] += frame_time
        controller.stop()
