"""
In-memory environment: a surface that records draw operations, a scheduler
that runs ticks when the host asks, and a resize notifier driven by hand.

Used for headless runs and tests.
"""

from __future__ import annotations

import itertools
from typing import Any, Callable, Dict, List, Optional

from neuroglow_core.colors import RGBA

from neuroglow_anim.adapters.base import DrawingSurface, FrameScheduler, Point, ResizeNotifier
from neuroglow_anim.models.ops import Circle, Clear, DrawOp, Present, Segment, StrokeStyle


class RecordingSurface(DrawingSurface):
    def __init__(self, width: float = 800, height: float = 600):
        self._width = float(width)
        self._height = float(height)
        self.ops: List[DrawOp] = []
        self.frames = 0
        # Keep only the ops of the last frame unless told otherwise
        self.keep_history = False

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def resize(self, width: float, height: float) -> None:
        self._width = float(width)
        self._height = float(height)

    def clear(self) -> None:
        if not self.keep_history:
            self.ops = []
        self.ops.append(Clear(self._width, self._height))

    def set_stroke_style(self, color: RGBA, width: float, glow_blur: float, glow_color: RGBA) -> None:
        self.ops.append(StrokeStyle(tuple(color), float(width), float(glow_blur), tuple(glow_color)))

    def stroke_segment(self, start: Point, end: Point, control: Optional[Point] = None) -> None:
        self.ops.append(
            Segment(
                (float(start[0]), float(start[1])),
                (float(end[0]), float(end[1])),
                (float(control[0]), float(control[1])) if control is not None else None,
            )
        )

    def fill_circle(self, center: Point, radius: float, color: RGBA) -> None:
        self.ops.append(Circle((float(center[0]), float(center[1])), float(radius), tuple(color)))

    def present(self) -> None:
        self.frames += 1
        self.ops.append(Present(self.frames))

    # ----- inspection helpers -----
    def segments(self) -> List[Segment]:
        return [op for op in self.ops if isinstance(op, Segment)]

    def circles(self) -> List[Circle]:
        return [op for op in self.ops if isinstance(op, Circle)]


class ManualScheduler(FrameScheduler):
    """Holds requested ticks until `run_pending()` is called."""

    def __init__(self):
        self._pending: Dict[int, Callable[[], None]] = {}
        self._ids = itertools.count(1)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def request_tick(self, callback: Callable[[], None]) -> Any:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: Any) -> None:
        self._pending.pop(handle, None)

    def run_pending(self) -> int:
        """Run the callbacks pending right now; ticks they request wait for the next call."""
        ran = 0
        for handle in list(self._pending):
            callback = self._pending.pop(handle, None)
            if callback is not None:
                callback()
                ran += 1
        return ran

    def advance(self, frames: int) -> int:
        """Run up to `frames` refreshes, stopping early when nothing is pending."""
        ran = 0
        for _ in range(frames):
            if not self._pending:
                break
            self.run_pending()
            ran += 1
        return ran


class ManualResizeNotifier(ResizeNotifier):
    def __init__(self):
        self._subscribers: Dict[int, Callable[..., None]] = {}
        self._ids = itertools.count(1)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable[..., None]) -> Any:
        token = next(self._ids)
        self._subscribers[token] = callback
        return token

    def unsubscribe(self, token: Any) -> None:
        self._subscribers.pop(token, None)

    def notify(self, event: Any = None) -> None:
        for callback in list(self._subscribers.values()):
            callback(event)
