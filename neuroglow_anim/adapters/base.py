from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Tuple

from neuroglow_core.colors import RGBA

Point = Tuple[float, float]


class DrawingSurface(ABC):
    """2D render target in pixel coordinates, origin top-left, y pointing down."""

    @property
    @abstractmethod
    def width(self) -> float:
        ...

    @property
    @abstractmethod
    def height(self) -> float:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    @abstractmethod
    def set_stroke_style(self, color: RGBA, width: float, glow_blur: float, glow_color: RGBA) -> None:
        ...

    @abstractmethod
    def stroke_segment(self, start: Point, end: Point, control: Optional[Point] = None) -> None:
        """Stroke a line, or a quadratic curve when `control` is given."""
        ...

    @abstractmethod
    def fill_circle(self, center: Point, radius: float, color: RGBA) -> None:
        ...

    def present(self) -> None:
        """Flush the frame to the display. No-op for surfaces that draw eagerly."""


class FrameScheduler(ABC):
    @abstractmethod
    def request_tick(self, callback: Callable[[], None]) -> Any:
        """Invoke `callback` once at the next display refresh; return a cancel handle."""
        ...

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        ...


class ResizeNotifier(ABC):
    @abstractmethod
    def subscribe(self, callback: Callable[..., None]) -> Any:
        ...

    @abstractmethod
    def unsubscribe(self, token: Any) -> None:
        ...
