from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

# Colors are stored as (r, g, b, a) so ops serialize to plain JSON
ColorTuple = Tuple[int, int, int, float]


@dataclass(frozen=True)
class Clear:
    width: float
    height: float


@dataclass(frozen=True)
class StrokeStyle:
    color: ColorTuple
    width: float
    glow_blur: float
    glow_color: ColorTuple


@dataclass(frozen=True)
class Segment:
    start: Tuple[float, float]
    end: Tuple[float, float]
    control: Optional[Tuple[float, float]] = None


@dataclass(frozen=True)
class Circle:
    center: Tuple[float, float]
    radius: float
    color: ColorTuple


@dataclass(frozen=True)
class Present:
    frame: int


DrawOp = Union[Clear, StrokeStyle, Segment, Circle, Present]
