from .ops import (
    Clear,
    StrokeStyle,
    Segment,
    Circle,
    Present,
    DrawOp,
)
