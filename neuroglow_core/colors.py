"""
Color parsing and interpolation helpers.

Colors are configured as CSS-like strings (``rgba(80, 130, 200, 0.3)``) and
parsed once into `RGBA` tuples. Unparseable input never propagates: a warning
is logged and a neutral fallback color is returned instead.
"""

from __future__ import annotations

import logging
import re
from typing import Any, NamedTuple, Tuple

logger = logging.getLogger(__name__)

_RGBA_RE = re.compile(
    r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*(\d+(?:\.\d*)?|\.\d+)\s*)?\)"
)
_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


class RGBA(NamedTuple):
    """An RGB color with alpha. Channels are 0-255 ints, alpha is 0-1."""

    r: int
    g: int
    b: int
    a: float = 1.0

    def to_css(self) -> str:
        alpha = _clamp(self.a, 0.0, 1.0)
        return f"rgba({self.r}, {self.g}, {self.b}, {alpha:.3f})"

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_float_tuple(self) -> Tuple[float, float, float, float]:
        """Return (r, g, b, a) with every channel scaled to [0, 1]."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, _clamp(self.a, 0.0, 1.0))


FALLBACK_COLOR = RGBA(50, 50, 50, 0.1)


def _from_channels(r: float, g: float, b: float, a: float = 1.0) -> RGBA:
    return RGBA(
        int(_clamp(round(r), 0, 255)),
        int(_clamp(round(g), 0, 255)),
        int(_clamp(round(b), 0, 255)),
        float(_clamp(a, 0.0, 1.0)),
    )


def parse_color(value: Any) -> RGBA:
    """
    Parse a color specification into an `RGBA`.

    Accepts ``rgb(...)``/``rgba(...)`` strings, ``#rgb``/``#rrggbb`` hex strings,
    an existing `RGBA`, or a sequence of 3 or 4 numbers.

    Returns:
        RGBA: The parsed color, or `FALLBACK_COLOR` when the value is malformed
    """
    if isinstance(value, RGBA):
        return value
    if isinstance(value, str):
        text = value.strip()
        match = _RGBA_RE.fullmatch(text)
        if match:
            alpha = float(match.group(4)) if match.group(4) is not None else 1.0
            return _from_channels(
                int(match.group(1)), int(match.group(2)), int(match.group(3)), alpha
            )
        match = _HEX_RE.match(text)
        if match:
            digits = match.group(1)
            if len(digits) == 3:
                digits = "".join(ch * 2 for ch in digits)
            return _from_channels(
                int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
            )
    elif isinstance(value, (tuple, list)) and len(value) in (3, 4):
        try:
            return _from_channels(*(float(v) for v in value))
        except (TypeError, ValueError, OverflowError):
            pass

    logger.warning("Could not parse color, using default: %r", value)
    return FALLBACK_COLOR


def lerp(start: float, end: float, amount: float) -> float:
    """Linear interpolation with `amount` clamped to [0, 1]; exact at both ends."""
    t = _clamp(amount, 0.0, 1.0)
    return start * (1.0 - t) + end * t


def lerp_color(start: RGBA, end: RGBA, amount: float) -> RGBA:
    """Interpolate every channel; RGB is rounded and clamped, alpha clamped to [0, 1]."""
    t = _clamp(amount, 0.0, 1.0)
    return RGBA(
        int(_clamp(round(lerp(start.r, end.r, t)), 0, 255)),
        int(_clamp(round(lerp(start.g, end.g, t)), 0, 255)),
        int(_clamp(round(lerp(start.b, end.b, t)), 0, 255)),
        _clamp(lerp(start.a, end.a, t), 0.0, 1.0),
    )
