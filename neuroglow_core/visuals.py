"""
Mapping from activation intensity to visual parameters.

All functions take a clamped intensity ``a`` in [0, 1]; `VisualMapper.intensity`
converts a raw activation level (which may exceed 1.0) into that range.
"""

from __future__ import annotations

import logging
import math
from typing import List

from .colors import RGBA, lerp, lerp_color, parse_color
from .config import AnimationConfig
from .graph import Node

logger = logging.getLogger(__name__)

FALLBACK_PALETTE_COLOR = "rgba(255,255,255,0.9)"

# Below this intensity connection colors fade in from the dim base color
PALETTE_FADE_IN = 0.1


class VisualMapper:
    """
    Converts activation into colors, widths, glow and radii.

    Colors are parsed once at construction; build a new mapper after the
    configuration changes.

    Attributes:
        node_color: Dim node color (a = 0)
        active_node_color: Fully active node color (a = 1)
        connection_color: Dim connection color
        palette: Ordered connection color stops, never empty
        glow_color: Glow color shared by all connections
    """

    def __init__(self, config: AnimationConfig):
        self.config = config
        self.node_color = parse_color(config.node_color)
        self.active_node_color = parse_color(config.active_node_color)
        self.connection_color = parse_color(config.connection_color)
        self.glow_color = parse_color(config.connection_glow_color)
        self.palette: List[RGBA] = [parse_color(c) for c in config.active_connection_colors]
        if not self.palette:
            logger.error("active_connection_colors palette is empty! Using fallback.")
            self.palette.append(parse_color(FALLBACK_PALETTE_COLOR))

    @staticmethod
    def intensity(activation_level: float) -> float:
        """Clamp a raw activation level to the visual range [0, 1]."""
        return max(0.0, min(1.0, activation_level))

    def node_color_for(self, a: float) -> RGBA:
        return lerp_color(self.node_color, self.active_node_color, a)

    def connection_color_for(self, a: float) -> RGBA:
        """
        Interpolate through the connection palette.

        The palette is split into ``N - 1`` equal segments; below
        `PALETTE_FADE_IN` the result is additionally blended from the dim
        connection color so low activity does not jump into the palette.
        """
        a = self.intensity(a)
        last = len(self.palette) - 1
        position = a * last
        index = int(math.floor(position))
        next_index = min(last, index + 1)
        color = lerp_color(self.palette[index], self.palette[next_index], position - index)

        if a < PALETTE_FADE_IN:
            color = lerp_color(self.connection_color, color, a / PALETTE_FADE_IN)
        return color

    def connection_width_for(self, a: float) -> float:
        return lerp(self.config.connection_width, self.config.active_connection_width, a)

    def glow_blur_for(self, a: float) -> float:
        return lerp(0.0, self.config.connection_glow_blur, a)

    def node_radius(self, node: Node, now: float) -> float:
        """
        Radius of a node at wall-clock time `now` (seconds).

        The pulse is a sine whose phase depends on time, layer and
        `node_pulse_speed`, scaled by `node_pulse_magnitude` and the node's
        clamped activation, so resting nodes do not breathe.
        """
        magnitude = self.config.node_pulse_magnitude
        if magnitude <= 0.0:
            return node.base_radius
        phase = now * 1000.0 * 0.01 * self.config.node_pulse_speed + node.layer_index
        return node.base_radius + math.sin(phase) * magnitude * self.intensity(
            node.activation_level
        )
