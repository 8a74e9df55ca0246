"""
Render pass: draws the current network state onto a `DrawingSurface`.

Connections are drawn before nodes so node glyphs sit above the strokes.
"""

from __future__ import annotations

from dataclasses import dataclass

from neuroglow_core.colors import RGBA
from neuroglow_core.config import AnimationConfig
from neuroglow_core.graph import Topology
from neuroglow_core.visuals import VisualMapper

from neuroglow_anim.adapters.base import DrawingSurface

# Maximum control point offset of a curved connection at full activation
CURVE_WOBBLE = 30.0

NO_GLOW = RGBA(0, 0, 0, 0.0)


@dataclass
class FrameStats:
    segments: int = 0
    circles: int = 0


def render_frame(
    surface: DrawingSurface,
    topology: Topology,
    mapper: VisualMapper,
    config: AnimationConfig,
    rng,
    now: float,
) -> FrameStats:
    """
    Draw one frame.

    Args:
        surface: Target surface, cleared first
        topology: Network to draw
        mapper: Visual mapper built from `config`
        config: Current configuration
        rng: Random source for curve wobble (``random()``)
        now: Wall-clock time in seconds, drives the node pulse

    Returns:
        FrameStats: Number of segments and circles issued
    """
    stats = FrameStats()
    surface.clear()
    nodes = topology.nodes
    cutoff = config.min_activation_level

    # ----- connections -----
    for source in nodes:
        a = mapper.intensity(source.activation_level)
        if a < cutoff or not source.connections:
            continue

        color = mapper.connection_color_for(a)
        width = mapper.connection_width_for(a)
        if width < 0.1 or color.a < 0.01:
            continue

        surface.set_stroke_style(color, width, mapper.glow_blur_for(a), mapper.glow_color)
        start = (source.x, source.y)
        for conn in source.connections:
            target = nodes[conn.target]
            end = (target.x, target.y)
            control = None
            if config.use_curves:
                control = (
                    (source.x + target.x) / 2.0 + (rng.random() - 0.5) * CURVE_WOBBLE * a,
                    (source.y + target.y) / 2.0 + (rng.random() - 0.5) * CURVE_WOBBLE * a,
                )
            surface.stroke_segment(start, end, control)
            stats.segments += 1

    # Glow applies to connections only
    surface.set_stroke_style(NO_GLOW, 0.0, 0.0, NO_GLOW)

    # ----- nodes -----
    for node in nodes:
        if node.activation_level == 0.0:
            continue
        a = mapper.intensity(node.activation_level)
        color = mapper.node_color_for(a)
        radius = mapper.node_radius(node, now)
        if color.a < 0.01 or radius < 0.5:
            continue
        surface.fill_circle((node.x, node.y), radius, color)
        stats.circles += 1

    surface.present()
    return stats
