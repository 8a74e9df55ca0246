"""
Topology builder for layered signal networks.

Compiles a layer-size sequence plus surface dimensions into a `Topology`:

- Layers are vertical bands evenly spaced across
  ``width * h_spacing_multiplier``, centered on the surface.
- Nodes of one band are evenly spaced across ``height * v_spacing_multiplier``,
  centered; a band with a single node puts it in the vertical middle.
- Each coordinate gets an independent uniform jitter in
  ``[-position_jitter / 2, position_jitter / 2]``.
- Each node of layer i connects to a random subset (uniform permutation) of
  layer i + 1, at most ``max_connections_per_node`` targets.

The random source is any object exposing ``uniform(low, high)`` and
``permutation(n)``, such as a `numpy.random.Generator`.
"""

from __future__ import annotations

import logging
from typing import List

import numpy as np

from .config import AnimationConfig
from .graph import Topology

logger = logging.getLogger(__name__)


def _jitter(rng, magnitude: float) -> float:
    if magnitude <= 0.0:
        return 0.0
    return float(rng.uniform(-magnitude / 2.0, magnitude / 2.0))


def build_topology(
    config: AnimationConfig,
    width: float,
    height: float,
    rng: np.random.Generator | None = None,
) -> Topology:
    """
    Build a fresh topology for a surface of the given size.

    Args:
        config: Layout and fan-out parameters
        width: Surface width in pixels
        height: Surface height in pixels
        rng: Random source for jitter, radius variance and target selection

    Returns:
        Topology: New topology with zero activation everywhere. Non-positive
        dimensions yield an empty topology.
    """
    rng = rng if rng is not None else np.random.default_rng()

    if width <= 0 or height <= 0:
        logger.debug("Surface is %sx%s; building an empty topology", width, height)
        return Topology()

    layer_sizes = list(config.layers)
    layer_count = len(layer_sizes)
    topo = Topology(layer_count)

    total_width = width * config.h_spacing_multiplier
    start_x = (width - total_width) / 2.0
    layer_spacing = total_width / (layer_count - 1) if layer_count > 1 else 0.0

    total_height = height * config.v_spacing_multiplier
    start_y = (height - total_height) / 2.0

    previous_layer: List[int] = []
    for layer_index, node_count in enumerate(layer_sizes):
        layer_x = start_x + layer_index * layer_spacing
        node_spacing = total_height / (node_count - 1) if node_count > 1 else 0.0

        current_layer: List[int] = []
        for i in range(node_count):
            if node_count == 1:
                base_y = start_y + total_height / 2.0
            else:
                base_y = start_y + i * node_spacing
            radius = config.base_node_radius
            if config.node_radius_variance > 0.0:
                radius += float(
                    rng.uniform(-config.node_radius_variance, config.node_radius_variance)
                )
            node = topo.add_node(
                x=layer_x + _jitter(rng, config.position_jitter),
                y=base_y + _jitter(rng, config.position_jitter),
                layer_index=layer_index,
                base_radius=max(1.0, radius),
            )
            current_layer.append(node.id)

        # Forward connections from the previous layer into this one
        if layer_index > 0 and current_layer:
            fan_out = min(config.max_connections_per_node, len(current_layer))
            for source_id in previous_layer:
                order = rng.permutation(len(current_layer))
                for k in range(fan_out):
                    topo.add_connection(source_id, current_layer[int(order[k])])

        previous_layer = current_layer

    logger.debug(
        "Built topology: %d layers, %d nodes, %d connections",
        topo.layer_count,
        topo.node_count,
        topo.connection_count,
    )
    return topo
