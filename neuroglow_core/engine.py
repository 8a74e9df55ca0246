"""
Activation simulator for layered signal networks.

The engine advances the activation state of every node by discrete ticks.
Each tick runs three phases over the whole network, never interleaved:

1. Reset: clear every node's incoming signal accumulator
2. Propagation: every node above `min_activation_level` adds
   ``activation_level * signal_propagation_speed`` to each of its targets,
   reading activation levels left by the previous tick
3. State Update: decay, then trigger (random firing for input nodes, threshold
   crossing for the rest), then clamp at zero

Configuration: thresholds, rates and probabilities come from `AnimationConfig`
in `neuroglow_core.config`. All rates are per tick.
"""

from __future__ import annotations

from typing import Any, Dict

import numpy as np

from .config import AnimationConfig
from .graph import Topology

# Floor applied to a node's activation before a boost is added
BOOST_FLOOR = 0.1


class Engine:
    """
    Simulates signal propagation over a `Topology`.

    The engine owns no global state: several engines may run side by side,
    each on its own topology, configuration and random source.

    Attributes:
        topology: The network whose node state is mutated
        config: Current configuration (read-only during a tick)
        rng: Random source exposing ``random()``
        t: Number of ticks simulated since creation or the last reset
    """

    def __init__(
        self,
        topology: Topology,
        config: AnimationConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        """
        Initialize the engine.

        Args:
            topology: Network to simulate
            config: Simulation parameters (defaults when None)
            rng: Random source for input firing (fresh generator when None)
        """
        self.topology = topology
        self.config = config or AnimationConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.t = 0
        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "input_fire_count": 0,
            "threshold_trigger_count": 0,
            "triggers_by_layer": {},  # layer index -> count
            "first_active_step": {},  # node id -> t when first boosted
            "peak_activation": 0.0,
        }

    def reset(self):
        """
        Reset the network to zero activation.

        Clears activation levels and signal accumulators of every node, the
        tick counter and the statistics.
        """
        self.topology.reset_activation()
        self.t = 0
        self.stats = self._empty_stats()

    # ----- phases -----
    def _reset_signals(self):
        for node in self.topology.nodes:
            node.incoming_signal = 0.0

    def _propagate(self):
        """
        Accumulate forward signal at every connection target.

        Only `incoming_signal` is written here, so every source is read with
        the activation level produced by the previous tick.
        """
        threshold = self.config.min_activation_level
        speed = self.config.signal_propagation_speed
        nodes = self.topology.nodes
        for source in nodes:
            if source.activation_level > threshold:
                strength = source.activation_level * speed
                for conn in source.connections:
                    nodes[conn.target].incoming_signal += strength

    def _update_states(self):
        """
        Apply decay and trigger logic to every node.

        - Decay: subtract `decay_rate` while above `min_activation_level`
        - Input nodes: fire with `input_activation_probability`
        - Other nodes: fire when `incoming_signal >= activation_threshold`,
          with a boost scaled by ``incoming_signal / activation_threshold``
        - Clamp: activation never drops below zero
        """
        cfg = self.config
        for node in self.topology.nodes:
            activation = node.activation_level

            if activation > cfg.min_activation_level:
                activation -= cfg.decay_rate

            fired = False
            if node.layer_index == 0:
                if self.rng.random() < cfg.input_activation_probability:
                    activation = max(activation, BOOST_FLOOR) + cfg.activation_boost
                    fired = True
                    self.stats["input_fire_count"] += 1
            elif node.incoming_signal >= cfg.activation_threshold:
                activation = max(activation, BOOST_FLOOR) + cfg.activation_boost * (
                    node.incoming_signal / cfg.activation_threshold
                )
                fired = True
                self.stats["threshold_trigger_count"] += 1

            if fired:
                by_layer = self.stats["triggers_by_layer"]
                by_layer[node.layer_index] = by_layer.get(node.layer_index, 0) + 1
                if node.id not in self.stats["first_active_step"]:
                    self.stats["first_active_step"][node.id] = self.t

            node.activation_level = max(0.0, activation)
            if node.activation_level > self.stats["peak_activation"]:
                self.stats["peak_activation"] = node.activation_level

    def step(self, n=1):
        """
        Advance the simulation by n ticks.

        Args:
            n: Number of ticks to advance (default: 1)

        Returns:
            dict: Snapshot of the network state after stepping
        """
        for _ in range(n):
            self._reset_signals()
            self._propagate()
            self._update_states()
            self.t += 1
        return self.snapshot()

    def snapshot(self):
        """
        Capture the current activation state.

        Returns:
            dict: Dictionary containing:
                - 't': Current tick
                - 'nodes': node id -> layer, activation and incoming signal
                - 'stats': Trigger statistics
        """
        return {
            "t": self.t,
            "nodes": {
                node.id: {
                    "layer": node.layer_index,
                    "activation": node.activation_level,
                    "incoming": node.incoming_signal,
                }
                for node in self.topology.nodes
            },
            "stats": self.stats,
        }
