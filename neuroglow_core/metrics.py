"""
Metrics utilities for signal network runs.

This module provides helpers that read the statistics recorded by `Engine`
and the live activation state of a `Topology`.

The Engine records the following statistics in `engine.stats`:
- input_fire_count: total number of spontaneous input-layer firings
- threshold_trigger_count: total number of threshold-driven firings
- triggers_by_layer: per-layer firing counts
- first_active_step: first tick at which each node fired
- peak_activation: largest activation level seen so far
"""

from __future__ import annotations

from typing import Any, Dict, List


def total_input_fires(engine) -> int:
    """Return how many times input nodes fired spontaneously."""
    return int(engine.stats.get("input_fire_count", 0))


def total_threshold_triggers(engine) -> int:
    """Return how many times non-input nodes crossed the activation threshold."""
    return int(engine.stats.get("threshold_trigger_count", 0))


def first_active_step(engine, node_id: int) -> int | None:
    """Return the first tick at which the node fired, or None."""
    return engine.stats.get("first_active_step", {}).get(node_id)


def active_node_count(topology, min_level: float) -> int:
    """Count nodes whose activation is above `min_level`."""
    return sum(1 for n in topology.nodes if n.activation_level > min_level)


def mean_activation(topology) -> float:
    """Mean visual intensity (activation clamped to [0, 1]) over all nodes."""
    if not topology.nodes:
        return 0.0
    return sum(min(1.0, n.activation_level) for n in topology.nodes) / len(topology.nodes)


def layer_activity(topology) -> List[float]:
    """Mean visual intensity per layer; empty layers report 0.0."""
    result = []
    for layer in topology.layers:
        if not layer:
            result.append(0.0)
            continue
        total = sum(min(1.0, topology.nodes[i].activation_level) for i in layer)
        result.append(total / len(layer))
    return result


def summarize(engine) -> Dict[str, Any]:
    """Collect the run metrics of an engine into a JSON-friendly dict."""
    topology = engine.topology
    return {
        "ticks": int(engine.t),
        "nodes": topology.node_count,
        "connections": topology.connection_count,
        "input_fires": total_input_fires(engine),
        "threshold_triggers": total_threshold_triggers(engine),
        "active_nodes": active_node_count(topology, engine.config.min_activation_level),
        "mean_activation": float(mean_activation(topology)),
        "layer_activity": [float(v) for v in layer_activity(topology)],
        "peak_activation": float(engine.stats.get("peak_activation", 0.0)),
    }
