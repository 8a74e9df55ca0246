"""
Unit tests for the topology builder.

These tests validate node placement, jitter bounds, radius variance and the
forward-only, bounded fan-out connection structure.
"""

import numpy as np
import pytest

from neuroglow_core.builder import build_topology
from neuroglow_core.config import AnimationConfig
from tests.helpers import StubRng


def _layer_sizes(topo):
    return [len(layer) for layer in topo.layers]


class TestPlacement:
    def test_layers_are_evenly_spaced_and_centered(self):
        cfg = AnimationConfig(layers=(2, 3, 2), position_jitter=0.0, node_radius_variance=0.0)
        topo = build_topology(cfg, 1000, 500, StubRng())

        assert _layer_sizes(topo) == [2, 3, 2]
        xs = [topo.nodes[layer[0]].x for layer in topo.layers]
        # total width 850 centered: starts at 75, spacing 425
        assert xs == pytest.approx([75.0, 500.0, 925.0])

        ys = [topo.nodes[i].y for i in topo.layers[1]]
        # total height 425 centered: starts at 37.5, spacing 212.5
        assert ys == pytest.approx([37.5, 250.0, 462.5])

    def test_single_node_layer_is_vertically_centered(self):
        cfg = AnimationConfig(layers=(1, 4), position_jitter=0.0)
        topo = build_topology(cfg, 800, 600, StubRng())
        assert topo.nodes[0].y == pytest.approx(300.0)

    def test_single_layer_sits_at_left_edge_of_span(self):
        cfg = AnimationConfig(layers=(3,), position_jitter=0.0)
        topo = build_topology(cfg, 1000, 500, StubRng())
        assert all(n.x == pytest.approx(75.0) for n in topo.nodes)
        assert topo.connection_count == 0

    def test_jitter_stays_within_half_magnitude(self):
        cfg = AnimationConfig(layers=(6, 6), position_jitter=10.0)
        plain = build_topology(cfg.merged({"position_jitter": 0.0}), 800, 600, StubRng())
        jittered = build_topology(cfg, 800, 600, np.random.default_rng(3))
        for a, b in zip(plain.nodes, jittered.nodes):
            assert abs(a.x - b.x) <= 5.0
            assert abs(a.y - b.y) <= 5.0

    def test_radius_variance_and_floor(self):
        cfg = AnimationConfig(layers=(50,), base_node_radius=3.0, node_radius_variance=0.5)
        topo = build_topology(cfg, 800, 600, np.random.default_rng(0))
        assert all(2.5 <= n.base_radius <= 3.5 for n in topo.nodes)

        tiny = AnimationConfig(layers=(5,), base_node_radius=0.2, node_radius_variance=0.1)
        topo = build_topology(tiny, 800, 600, np.random.default_rng(0))
        assert all(n.base_radius == 1.0 for n in topo.nodes)


class TestConnections:
    def test_forward_only_and_fan_out_bound(self):
        cfg = AnimationConfig(layers=(5, 9, 11, 9, 6), max_connections_per_node=5)
        topo = build_topology(cfg, 1280, 720, np.random.default_rng(42))

        for conn in topo.connections:
            src = topo.nodes[conn.source]
            dst = topo.nodes[conn.target]
            assert dst.layer_index == src.layer_index + 1

        for node in topo.nodes:
            nxt = node.layer_index + 1
            next_size = len(topo.layers[nxt]) if nxt < topo.layer_count else 0
            assert len(node.connections) <= min(5, next_size)

        assert topo.is_valid(cfg.max_connections_per_node)

    def test_fan_out_capped_by_next_layer_size(self):
        cfg = AnimationConfig(layers=(2, 3), max_connections_per_node=10)
        topo = build_topology(cfg, 800, 600, StubRng())
        assert [len(topo.nodes[i].connections) for i in topo.layers[0]] == [3, 3]

    def test_last_layer_has_no_connections(self):
        topo = build_topology(AnimationConfig(layers=(3, 3)), 800, 600, np.random.default_rng(1))
        assert all(not topo.nodes[i].connections for i in topo.layers[-1])

    def test_targets_follow_permutation(self):
        class ReversedRng(StubRng):
            def permutation(self, n):
                return list(reversed(range(n)))

        cfg = AnimationConfig(layers=(1, 4), max_connections_per_node=2)
        topo = build_topology(cfg, 800, 600, ReversedRng())
        assert topo.successors(0) == [topo.layers[1][3], topo.layers[1][2]]

    def test_zero_fan_out(self):
        topo = build_topology(
            AnimationConfig(layers=(3, 3), max_connections_per_node=0), 800, 600, StubRng()
        )
        assert topo.connection_count == 0

    def test_empty_middle_layer_breaks_the_chain(self):
        topo = build_topology(AnimationConfig(layers=(2, 0, 2)), 800, 600, StubRng())
        assert _layer_sizes(topo) == [2, 0, 2]
        assert topo.connection_count == 0


class TestIdentities:
    def test_node_ids_are_dense_indices(self):
        topo = build_topology(AnimationConfig(), 800, 600, np.random.default_rng(5))
        assert [n.id for n in topo.nodes] == list(range(topo.node_count))
        assert [c.id for c in topo.connections] == list(range(topo.connection_count))

    def test_rebuild_starts_from_zero_activation(self):
        cfg = AnimationConfig(layers=(2, 2))
        first = build_topology(cfg, 800, 600, StubRng())
        first.nodes[0].activation_level = 3.0
        second = build_topology(cfg, 800, 600, StubRng())
        assert second is not first
        assert all(n.activation_level == 0.0 for n in second.nodes)


@pytest.mark.parametrize("width,height", [(0, 600), (800, 0), (-10, -10)])
def test_degenerate_surface_builds_empty_topology(width, height):
    topo = build_topology(AnimationConfig(), width, height, StubRng())
    assert topo.node_count == 0
    assert topo.connection_count == 0
    assert topo.is_valid(5)


def test_default_rng_is_used_when_none_given():
    topo = build_topology(AnimationConfig(layers=(2, 2)), 400, 300)
    assert topo.node_count == 4
