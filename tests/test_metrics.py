"""
Unit tests for metrics helpers and engine instrumentation.
"""

import pytest

from neuroglow_core.builder import build_topology
from neuroglow_core.config import AnimationConfig
from neuroglow_core.engine import Engine
from neuroglow_core.graph import Topology
from neuroglow_core.metrics import (
    active_node_count,
    first_active_step,
    layer_activity,
    mean_activation,
    summarize,
    total_input_fires,
    total_threshold_triggers,
)
from tests.helpers import StubRng


@pytest.fixture
def chain_engine():
    # random() == 0.0 makes the single input fire every tick
    cfg = AnimationConfig(layers=(1, 1))
    rng = StubRng(0.0)
    topo = build_topology(cfg, 200, 100, rng)
    return Engine(topo, cfg, rng)


class TestCounters:
    def test_counts_after_two_ticks(self, chain_engine):
        chain_engine.step(2)
        assert total_input_fires(chain_engine) == 2
        assert total_threshold_triggers(chain_engine) == 1
        assert chain_engine.stats["triggers_by_layer"] == {0: 2, 1: 1}

    def test_first_active_step(self, chain_engine):
        chain_engine.step(2)
        assert first_active_step(chain_engine, 0) == 0
        assert first_active_step(chain_engine, 1) == 1
        assert first_active_step(chain_engine, 99) is None

    def test_peak_activation(self, chain_engine):
        chain_engine.step(2)
        # 0.1 floor + 1.5 * (1.6 / 0.6)
        assert chain_engine.stats["peak_activation"] == pytest.approx(4.1)


class TestActivity:
    def test_active_node_count(self, chain_engine):
        assert active_node_count(chain_engine.topology, 0.01) == 0
        chain_engine.step(1)
        assert active_node_count(chain_engine.topology, 0.01) == 1

    def test_mean_activation_is_clamped(self, chain_engine):
        chain_engine.step(2)
        assert mean_activation(chain_engine.topology) == pytest.approx(1.0)

    def test_layer_activity(self):
        topo = Topology(layer_count=3)
        a = topo.add_node(0, 0, 0, 1.0)
        topo.add_node(0, 0, 0, 1.0)
        c = topo.add_node(0, 0, 2, 1.0)
        a.activation_level = 0.5
        c.activation_level = 3.0
        assert layer_activity(topo) == [pytest.approx(0.25), 0.0, pytest.approx(1.0)]

    def test_empty_topology(self):
        topo = Topology()
        assert mean_activation(topo) == 0.0
        assert layer_activity(topo) == []


def test_summarize(chain_engine):
    chain_engine.step(2)
    summary = summarize(chain_engine)
    assert summary["ticks"] == 2
    assert summary["nodes"] == 2
    assert summary["connections"] == 1
    assert summary["input_fires"] == 2
    assert summary["threshold_triggers"] == 1
    assert summary["active_nodes"] == 2
    assert summary["layer_activity"] == [pytest.approx(1.0), pytest.approx(1.0)]
    assert summary["peak_activation"] == pytest.approx(4.1)
