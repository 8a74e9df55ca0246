"""
Unit tests for Topology data structures, validation and export.
"""

import pytest

from neuroglow_core.enums import NodeRole
from neuroglow_core.graph import Connection, Topology


def _chain(sizes):
    topo = Topology(len(sizes))
    for layer, size in enumerate(sizes):
        for i in range(size):
            topo.add_node(float(layer * 10), float(i * 10), layer, 2.0)
    return topo


def test_add_node_assigns_sequential_ids():
    topo = _chain([2, 1])
    assert [n.id for n in topo.nodes] == [0, 1, 2]
    assert topo.layers == [[0, 1], [2]]
    assert topo.node(2).layer_index == 1


def test_add_connection_registers_on_source():
    topo = _chain([1, 1])
    conn = topo.add_connection(0, 1)
    assert conn == Connection(0, 0, 1)
    assert topo.nodes[0].connections == [conn]
    assert topo.successors(0) == [1]
    assert topo.connection_count == 1


def test_add_connection_requires_existing_nodes():
    topo = _chain([1])
    with pytest.raises(AssertionError):
        topo.add_connection(0, 5)


def test_connections_are_immutable():
    conn = Connection(0, 1, 2)
    with pytest.raises(Exception):
        conn.target = 3  # type: ignore[misc]


def test_roles():
    topo = _chain([1, 1, 1])
    assert topo.role(0) == NodeRole.INPUT
    assert topo.role(1) == NodeRole.HIDDEN
    assert topo.role(2) == NodeRole.OUTPUT


class TestValidation:
    def test_skip_layer_connection_is_reported(self):
        topo = _chain([1, 1, 1])
        topo.add_connection(0, 2)
        issues = topo.validate_forward_only()
        assert "non_forward_connections" in issues
        assert not topo.is_valid(5)

    def test_backward_connection_is_reported(self):
        topo = _chain([1, 1])
        topo.add_connection(1, 0)
        assert "non_forward_connections" in topo.validate_forward_only()

    def test_fan_out_limit_and_duplicates(self):
        topo = _chain([1, 2])
        topo.add_connection(0, 1)
        topo.add_connection(0, 1)
        issues = topo.validate_fan_out(1)
        assert "fan_out_exceeded" in issues
        assert "duplicate_connections" in issues

    def test_negative_activation_reported(self):
        topo = _chain([1])
        topo.nodes[0].activation_level = -0.1
        assert "negative_activation" in topo.validate_activation_bounds()

    def test_reset_activation(self):
        topo = _chain([2])
        topo.nodes[0].activation_level = 2.0
        topo.nodes[1].incoming_signal = 1.0
        topo.reset_activation()
        assert all(n.activation_level == 0.0 and n.incoming_signal == 0.0 for n in topo.nodes)


class TestExport:
    def test_to_networkx(self):
        nx = pytest.importorskip("networkx")
        topo = _chain([1, 2])
        topo.add_connection(0, 1)
        topo.add_connection(0, 2)
        topo.nodes[0].activation_level = 0.7

        G = topo.to_networkx()
        assert isinstance(G, nx.DiGraph)
        assert G.number_of_nodes() == 3
        assert G.number_of_edges() == 2
        assert G.nodes[0]["role"] == "INPUT"
        assert G.nodes[0]["activation"] == 0.7
        assert G.nodes[1]["layer"] == 1
        assert G.edges[0, 2]["id"] == 1

    def test_export_graphml(self, tmp_path):
        nx = pytest.importorskip("networkx")
        topo = _chain([2, 2])
        topo.add_connection(0, 2)
        path = tmp_path / "topology.graphml"
        topo.export_graphml(str(path))
        loaded = nx.read_graphml(str(path))
        assert loaded.number_of_nodes() == 4
        assert loaded.number_of_edges() == 1
