"""
Graph data structures for the layered signal network.

This module defines the data structures that represent one network topology:
- Node: A positioned node carrying activation state
- Connection: An immutable forward edge between two node indices
- Topology: Dense node arena with per-layer index lists and validation helpers

Node identities are indices into `Topology.nodes`, so neighbor resolution is a
list lookup and tearing a topology down is dropping one object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

import networkx as nx

from .enums import NodeRole


@dataclass(frozen=True)
class Connection:
    """
    A directed edge ``source -> target`` between nodes of the same topology.

    Connections carry no weight: the transmitted strength depends only on the
    source node's activation level.

    Attributes:
        id: Unique identifier within the topology
        source: Index of the source node
        target: Index of the target node
    """

    id: int
    """Unique identifier, never reused within one topology."""

    source: int
    """Index of the node the signal leaves from."""

    target: int
    """Index of the node the signal arrives at."""


@dataclass
class Node:
    """
    A node of the layered network.

    Attributes:
        id: Unique identifier, equal to the node's index in `Topology.nodes`
        x: Horizontal position in surface pixels (jitter included)
        y: Vertical position in surface pixels (jitter included)
        layer_index: Ordinal of the layer; 0 is the input layer
        base_radius: Resting radius, fixed at creation
        activation_level: Current signal strength (>= 0, may exceed 1.0)
        incoming_signal: Strength accumulated from upstream nodes this tick
        connections: Outgoing forward connections, fixed after build
    """

    id: int
    """Unique identifier within the topology."""

    x: float
    """Horizontal position."""

    y: float
    """Vertical position."""

    layer_index: int
    """Layer ordinal, 0 for input nodes."""

    base_radius: float = 1.0
    """Radius before the activation pulse is added."""

    activation_level: float = 0.0
    """Current signal strength."""

    incoming_signal: float = 0.0
    """Per-tick accumulator, reset at the start of every tick."""

    connections: List[Connection] = field(default_factory=list)
    """Outgoing connections in creation order."""


class Topology:
    """
    Container for the nodes and connections of one network build.

    Attributes:
        nodes: Dense list of nodes; `nodes[i].id == i`
        layers: Node indices grouped by layer, in layer order
        connections: Every connection in creation order
    """

    def __init__(self, layer_count: int = 0):
        """Initialize an empty topology with `layer_count` empty layers."""
        self.nodes: List[Node] = []
        self.layers: List[List[int]] = [[] for _ in range(layer_count)]
        self.connections: List[Connection] = []

    # ----- construction -----
    def add_node(self, x: float, y: float, layer_index: int, base_radius: float) -> Node:
        """
        Append a node to the arena and register it in its layer.

        Args:
            x: Horizontal position
            y: Vertical position
            layer_index: Layer the node belongs to
            base_radius: Resting radius

        Returns:
            Node: The created node, whose id is its index
        """
        while len(self.layers) <= layer_index:
            self.layers.append([])
        node = Node(len(self.nodes), x, y, layer_index, base_radius)
        self.nodes.append(node)
        self.layers[layer_index].append(node.id)
        return node

    def add_connection(self, source: int, target: int) -> Connection:
        """
        Add a forward connection between two existing nodes.

        Raises:
            AssertionError: If either end is not a node of this topology
        """
        assert (
            0 <= source < len(self.nodes) and 0 <= target < len(self.nodes)
        ), "Both source and target nodes must exist"
        conn = Connection(len(self.connections), source, target)
        self.connections.append(conn)
        self.nodes[source].connections.append(conn)
        return conn

    # ----- lookup -----
    def node(self, node_id: int) -> Node:
        return self.nodes[node_id]

    def successors(self, node_id: int) -> List[int]:
        """Return the target indices of a node's outgoing connections."""
        return [c.target for c in self.nodes[node_id].connections]

    def role(self, node_id: int) -> NodeRole:
        """Return INPUT, HIDDEN or OUTPUT depending on the node's layer."""
        layer = self.nodes[node_id].layer_index
        if layer == 0:
            return NodeRole.INPUT
        if layer == self.layer_count - 1:
            return NodeRole.OUTPUT
        return NodeRole.HIDDEN

    @property
    def layer_count(self) -> int:
        return len(self.layers)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def connection_count(self) -> int:
        return len(self.connections)

    def reset_activation(self) -> None:
        """Zero the activation state of every node."""
        for node in self.nodes:
            node.activation_level = 0.0
            node.incoming_signal = 0.0

    # ----- validation -----
    def validate_forward_only(self) -> Dict[str, List[str]]:
        """
        Check that every connection goes from layer i to layer i + 1.

        Returns:
            Dictionary mapping issue kinds to lists of messages (empty when valid)
        """
        issues: Dict[str, List[str]] = {}
        for conn in self.connections:
            src = self.nodes[conn.source]
            dst = self.nodes[conn.target]
            if dst.layer_index != src.layer_index + 1:
                issues.setdefault("non_forward_connections", []).append(
                    f"Connection {conn.id} links layer {src.layer_index} to layer {dst.layer_index}"
                )
        return issues

    def validate_fan_out(self, max_connections_per_node: int) -> Dict[str, List[str]]:
        """Check every node against ``min(max_connections_per_node, next layer size)``."""
        issues: Dict[str, List[str]] = {}
        for node in self.nodes:
            next_layer = node.layer_index + 1
            next_size = len(self.layers[next_layer]) if next_layer < self.layer_count else 0
            bound = min(max_connections_per_node, next_size)
            if len(node.connections) > bound:
                issues.setdefault("fan_out_exceeded", []).append(
                    f"Node {node.id} has {len(node.connections)} connections (limit {bound})"
                )
            targets = [c.target for c in node.connections]
            if len(set(targets)) != len(targets):
                issues.setdefault("duplicate_connections", []).append(
                    f"Node {node.id} connects to the same target more than once"
                )
        return issues

    def validate_activation_bounds(self) -> Dict[str, List[str]]:
        """Check that no node carries negative activation or signal."""
        issues: Dict[str, List[str]] = {}
        for node in self.nodes:
            if node.activation_level < 0.0:
                issues.setdefault("negative_activation", []).append(
                    f"Node {node.id} has activation {node.activation_level}"
                )
            if node.incoming_signal < 0.0:
                issues.setdefault("negative_signal", []).append(
                    f"Node {node.id} has incoming signal {node.incoming_signal}"
                )
        return issues

    def is_valid(self, max_connections_per_node: int) -> bool:
        return not (
            self.validate_forward_only()
            or self.validate_fan_out(max_connections_per_node)
            or self.validate_activation_bounds()
        )

    # ----- export -----
    def to_networkx(self) -> nx.DiGraph:
        """
        Convert the topology to a NetworkX DiGraph for export/analysis.

        Returns:
            NetworkX DiGraph whose nodes carry layer, role, position and
            activation attributes
        """
        G = nx.DiGraph()
        for node in self.nodes:
            G.add_node(
                node.id,
                layer=node.layer_index,
                role=self.role(node.id).name,
                x=float(node.x),
                y=float(node.y),
                radius=float(node.base_radius),
                activation=float(node.activation_level),
            )
        for conn in self.connections:
            G.add_edge(conn.source, conn.target, id=conn.id)
        return G

    def export_graphml(self, filepath: str) -> None:
        """Export the topology to GraphML at `filepath`."""
        nx.write_graphml(self.to_networkx(), filepath)
