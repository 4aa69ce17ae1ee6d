# src/textubes/core/dag/store.py
"""GraphStore: the single mutable owner of nodes, edges and cached outputs.

Wraps a NetworkX MultiDiGraph. Nodes carry a NodeState under the "state"
attribute; edges are keyed by edge id and carry an Edge under "edge", so
several edges may join the same node pair on different ports.

The store enforces structure only (ids, incidence, one edge per target
port). Port validity and propagation are the engine's concern.
"""

from __future__ import annotations

import copy
import itertools
from dataclasses import dataclass
from typing import cast

import networkx as nx
from networkx import MultiDiGraph

from textubes.contracts.types import ChannelName, EdgeID, NodeID
from textubes.core.dag.models import Edge, NodeParams, NodeState


@dataclass(frozen=True, slots=True)
class StoreSnapshot:
    """Opaque deep copy of a store's contents, used for rollback."""

    graph: MultiDiGraph[str]
    edges: dict[EdgeID, Edge]
    node_counter: int
    edge_counter: int


class GraphStore:
    """Canonical graph state.

    Usage:
        store = GraphStore()
        node = store.add_node("capslock", {})
        store.add_edge(Edge(store.allocate_edge_id(), src, node.node_id, PortName("input")))
    """

    def __init__(self) -> None:
        self._graph: MultiDiGraph[str] = nx.MultiDiGraph()
        self._edges: dict[EdgeID, Edge] = {}
        self._node_counter = itertools.count(1)
        self._edge_counter = itertools.count(1)
        self._last_node = 0
        self._last_edge = 0

    # === Size and membership ===

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def has_node(self, node_id: str) -> bool:
        return self._graph.has_node(node_id)

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._edges

    # === Id allocation ===

    def allocate_node_id(self, kind: str) -> NodeID:
        """Fresh `{kind}_{n}` id, skipping ids already present."""
        while True:
            self._last_node = next(self._node_counter)
            candidate = f"{kind}_{self._last_node}"
            if not self._graph.has_node(candidate):
                return NodeID(candidate)

    def allocate_edge_id(self) -> EdgeID:
        """Fresh `edge_{n}` id, skipping ids already present."""
        while True:
            self._last_edge = next(self._edge_counter)
            candidate = f"edge_{self._last_edge}"
            if candidate not in self._edges:
                return EdgeID(candidate)

    # === Nodes ===

    def add_node(
        self,
        kind: str,
        params: NodeParams,
        *,
        node_id: str | None = None,
        outputs: dict[str, str] | None = None,
    ) -> NodeState:
        """Insert a node. Allocates an id when none is given.

        Raises:
            ValueError: If node_id is already in use
        """
        if node_id is None:
            node_id = self.allocate_node_id(kind)
        elif self._graph.has_node(node_id):
            raise ValueError(f"Duplicate node id: {node_id!r}")
        state = NodeState(
            node_id=NodeID(node_id),
            kind=kind,
            params=dict(params),
            outputs={ChannelName(k): v for k, v in (outputs or {}).items()},
        )
        self._graph.add_node(node_id, state=state)
        return state

    def remove_node(self, node_id: str) -> list[Edge]:
        """Remove a node and every incident edge. Returns the removed edges.

        Raises:
            KeyError: If the node does not exist
        """
        self._require_node(node_id)
        incident = self.in_edges(node_id) + [e for e in self.out_edges(node_id) if e.target != node_id]
        for edge in incident:
            del self._edges[edge.edge_id]
        self._graph.remove_node(node_id)
        return incident

    def node(self, node_id: str) -> NodeState:
        """Get a node's state.

        Raises:
            KeyError: If the node does not exist
        """
        self._require_node(node_id)
        return cast(NodeState, self._graph.nodes[node_id]["state"])

    def nodes(self) -> list[NodeState]:
        """All nodes in insertion order."""
        return [cast(NodeState, attrs["state"]) for _node_id, attrs in self._graph.nodes(data=True)]

    def node_ids(self) -> list[NodeID]:
        return [NodeID(n) for n in self._graph.nodes]

    # === Edges ===

    def add_edge(self, edge: Edge) -> Edge | None:
        """Insert an edge, superseding any edge already at its target port.

        Returns:
            The superseded edge, if there was one

        Raises:
            KeyError: If either endpoint does not exist
            ValueError: If the edge id is already in use
        """
        self._require_node(edge.source)
        self._require_node(edge.target)
        if edge.edge_id in self._edges:
            raise ValueError(f"Duplicate edge id: {edge.edge_id!r}")

        superseded = self.edge_at(edge.target, edge.target_port)
        if superseded is not None:
            self.remove_edge(superseded.edge_id)

        self._edges[edge.edge_id] = edge
        self._graph.add_edge(edge.source, edge.target, key=edge.edge_id, edge=edge)
        return superseded

    def remove_edge(self, edge_id: str) -> Edge:
        """Remove an edge by id.

        Raises:
            KeyError: If the edge does not exist
        """
        if edge_id not in self._edges:
            raise KeyError(f"Unknown edge: {edge_id!r}")
        edge = self._edges.pop(EdgeID(edge_id))
        self._graph.remove_edge(edge.source, edge.target, key=edge.edge_id)
        return edge

    def edge(self, edge_id: str) -> Edge:
        if edge_id not in self._edges:
            raise KeyError(f"Unknown edge: {edge_id!r}")
        return self._edges[EdgeID(edge_id)]

    def edges(self) -> list[Edge]:
        """All edges in insertion order."""
        return list(self._edges.values())

    def in_edges(self, node_id: str) -> list[Edge]:
        """Edges terminating at a node."""
        return [cast(Edge, data["edge"]) for _u, _v, _key, data in self._graph.in_edges(node_id, data=True, keys=True)]

    def out_edges(self, node_id: str) -> list[Edge]:
        """Edges sourced from a node."""
        return [cast(Edge, data["edge"]) for _u, _v, _key, data in self._graph.out_edges(node_id, data=True, keys=True)]

    def edge_at(self, target: str, port: str) -> Edge | None:
        """The unique edge terminating at (target, port), if any."""
        if not self._graph.has_node(target):
            return None
        for edge in self.in_edges(target):
            if edge.target_port == port:
                return edge
        return None

    # === Topology ===

    def would_create_cycle(self, source: str, target: str) -> bool:
        """True if an edge source -> target would close a directed cycle."""
        if source == target:
            return True
        return cast(bool, nx.has_path(self._graph, target, source))

    def topological_rank(self) -> dict[NodeID, int]:
        """Node -> position in a topological order.

        Falls back to insertion order when the graph contains a cycle; the
        propagation bound then decides termination.
        """
        try:
            order = list(nx.topological_sort(self._graph))
        except nx.NetworkXUnfeasible:
            order = list(self._graph.nodes)
        return {NodeID(node_id): rank for rank, node_id in enumerate(order)}

    def ancestors(self, node_id: str) -> set[NodeID]:
        self._require_node(node_id)
        return {NodeID(n) for n in nx.ancestors(self._graph, node_id)}

    def find_cycle(self) -> list[NodeID]:
        """Node ids along one directed cycle, or [] if the graph is acyclic."""
        try:
            cycle = nx.find_cycle(self._graph)
        except nx.NetworkXNoCycle:
            return []
        return [NodeID(edge[0]) for edge in cycle]

    # === Snapshot / rollback ===

    def snapshot(self) -> StoreSnapshot:
        """Deep copy of the current contents."""
        return StoreSnapshot(
            graph=copy.deepcopy(self._graph),
            edges=dict(self._edges),
            node_counter=self._last_node,
            edge_counter=self._last_edge,
        )

    def restore(self, snapshot: StoreSnapshot) -> None:
        """Replace contents with a snapshot taken earlier."""
        self._graph = copy.deepcopy(snapshot.graph)
        self._edges = dict(snapshot.edges)
        self._last_node = snapshot.node_counter
        self._last_edge = snapshot.edge_counter
        self._node_counter = itertools.count(snapshot.node_counter + 1)
        self._edge_counter = itertools.count(snapshot.edge_counter + 1)

    def _require_node(self, node_id: str) -> None:
        if not self._graph.has_node(node_id):
            raise KeyError(f"Unknown node: {node_id!r}")
