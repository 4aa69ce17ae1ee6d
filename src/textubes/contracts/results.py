"""Outcomes of graph mutations and propagation passes.

These types answer: "What did a mutation change?"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from textubes.contracts.errors import NodeEvaluationError
from textubes.contracts.types import ChannelName, EdgeID, NodeID


@dataclass
class PropagationReport:
    """Record of a single propagation pass.

    Fields:
        evaluated: Node IDs in the order they were evaluated
        commits: (node_id, channel) for every channel written to a node cache
        removed_edges: Edges pruned by port resolution during the pass
        errors: Non-fatal per-node errors (e.g., unknown kind)
        iterations: Number of node evaluations performed
    """

    evaluated: list[NodeID] = field(default_factory=list)
    commits: list[tuple[NodeID, ChannelName]] = field(default_factory=list)
    removed_edges: list[EdgeID] = field(default_factory=list)
    errors: list[NodeEvaluationError] = field(default_factory=list)
    iterations: int = 0

    def committed_nodes(self) -> set[NodeID]:
        """Nodes with at least one written channel."""
        return {node_id for node_id, _channel in self.commits}

    def commit_count(self, node_id: str) -> int:
        """Number of channel writes recorded for a node."""
        return sum(1 for committed, _channel in self.commits if committed == node_id)


@dataclass(frozen=True)
class MutationResult:
    """Result of a graph store mutation.

    Fields:
        report: Propagation pass triggered by the mutation
        state: Exported graph document after the mutation
        node_id: Node created by add_node (None otherwise)
        edge_id: Edge created by add_edge (None otherwise)
        superseded_edge: Edge implicitly removed because add_edge reused its target port
    """

    report: PropagationReport
    state: dict[str, Any]
    node_id: NodeID | None = None
    edge_id: EdgeID | None = None
    superseded_edge: EdgeID | None = None
