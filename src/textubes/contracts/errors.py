"""Error types and structured error payloads.

Structural problems raise at the graph store boundary and leave state
unchanged. Per-node problems that the engine recovers from (unknown kinds)
are recorded as NodeEvaluationError payloads in the propagation report.
"""

from collections.abc import Sequence
from typing import TypedDict

from textubes.contracts.enums import ErrorCategory


class NodeEvaluationError(TypedDict):
    """Schema for non-fatal per-node error payloads."""

    node_id: str
    category: ErrorCategory
    message: str


class GraphValidationError(ValueError):
    """Raised when a graph mutation or document fails validation."""

    pass


class InvalidConnectionError(GraphValidationError):
    """Raised when an edge cannot be added (unknown port, self-loop, cycle)."""

    pass


class SnapshotValidationError(GraphValidationError):
    """Raised when an imported graph document is rejected."""

    pass


class UnknownKindError(KeyError):
    """Raised when a node is created with a kind missing from the registry."""

    def __init__(self, kind: str, available: list[str]) -> None:
        self.kind = kind
        self.available = available
        super().__init__(f"Unknown node kind: {kind!r}. Registered: {', '.join(available)}")

    def __str__(self) -> str:
        return str(self.args[0])


class PropagationBoundError(RuntimeError):
    """Raised when a node is evaluated too often within one propagation pass.

    Only reachable when the graph contains a cycle. The orchestrator rolls
    the store back to its pre-mutation snapshot before re-raising.

    Attributes:
        bound: The configured maximum evaluations of a single node per pass
        node_id: Node that was about to exceed the bound
        cycle: Node ids of one cycle in the graph, in edge order
    """

    def __init__(self, bound: int, node_id: str, cycle: Sequence[str] = ()) -> None:
        self.bound = bound
        self.node_id = node_id
        self.cycle = list(cycle)
        message = f"Propagation did not reach a fixpoint: node {node_id!r} was evaluated {bound} times in one pass"
        if self.cycle:
            path = " -> ".join([*self.cycle, self.cycle[0]])
            message += f" (cycle: {path})"
        super().__init__(message)
