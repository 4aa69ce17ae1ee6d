# src/textubes/core/dag/__init__.py
"""Graph store: canonical nodes, edges and cached outputs.

Package re-exports for the store and its records.
"""

from textubes.core.dag.models import Edge, NodeParams, NodeState
from textubes.core.dag.store import GraphStore, StoreSnapshot

__all__ = [
    "Edge",
    "GraphStore",
    "NodeParams",
    "NodeState",
    "StoreSnapshot",
]
