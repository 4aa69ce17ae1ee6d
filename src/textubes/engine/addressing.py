# src/textubes/engine/addressing.py
"""Channel addressing: which output value feeds which input port.

An edge reads its `source_channel` from the source node's cache, or the
default channel when none is given. A channel the source no longer has
reads as "" rather than raising; port resolution prunes such edges.
"""

from __future__ import annotations

from textubes.contracts import PortName
from textubes.core.dag import Edge, GraphStore

EMPTY_VALUE = ""


def read_edge(store: GraphStore, edge: Edge) -> str:
    """Current value carried by an edge."""
    source = store.node(edge.source)
    return source.outputs.get(edge.channel, EMPTY_VALUE)


def gather_inputs(store: GraphStore, node_id: str) -> dict[PortName, str]:
    """Connected input port -> current value, for every connected port."""
    return {edge.target_port: read_edge(store, edge) for edge in store.in_edges(node_id)}
