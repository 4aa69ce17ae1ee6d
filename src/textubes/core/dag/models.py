# src/textubes/core/dag/models.py
"""Node and edge records held by the graph store.

Leaf module: no intra-package imports beyond contracts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias

from textubes.contracts.types import DEFAULT_CHANNEL, ChannelName, EdgeID, NodeID, PortName

# Params values are JSON-compatible scalars set by users or the engine.
# Each kind validates its own keys with a KindParams model; the store
# treats params as opaque.
NodeParams: TypeAlias = dict[str, Any]


@dataclass(slots=True)
class NodeState:
    """A node instance: kind, params, and cached output channels.

    Mutable: the engine rewrites `outputs` and `stamp` during propagation.
    The store is the only owner; callers receive copies via export.
    """

    node_id: NodeID
    kind: str
    params: NodeParams = field(default_factory=dict)
    outputs: dict[ChannelName, str] = field(default_factory=dict)
    # Evaluation stamp of the last regenerative evaluation (None = never)
    stamp: str | None = None


@dataclass(frozen=True, slots=True)
class Edge:
    """Directed connection from a node's output channel to a node's input port.

    `source_channel` is None when the edge reads the default channel.
    """

    edge_id: EdgeID
    source: NodeID
    target: NodeID
    target_port: PortName
    source_channel: ChannelName | None = None

    @property
    def channel(self) -> ChannelName:
        """Channel actually read from the source node."""
        return self.source_channel if self.source_channel is not None else DEFAULT_CHANNEL
