# src/textubes/engine/ports.py
"""Port resolution and edge pruning.

A node's ports are derived on demand from its kind, params and the current
values at its connected inputs. When the derived layout no longer contains
a port or channel that an edge uses, the edge is pruned from the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from textubes.contracts import EMPTY_LAYOUT, PortLayout
from textubes.core.dag import Edge, GraphStore
from textubes.core.logging import get_logger
from textubes.engine.addressing import gather_inputs
from textubes.plugins.base import BaseKind
from textubes.plugins.manager import TransformRegistry

logger = get_logger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one node's ports."""

    layout: PortLayout
    removed_inputs: list[Edge] = field(default_factory=list)
    removed_outputs: list[Edge] = field(default_factory=list)

    @property
    def removed(self) -> list[Edge]:
        return [*self.removed_inputs, *self.removed_outputs]


class PortResolver:
    """Derives port layouts from the registry and the store's current values."""

    def __init__(self, registry: TransformRegistry) -> None:
        self._registry = registry

    def kind_for(self, store: GraphStore, node_id: str) -> BaseKind | None:
        return self._registry.get(store.node(node_id).kind)

    def layout(self, store: GraphStore, node_id: str) -> PortLayout:
        """Current layout of a node. Unknown kinds have no ports.

        Pure: reads the store, never writes it.
        """
        kind = self.kind_for(store, node_id)
        if kind is None:
            return EMPTY_LAYOUT
        state = store.node(node_id)
        return kind.resolve_ports(state.params, gather_inputs(store, node_id))

    def resolve(self, store: GraphStore, node_id: str) -> Resolution:
        """Resolve a node's layout and prune edges it no longer supports.

        Nodes of unknown kind are left untouched: their edges are kept so a
        later registry that knows the kind can still use them.
        """
        if self.kind_for(store, node_id) is None:
            return Resolution(layout=EMPTY_LAYOUT)

        layout = self.layout(store, node_id)

        removed_inputs = [edge for edge in store.in_edges(node_id) if not layout.has_input(edge.target_port)]
        for edge in removed_inputs:
            store.remove_edge(edge.edge_id)

        # Removing input edges can change the sample a dynamic layout depends on
        if removed_inputs:
            layout = self.layout(store, node_id)

        removed_outputs = [edge for edge in store.out_edges(node_id) if not layout.has_output(edge.channel)]
        for edge in removed_outputs:
            store.remove_edge(edge.edge_id)

        for edge in (*removed_inputs, *removed_outputs):
            logger.debug(
                "edge_pruned",
                edge_id=edge.edge_id,
                node_id=node_id,
                port=edge.target_port if edge.target == node_id else edge.channel,
            )

        return Resolution(layout=layout, removed_inputs=removed_inputs, removed_outputs=removed_outputs)
