# src/textubes/engine/orchestrator.py
"""Orchestrator: the mutation facade over store, resolver and engine.

Every mutation follows the same sequence:

1. Snapshot the store
2. Apply the structural change
3. Run a propagation pass seeded at the affected nodes
4. Return a MutationResult with the report and exported state

Any exception raised in steps 2-3 restores the snapshot and is re-raised,
so a failed mutation never leaves partial state behind.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeAlias

from textubes.contracts import (
    DEFAULT_CHANNEL,
    DEFAULT_INPUT,
    ChannelName,
    EdgeID,
    GraphValidationError,
    InvalidConnectionError,
    MutationResult,
    NodeID,
    PortLayout,
    PortName,
    PropagationReport,
    SnapshotValidationError,
    UnknownKindError,
)
from textubes.core.config import TextubesSettings
from textubes.core.dag import Edge, GraphStore
from textubes.core.logging import get_logger
from textubes.core.snapshot import build_store, export_store, parse_document
from textubes.engine.ports import PortResolver
from textubes.engine.propagation import REGENERATE_PARAM, SEED_PARAM, PropagationEngine
from textubes.plugins.base import BaseKind
from textubes.plugins.config_base import ENGINE_PRIVATE_PREFIX, ParamsError
from textubes.plugins.manager import TransformRegistry, get_default_registry

logger = get_logger(__name__)

_SEED_BITS = 32

# Upper bounds (exclusive) for engine-private params read from documents.
# Stamps hash them through RFC 8785, which only admits integers below 2**53.
_PRIVATE_PARAM_LIMITS: dict[str, int] = {
    SEED_PARAM: 2**_SEED_BITS,
    REGENERATE_PARAM: 2**53,
}

# (dirty nodes, created node, created edge, superseded edge)
_Applied: TypeAlias = tuple[list[NodeID], NodeID | None, EdgeID | None, EdgeID | None]


class Orchestrator:
    """Owns one graph and applies mutations to it.

    Usage:
        graph = Orchestrator()
        src = graph.add_node("source", {"value": "hello"}).node_id
        caps = graph.add_node("capslock").node_id
        graph.add_edge(src, caps)
        graph.value(caps)  # "HELLO"
    """

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        settings: TextubesSettings | None = None,
    ) -> None:
        self._registry = registry if registry is not None else get_default_registry()
        self._settings = settings if settings is not None else TextubesSettings()
        self._store = GraphStore()
        self._resolver = PortResolver(self._registry)
        self._engine = PropagationEngine(
            self._registry,
            resolver=self._resolver,
            max_iterations=self._settings.propagation.max_iterations,
        )
        seed = self._settings.random.seed
        self._seed_source: random.Random = random.Random(seed) if seed is not None else random.SystemRandom()

    @property
    def store(self) -> GraphStore:
        return self._store

    @property
    def registry(self) -> TransformRegistry:
        return self._registry

    # === Mutations ===

    def add_node(self, kind: str, params: Mapping[str, Any] | None = None) -> MutationResult:
        """Create a node seeded with its kind's default params.

        Raises:
            UnknownKindError: If the kind is not registered
            ParamsError: If params are invalid or use engine-private keys
        """
        contract = self._require_kind(kind)
        user_params = dict(params or {})
        self._reject_private_keys(user_params)
        contract.parse_params(user_params, strict=True)

        node_params = {**contract.default_params(), **user_params}
        if contract.is_regenerative:
            node_params[SEED_PARAM] = self._draw_seed()
            node_params[REGENERATE_PARAM] = 0

        def apply() -> _Applied:
            node = self._store.add_node(kind, node_params)
            logger.debug("node_added", node_id=node.node_id, kind=kind)
            return [node.node_id], node.node_id, None, None

        return self._mutate(apply)

    def remove_node(self, node_id: str) -> MutationResult:
        """Delete a node and every incident edge.

        Raises:
            KeyError: If the node does not exist
        """
        self._store.node(node_id)

        def apply() -> _Applied:
            removed = self._store.remove_node(node_id)
            dirty = [edge.target for edge in removed if edge.target != node_id]
            logger.debug("node_removed", node_id=node_id, edges=[e.edge_id for e in removed])
            return dirty, None, None, None

        return self._mutate(apply)

    def set_node_params(self, node_id: str, params: Mapping[str, Any]) -> MutationResult:
        """Shallow-merge params into a node.

        Raises:
            KeyError: If the node does not exist
            ParamsError: If params are invalid or use engine-private keys
        """
        state = self._store.node(node_id)
        partial = dict(params)
        self._reject_private_keys(partial)

        merged = {**state.params, **partial}
        contract = self._registry.get(state.kind)
        if contract is not None:
            contract.parse_params(partial, strict=True)
            contract.parse_params(merged)

        def apply() -> _Applied:
            self._store.node(node_id).params = merged
            return [NodeID(node_id)], None, None, None

        return self._mutate(apply)

    def add_edge(
        self,
        source: str,
        target: str,
        target_port: str = DEFAULT_INPUT,
        source_channel: str | None = None,
    ) -> MutationResult:
        """Connect a source channel to a target input port.

        An existing edge at (target, target_port) is superseded.

        Raises:
            InvalidConnectionError: If the connection is rejected
        """
        self._validate_connection(source, target, target_port, source_channel)

        def apply() -> _Applied:
            edge = Edge(
                edge_id=self._store.allocate_edge_id(),
                source=NodeID(source),
                target=NodeID(target),
                target_port=PortName(target_port),
                source_channel=ChannelName(source_channel) if source_channel else None,
            )
            superseded = self._store.add_edge(edge)
            if superseded is not None:
                logger.debug("edge_superseded", edge_id=superseded.edge_id, by=edge.edge_id)
            return [edge.target], None, edge.edge_id, superseded.edge_id if superseded else None

        return self._mutate(apply)

    def remove_edge(self, edge_id: str) -> MutationResult:
        """Disconnect an edge.

        Raises:
            KeyError: If the edge does not exist
        """
        self._store.edge(edge_id)

        def apply() -> _Applied:
            edge = self._store.remove_edge(edge_id)
            return [edge.target], None, None, None

        return self._mutate(apply)

    def regenerate(self, node_id: str) -> MutationResult:
        """Bump a regenerative node's token and draw a new seed.

        Raises:
            KeyError: If the node does not exist
            GraphValidationError: If the node's kind is not regenerative
        """
        state = self._store.node(node_id)
        contract = self._registry.get(state.kind)
        if contract is None or not contract.is_regenerative:
            raise GraphValidationError(f"Node {node_id!r} (kind {state.kind!r}) is not regenerative")
        return self._regenerate_all([NodeID(node_id)])

    def regenerate_upstream(self, node_id: str) -> MutationResult:
        """Regenerate every regenerative node feeding into a node, and the node itself.

        Raises:
            KeyError: If the node does not exist
        """
        candidates = self._store.ancestors(node_id) | {NodeID(node_id)}
        regenerative = [
            nid
            for nid in self._store.node_ids()
            if nid in candidates and self._is_regenerative(self._store.node(nid).kind)
        ]
        return self._regenerate_all(regenerative)

    def import_document(self, data: Mapping[str, Any]) -> MutationResult:
        """Replace the graph with a snapshot document and propagate from every node.

        The current graph is untouched unless the whole import succeeds.

        Raises:
            SnapshotValidationError: If the document is rejected, including
                out-of-range _seed or _regenerate values on regenerative nodes
            PropagationBoundError: If the imported graph does not reach a fixpoint
        """
        doc = parse_document(data)
        for node in doc.nodes:
            contract = self._registry.get(node.kind)
            if contract is None:
                continue
            try:
                contract.parse_params(node.params)
            except ParamsError as e:
                raise SnapshotValidationError(f"Node {node.id!r}: {e}") from e
            if contract.is_regenerative:
                self._check_private_params(node.id, node.params)

        store = build_store(doc)
        cycle = store.find_cycle()
        if cycle:
            logger.warning("graph_contains_cycle", nodes=cycle)
        for state in store.nodes():
            if self._is_regenerative(state.kind):
                state.params.setdefault(SEED_PARAM, self._draw_seed())
                state.params.setdefault(REGENERATE_PARAM, 0)

        report = self._engine.run(store, store.node_ids())
        self._store = store
        logger.info(
            "graph_imported",
            nodes=store.node_count,
            edges=store.edge_count,
            evaluations=report.iterations,
            unknown_kinds=len(report.errors),
        )
        return MutationResult(report=report, state=export_store(store))

    # === Queries ===

    def export_document(self) -> dict[str, Any]:
        """The literal current graph contents as a snapshot document."""
        return export_store(self._store)

    def ports(self, node_id: str) -> PortLayout:
        """Currently resolved ports of a node."""
        return self._resolver.layout(self._store, node_id)

    def outputs(self, node_id: str) -> dict[str, str]:
        """Cached output channels of a node."""
        return dict(self._store.node(node_id).outputs)

    def value(self, node_id: str, channel: str = DEFAULT_CHANNEL) -> str:
        """Cached value of one channel ("" if the channel does not exist)."""
        return self._store.node(node_id).outputs.get(ChannelName(channel), "")

    # === Internals ===

    def _mutate(self, apply: Callable[[], _Applied]) -> MutationResult:
        snapshot = self._store.snapshot()
        try:
            dirty, node_id, edge_id, superseded = apply()
            report = self._engine.run(self._store, dirty)
        except Exception:
            self._store.restore(snapshot)
            raise
        return MutationResult(
            report=report,
            state=export_store(self._store),
            node_id=node_id,
            edge_id=edge_id,
            superseded_edge=superseded,
        )

    def _regenerate_all(self, node_ids: Iterable[NodeID]) -> MutationResult:
        targets = list(node_ids)

        def apply() -> _Applied:
            for nid in targets:
                params = self._store.node(nid).params
                params[REGENERATE_PARAM] = int(params.get(REGENERATE_PARAM, 0)) + 1
                params[SEED_PARAM] = self._draw_seed()
            logger.debug("nodes_regenerated", node_ids=targets)
            return targets, None, None, None

        if not targets:
            return MutationResult(report=PropagationReport(), state=export_store(self._store))
        return self._mutate(apply)

    def _validate_connection(self, source: str, target: str, target_port: str, source_channel: str | None) -> None:
        for endpoint in (source, target):
            if not self._store.has_node(endpoint):
                raise InvalidConnectionError(f"Unknown node: {endpoint!r}")
        if source == target:
            raise InvalidConnectionError(f"Cannot connect node {source!r} to itself")

        target_layout = self._resolver.layout(self._store, target)
        if not target_layout.has_input(target_port):
            available = ", ".join(target_layout.input_names) or "none"
            raise InvalidConnectionError(f"Node {target!r} has no input port {target_port!r} (available: {available})")

        channel = source_channel or DEFAULT_CHANNEL
        source_kind = self._registry.get(self._store.node(source).kind)
        # Unknown kinds only ever carry the default channel
        if source_kind is None:
            exposes = channel == DEFAULT_CHANNEL
        else:
            exposes = self._resolver.layout(self._store, source).has_output(channel)
        if not exposes:
            raise InvalidConnectionError(f"Node {source!r} has no output channel {channel!r}")

        if self._store.would_create_cycle(source, target):
            raise InvalidConnectionError(f"Connecting {source!r} -> {target!r} would create a cycle")

    def _require_kind(self, kind: str) -> BaseKind:
        contract = self._registry.get(kind)
        if contract is None:
            raise UnknownKindError(kind, self._registry.names())
        return contract

    def _is_regenerative(self, kind: str) -> bool:
        contract = self._registry.get(kind)
        return contract is not None and contract.is_regenerative

    def _draw_seed(self) -> int:
        return self._seed_source.getrandbits(_SEED_BITS)

    @staticmethod
    def _check_private_params(node_id: str, params: Mapping[str, Any]) -> None:
        for key, limit in _PRIVATE_PARAM_LIMITS.items():
            if key not in params:
                continue
            value = params[key]
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < limit:
                raise SnapshotValidationError(
                    f"Node {node_id!r}: {key} must be an integer in [0, {limit}), got {value!r}"
                )

    @staticmethod
    def _reject_private_keys(params: Mapping[str, Any]) -> None:
        private = sorted(key for key in params if key.startswith(ENGINE_PRIVATE_PREFIX))
        if private:
            raise ParamsError(f"Params {private} are engine-private and cannot be set directly")
