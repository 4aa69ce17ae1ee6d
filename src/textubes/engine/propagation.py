# src/textubes/engine/propagation.py
"""Propagation engine: dirty-set fixpoint over the graph store.

A pass starts from a set of dirty nodes and evaluates them in topological
order. For each node it:

1. resolves ports, pruning edges to ports/channels that no longer exist
   (targets of pruned output edges become dirty);
2. gathers connected inputs through channel addressing;
3. evaluates the kind, or takes the kind's empty outputs when the node has
   input ports and none is connected;
4. commits only channels whose value changed (or that disappeared) and
   marks the targets of edges reading those channels dirty.

Regenerative nodes are evaluated with an rng seeded from an evaluation
stamp. When the stamp is unchanged the evaluation is skipped entirely, so
a pass triggered elsewhere never perturbs their output.

max_iterations caps how often any single node may be evaluated in one
pass. In an acyclic graph every node is evaluated at most once per pass,
so only a cycle that keeps changing can trip it; doing so raises
PropagationBoundError naming the cycle. The caller owns rollback.
"""

from __future__ import annotations

import heapq
import random
from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from textubes.contracts import (
    DEFAULT_CHANNEL,
    ChannelName,
    ErrorCategory,
    NodeEvaluationError,
    NodeID,
    PropagationBoundError,
    PropagationReport,
)
from textubes.core.canonical import stable_hash
from textubes.core.dag import GraphStore, NodeState
from textubes.core.logging import get_logger
from textubes.engine.addressing import EMPTY_VALUE, gather_inputs
from textubes.engine.ports import PortResolver
from textubes.plugins.base import BaseKind
from textubes.plugins.config_base import public_params
from textubes.plugins.context import KindContext
from textubes.plugins.manager import TransformRegistry

logger = get_logger(__name__)

DEFAULT_MAX_ITERATIONS = 10_000

# Engine-private params of regenerative nodes
SEED_PARAM = "_seed"
REGENERATE_PARAM = "_regenerate"


def evaluation_stamp(kind: str, params: Mapping[str, Any], inputs: Mapping[str, str]) -> str:
    """Stamp identifying one regenerative evaluation.

    Covers everything the output may depend on: seed, regenerate token,
    public params and input values.
    """
    return stable_hash(
        {
            "kind": kind,
            "seed": params.get(SEED_PARAM, 0),
            "token": params.get(REGENERATE_PARAM, 0),
            "params": public_params(params),
            "inputs": dict(inputs),
        }
    )


class _DirtyQueue:
    """Dirty set ordered by topological rank; a node is queued at most once."""

    def __init__(self, rank: dict[NodeID, int]) -> None:
        self._rank = rank
        self._heap: list[tuple[int, NodeID]] = []
        self._queued: set[NodeID] = set()

    def push(self, node_id: NodeID) -> None:
        if node_id in self._queued:
            return
        self._queued.add(node_id)
        heapq.heappush(self._heap, (self._rank.get(node_id, len(self._rank)), node_id))

    def pop(self) -> NodeID:
        _rank, node_id = heapq.heappop(self._heap)
        self._queued.discard(node_id)
        return node_id

    def __bool__(self) -> bool:
        return bool(self._heap)


class PropagationEngine:
    """Runs propagation passes against a GraphStore.

    Stateless between passes: all state lives in the store.
    """

    def __init__(
        self,
        registry: TransformRegistry,
        *,
        resolver: PortResolver | None = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> None:
        if max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {max_iterations}")
        self._registry = registry
        self._resolver = resolver or PortResolver(registry)
        self._max_iterations = max_iterations

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    def run(self, store: GraphStore, dirty: Iterable[str]) -> PropagationReport:
        """Propagate from the given dirty nodes until fixpoint.

        Node ids that are no longer in the store are ignored.

        Raises:
            PropagationBoundError: If a node is evaluated more than max_iterations times
        """
        report = PropagationReport()
        evaluations: Counter[NodeID] = Counter()
        queue = _DirtyQueue(store.topological_rank())
        for node_id in dirty:
            if store.has_node(node_id):
                queue.push(NodeID(node_id))

        while queue:
            node_id = queue.pop()
            if not store.has_node(node_id):
                continue
            if evaluations[node_id] >= self._max_iterations:
                cycle = store.find_cycle()
                logger.error(
                    "propagation_bound_exceeded",
                    bound=self._max_iterations,
                    node_id=node_id,
                    cycle=cycle,
                )
                raise PropagationBoundError(self._max_iterations, node_id, cycle)
            evaluations[node_id] += 1
            report.iterations += 1
            report.evaluated.append(node_id)
            self._process(store, store.node(node_id), queue, report)

        return report

    def _process(self, store: GraphStore, state: NodeState, queue: _DirtyQueue, report: PropagationReport) -> None:
        kind = self._registry.get(state.kind)
        if kind is None:
            message = f"Unknown node kind {state.kind!r}"
            logger.warning("unknown_kind", node_id=state.node_id, kind=state.kind)
            report.errors.append(
                NodeEvaluationError(node_id=state.node_id, category=ErrorCategory.UNKNOWN_KIND, message=message)
            )
            self._commit(store, state, {DEFAULT_CHANNEL: EMPTY_VALUE}, queue, report)
            return

        resolution = self._resolver.resolve(store, state.node_id)
        for edge in resolution.removed:
            report.removed_edges.append(edge.edge_id)
        for edge in resolution.removed_outputs:
            queue.push(edge.target)

        inputs = gather_inputs(store, state.node_id)
        if resolution.layout.inputs and not inputs:
            # Nothing connected: canonical empty outputs, forget any stamp
            state.stamp = None
            outputs = kind.empty_outputs(state.params)
        else:
            evaluated = self._evaluate(kind, state, inputs)
            if evaluated is None:
                return
            outputs = evaluated

        self._commit(store, state, outputs, queue, report)

    def _evaluate(self, kind: BaseKind, state: NodeState, inputs: Mapping[str, str]) -> dict[str, str] | None:
        """Evaluate a node. Returns None when a regenerative stamp is unchanged."""
        if not kind.is_regenerative:
            return kind.evaluate(inputs, state.params, KindContext(node_id=state.node_id))

        stamp = evaluation_stamp(state.kind, state.params, inputs)
        if stamp == state.stamp:
            return None
        outputs = kind.evaluate(inputs, state.params, KindContext(node_id=state.node_id, rng=random.Random(stamp)))
        state.stamp = stamp
        return outputs

    def _commit(
        self,
        store: GraphStore,
        state: NodeState,
        outputs: Mapping[str, str],
        queue: _DirtyQueue,
        report: PropagationReport,
    ) -> None:
        """Write changed channels and dirty their readers."""
        previous = state.outputs
        changed = {ChannelName(ch) for ch, value in outputs.items() if ch not in previous or previous[ch] != value}
        changed |= {ch for ch in previous if ch not in outputs}
        if not changed:
            return

        state.outputs = {ChannelName(ch): value for ch, value in outputs.items()}
        for channel in sorted(changed):
            report.commits.append((state.node_id, channel))
        logger.debug(
            "outputs_committed",
            node_id=state.node_id,
            values={ch: state.outputs.get(ch, EMPTY_VALUE) for ch in sorted(changed)},
        )

        for edge in store.out_edges(state.node_id):
            if edge.channel in changed:
                queue.push(edge.target)
