"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/engine.

Import patterns:
    from textubes.contracts import Determinism, NodeID, PortLayout
"""

from textubes.contracts.enums import (
    Determinism,
    ErrorCategory,
    KindCategory,
    PortDirection,
)
from textubes.contracts.errors import (
    GraphValidationError,
    InvalidConnectionError,
    NodeEvaluationError,
    PropagationBoundError,
    SnapshotValidationError,
    UnknownKindError,
)
from textubes.contracts.ports import EMPTY_LAYOUT, Port, PortLayout
from textubes.contracts.results import MutationResult, PropagationReport
from textubes.contracts.types import (
    DEFAULT_CHANNEL,
    DEFAULT_INPUT,
    ChannelName,
    EdgeID,
    NodeID,
    PortName,
)

__all__ = [
    "DEFAULT_CHANNEL",
    "DEFAULT_INPUT",
    "EMPTY_LAYOUT",
    "ChannelName",
    "Determinism",
    "EdgeID",
    "ErrorCategory",
    "GraphValidationError",
    "InvalidConnectionError",
    "KindCategory",
    "MutationResult",
    "NodeEvaluationError",
    "NodeID",
    "Port",
    "PortDirection",
    "PortLayout",
    "PortName",
    "PropagationBoundError",
    "PropagationReport",
    "SnapshotValidationError",
    "UnknownKindError",
]
