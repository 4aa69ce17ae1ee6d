"""Semantic type aliases for compile-time type safety.

NewType creates distinct types that mypy treats as incompatible,
preventing accidental misuse of semantically different string values.
"""

from typing import NewType

NodeID = NewType("NodeID", str)
"""Unique node identifier in the graph store (e.g., 'capslock_3')"""

EdgeID = NewType("EdgeID", str)
"""Unique edge identifier in the graph store (e.g., 'edge_7')"""

PortName = NewType("PortName", str)
"""Name of an input port on a node (e.g., 'input', 'input-2', 'token-NAME')"""

ChannelName = NewType("ChannelName", str)
"""Name of an output channel on a node (e.g., 'value', 'output-0')"""

DEFAULT_CHANNEL = ChannelName("value")
"""Primary output channel read when an edge omits its source channel."""

DEFAULT_INPUT = PortName("input")
"""Input port of single-input kinds."""
