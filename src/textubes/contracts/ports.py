"""Resolved port shapes.

Ports are never stored. They are derived from a node's kind, params and
current inputs by the port resolver, and recomputed on every evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass

from textubes.contracts.enums import PortDirection
from textubes.contracts.types import ChannelName, PortName


@dataclass(frozen=True, slots=True)
class Port:
    """A named input or output slot on a node."""

    id: str
    direction: PortDirection
    is_dynamic: bool = False


@dataclass(frozen=True, slots=True)
class PortLayout:
    """Current input ports and output channels of a node, in display order."""

    inputs: tuple[Port, ...] = ()
    outputs: tuple[Port, ...] = ()

    @classmethod
    def build(
        cls,
        inputs: list[str] | tuple[str, ...] = (),
        outputs: list[str] | tuple[str, ...] = (),
        *,
        dynamic_inputs: bool = False,
        dynamic_outputs: bool = False,
    ) -> PortLayout:
        """Build a layout from plain port names."""
        return cls(
            inputs=tuple(Port(name, PortDirection.INPUT, dynamic_inputs) for name in inputs),
            outputs=tuple(Port(name, PortDirection.OUTPUT, dynamic_outputs) for name in outputs),
        )

    @property
    def input_names(self) -> tuple[PortName, ...]:
        return tuple(PortName(p.id) for p in self.inputs)

    @property
    def output_names(self) -> tuple[ChannelName, ...]:
        return tuple(ChannelName(p.id) for p in self.outputs)

    def has_input(self, name: str) -> bool:
        return any(p.id == name for p in self.inputs)

    def has_output(self, name: str) -> bool:
        return any(p.id == name for p in self.outputs)


EMPTY_LAYOUT = PortLayout()
