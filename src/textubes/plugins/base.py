# src/textubes/plugins/base.py
"""Base classes for node kind implementations.

Every node kind satisfies the same contract, and the engine never
special-cases a kind by name:

- resolve_ports(params, sample) -> PortLayout
    Pure. `sample` maps each currently connected input port to its resolved
    value, so dynamic kinds can derive their ports from data.
- evaluate(inputs, params, ctx) -> {channel: text}
    Pure apart from ctx.rng. `inputs` holds only connected ports.
- empty_outputs(params) -> {channel: text}
    Canonical outputs when none of the node's input ports are connected.

Kind classes MUST subclass BaseKind (discovery uses issubclass()). The
intermediate classes below cover the common static shapes:

    SourceKind       no inputs, one `value` output
    TextTransform    one `input`, one `value` output
    DestinationKind  one `input`, no connectable outputs
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from textubes.contracts import (
    DEFAULT_CHANNEL,
    DEFAULT_INPUT,
    Determinism,
    KindCategory,
    PortLayout,
)
from textubes.plugins.config_base import KindParams
from textubes.plugins.context import KindContext

SINGLE_IN_SINGLE_OUT = PortLayout.build([DEFAULT_INPUT], [DEFAULT_CHANNEL])


class BaseKind(ABC):
    """Base class for all node kinds.

    Kinds are stateless: the registry holds one shared instance per kind and
    all per-node data lives in the graph store.
    """

    name: str
    label: str = ""
    category: KindCategory = KindCategory.TRANSFORMER
    determinism: Determinism = Determinism.DETERMINISTIC
    plugin_version: str = "1.0.0"
    params_model: type[KindParams] = KindParams

    # Canonical text of every channel when nothing is connected
    empty_value: str = ""

    @property
    def is_regenerative(self) -> bool:
        return self.determinism == Determinism.REGENERATIVE

    def default_params(self) -> dict[str, Any]:
        """Params seeded into a freshly created node."""
        return self.params_model.defaults()

    def parse_params(self, params: Mapping[str, Any], *, strict: bool = False) -> Any:
        """Parse raw node params into this kind's params model."""
        return self.params_model.from_params(params, strict=strict)

    def resolve_ports(self, params: Mapping[str, Any], sample: Mapping[str, str]) -> PortLayout:
        """Current port layout. Static kinds ignore both arguments."""
        return SINGLE_IN_SINGLE_OUT

    def empty_outputs(self, params: Mapping[str, Any]) -> dict[str, str]:
        return {DEFAULT_CHANNEL: self.empty_value}

    @abstractmethod
    def evaluate(
        self,
        inputs: Mapping[str, str],
        params: Mapping[str, Any],
        ctx: KindContext,
    ) -> dict[str, str]:
        """Compute output channels from connected inputs and params."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, determinism={self.determinism.value!r})"


class SourceKind(BaseKind):
    """Kind with no inputs that emits text derived from its params."""

    category = KindCategory.SOURCE

    def resolve_ports(self, params: Mapping[str, Any], sample: Mapping[str, str]) -> PortLayout:
        return PortLayout.build([], [DEFAULT_CHANNEL])

    def evaluate(
        self,
        inputs: Mapping[str, str],
        params: Mapping[str, Any],
        ctx: KindContext,
    ) -> dict[str, str]:
        return {DEFAULT_CHANNEL: self.generate(self.parse_params(params), ctx)}

    @abstractmethod
    def generate(self, params: Any, ctx: KindContext) -> str: ...


class TextTransform(BaseKind):
    """Kind mapping a single text input to a single text output."""

    def evaluate(
        self,
        inputs: Mapping[str, str],
        params: Mapping[str, Any],
        ctx: KindContext,
    ) -> dict[str, str]:
        text = inputs.get(DEFAULT_INPUT, "")
        return {DEFAULT_CHANNEL: self.transform(text, self.parse_params(params), ctx)}

    @abstractmethod
    def transform(self, text: str, params: Any, ctx: KindContext) -> str: ...


class DestinationKind(BaseKind):
    """Kind that terminates a flow.

    The input value is cached on the default channel for display, but no
    output ports are exposed, so nothing can connect downstream of it.
    """

    category = KindCategory.DESTINATION

    def resolve_ports(self, params: Mapping[str, Any], sample: Mapping[str, str]) -> PortLayout:
        return PortLayout.build([DEFAULT_INPUT], [])

    def evaluate(
        self,
        inputs: Mapping[str, str],
        params: Mapping[str, Any],
        ctx: KindContext,
    ) -> dict[str, str]:
        return {DEFAULT_CHANNEL: inputs.get(DEFAULT_INPUT, "")}
