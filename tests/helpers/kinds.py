"""Node kinds used only by tests.

Registered into per-test registries, never the default one.
"""

from collections.abc import Mapping
from typing import Any

from textubes.contracts import Determinism, PortLayout
from textubes.plugins.base import BaseKind, TextTransform
from textubes.plugins.context import KindContext


class CountingUpper(TextTransform):
    """Uppercase transform that counts its evaluations."""

    name = "counting_upper"
    calls = 0

    def transform(self, text: str, params: Any, ctx: KindContext) -> str:
        type(self).calls += 1
        return text.upper()


class MultiChannel(BaseKind):
    """Static kind with two named output channels."""

    name = "multi_channel"

    def resolve_ports(self, params: Mapping[str, Any], sample: Mapping[str, str]) -> PortLayout:
        return PortLayout.build(["input"], ["upper", "lower"])

    def evaluate(self, inputs: Mapping[str, str], params: Mapping[str, Any], ctx: KindContext) -> dict[str, str]:
        text = inputs.get("input", "")
        return {"upper": text.upper(), "lower": text.lower()}


class NoisyRegenerative(TextTransform):
    """Regenerative kind appending a random number to its input."""

    name = "noisy"
    determinism = Determinism.REGENERATIVE

    def transform(self, text: str, params: Any, ctx: KindContext) -> str:
        return f"{text}#{ctx.rng.randrange(1_000_000)}"


TEST_KINDS: list[type[BaseKind]] = [CountingUpper, MultiChannel, NoisyRegenerative]
