# src/textubes/plugins/kinds/structural.py
"""Kinds whose port layout depends on connections or data.

- concatenate: variadic inputs `input-0 … input-n`, always one open port
- split: one `output-i` channel per part of the current input
- template: a fixed `template` port plus one `token-NAME` port per distinct
  `%%NAME%%` marker in the template text
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Literal

from textubes.contracts import DEFAULT_CHANNEL, DEFAULT_INPUT, PortLayout
from textubes.plugins.base import BaseKind
from textubes.plugins.config_base import KindParams
from textubes.plugins.context import KindContext

JOIN_PORT_PREFIX = "input-"
SPLIT_CHANNEL_PREFIX = "output-"
TEMPLATE_PORT = "template"
TOKEN_PORT_PREFIX = "token-"

MIN_JOIN_PORTS = 2

TOKEN_PATTERN = re.compile(r"%%([^%]+)%%")


def indexed_port(name: str, prefix: str) -> int | None:
    """Index of a `prefix<N>` port name, or None if it does not match."""
    if not name.startswith(prefix):
        return None
    suffix = name[len(prefix) :]
    if not suffix.isdigit():
        return None
    return int(suffix)


def join_port_count(connected: Mapping[str, Any]) -> int:
    """Number of join ports to expose for the connected port names.

    Always at least two, always one more than are connected, and never fewer
    than the highest connected index + 1 so no existing edge loses its port.
    """
    indices = [i for i in (indexed_port(name, JOIN_PORT_PREFIX) for name in connected) if i is not None]
    highest = max(indices, default=-1)
    return max(MIN_JOIN_PORTS, len(indices) + 1, highest + 1)


class ConcatenateParams(KindParams):
    separator: str = ""


class Concatenate(BaseKind):
    """Joins multiple text inputs together with an optional separator."""

    name = "concatenate"
    label = "Concatenate"
    params_model = ConcatenateParams

    def resolve_ports(self, params: Mapping[str, Any], sample: Mapping[str, str]) -> PortLayout:
        count = join_port_count(sample)
        return PortLayout.build(
            [f"{JOIN_PORT_PREFIX}{i}" for i in range(count)],
            [DEFAULT_CHANNEL],
            dynamic_inputs=True,
        )

    def evaluate(
        self,
        inputs: Mapping[str, str],
        params: Mapping[str, Any],
        ctx: KindContext,
    ) -> dict[str, str]:
        cfg = self.parse_params(params)
        ordered = sorted(
            (index, value)
            for name, value in inputs.items()
            if (index := indexed_port(name, JOIN_PORT_PREFIX)) is not None
        )
        return {DEFAULT_CHANNEL: cfg.separator.join(value for _, value in ordered)}


class SplitParams(KindParams):
    mode: Literal["line", "delimiter", "character"] = "line"
    delimiter: str = ","


def split_parts(text: str, mode: str, delimiter: str) -> list[str]:
    """Split text into parts. Empty text has no parts."""
    if not text:
        return []
    if mode == "character" or (mode == "delimiter" and not delimiter):
        return list(text)
    if mode == "delimiter":
        return text.split(delimiter)
    return text.split("\n")


class Split(BaseKind):
    """Splits input text into multiple outputs by line, delimiter, or character."""

    name = "split"
    label = "Split"
    params_model = SplitParams

    def _parts(self, params: Mapping[str, Any], text: str) -> list[str]:
        cfg = self.parse_params(params)
        return split_parts(text, cfg.mode, cfg.delimiter)

    def resolve_ports(self, params: Mapping[str, Any], sample: Mapping[str, str]) -> PortLayout:
        parts = self._parts(params, sample.get(DEFAULT_INPUT, ""))
        return PortLayout.build(
            [DEFAULT_INPUT],
            [f"{SPLIT_CHANNEL_PREFIX}{i}" for i in range(len(parts))],
            dynamic_outputs=True,
        )

    def empty_outputs(self, params: Mapping[str, Any]) -> dict[str, str]:
        return {}

    def evaluate(
        self,
        inputs: Mapping[str, str],
        params: Mapping[str, Any],
        ctx: KindContext,
    ) -> dict[str, str]:
        parts = self._parts(params, inputs.get(DEFAULT_INPUT, ""))
        return {f"{SPLIT_CHANNEL_PREFIX}{i}": part for i, part in enumerate(parts)}


def template_tokens(template: str) -> list[str]:
    """Distinct `%%NAME%%` token names in first-occurrence order."""
    return list(dict.fromkeys(TOKEN_PATTERN.findall(template)))


class Template(BaseKind):
    """Replaces %%TOKEN%% placeholders in a template with values from connected inputs."""

    name = "template"
    label = "Template"

    def resolve_ports(self, params: Mapping[str, Any], sample: Mapping[str, str]) -> PortLayout:
        tokens = template_tokens(sample.get(TEMPLATE_PORT, ""))
        return PortLayout.build(
            [TEMPLATE_PORT, *(f"{TOKEN_PORT_PREFIX}{token}" for token in tokens)],
            [DEFAULT_CHANNEL],
            dynamic_inputs=True,
        )

    def evaluate(
        self,
        inputs: Mapping[str, str],
        params: Mapping[str, Any],
        ctx: KindContext,
    ) -> dict[str, str]:
        template = inputs.get(TEMPLATE_PORT)
        if template is None:
            return {DEFAULT_CHANNEL: ""}

        def substitute(match: re.Match[str]) -> str:
            return inputs.get(f"{TOKEN_PORT_PREFIX}{match.group(1)}", match.group(0))

        return {DEFAULT_CHANNEL: TOKEN_PATTERN.sub(substitute, template)}
