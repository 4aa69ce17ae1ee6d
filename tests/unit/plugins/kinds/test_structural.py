# tests/unit/plugins/kinds/test_structural.py
"""Unit tests for kinds with dynamic port layouts."""

from __future__ import annotations

from textubes.plugins.context import KindContext
from textubes.plugins.kinds.structural import (
    Concatenate,
    Split,
    Template,
    indexed_port,
    join_port_count,
    split_parts,
    template_tokens,
)

CTX = KindContext(node_id="n")


class TestConcatenatePorts:
    def test_two_ports_when_nothing_connected(self) -> None:
        layout = Concatenate().resolve_ports({}, {})
        assert layout.input_names == ("input-0", "input-1")
        assert all(p.is_dynamic for p in layout.inputs)

    def test_always_one_open_port(self) -> None:
        sample = {"input-0": "a", "input-1": "b"}
        assert Concatenate().resolve_ports({}, sample).input_names == ("input-0", "input-1", "input-2")

    def test_gap_keeps_highest_port(self) -> None:
        """Disconnecting a middle port keeps ports up to the highest connected one."""
        assert join_port_count({"input-0": "a", "input-3": "b"}) == 4

    def test_never_below_two(self) -> None:
        assert join_port_count({"input-0": "a"}) == 2

    def test_indexed_port_parsing(self) -> None:
        assert indexed_port("input-12", "input-") == 12
        assert indexed_port("input-x", "input-") is None
        assert indexed_port("template", "input-") is None


class TestConcatenateEvaluate:
    def test_joins_in_port_order(self) -> None:
        out = Concatenate().evaluate({"input-2": "c", "input-0": "a", "input-10": "z"}, {"separator": "+"}, CTX)
        assert out == {"value": "a+c+z"}

    def test_default_separator_is_empty(self) -> None:
        assert Concatenate().evaluate({"input-0": "a", "input-1": "b"}, {}, CTX) == {"value": "ab"}


class TestSplit:
    def test_line_mode_channels(self) -> None:
        layout = Split().resolve_ports({}, {"input": "a\nb\nc"})
        assert layout.output_names == ("output-0", "output-1", "output-2")
        assert layout.input_names == ("input",)

    def test_evaluate_matches_channels(self) -> None:
        out = Split().evaluate({"input": "a,b"}, {"mode": "delimiter", "delimiter": ","}, CTX)
        assert out == {"output-0": "a", "output-1": "b"}

    def test_character_mode(self) -> None:
        assert split_parts("abc", "character", ",") == ["a", "b", "c"]

    def test_empty_delimiter_splits_characters(self) -> None:
        assert split_parts("ab", "delimiter", "") == ["a", "b"]

    def test_empty_input_has_no_channels(self) -> None:
        assert Split().resolve_ports({}, {"input": ""}).outputs == ()
        assert Split().evaluate({"input": ""}, {}, CTX) == {}

    def test_empty_outputs_have_no_channels(self) -> None:
        assert Split().empty_outputs({}) == {}

    def test_trailing_delimiter_yields_empty_part(self) -> None:
        assert split_parts("a,", "delimiter", ",") == ["a", ""]


class TestTemplate:
    def test_tokens_first_occurrence_order(self) -> None:
        assert template_tokens("%%B%% %%A%% %%B%%") == ["B", "A"]

    def test_single_percent_is_not_a_token(self) -> None:
        assert template_tokens("100% %%%%") == []

    def test_ports_follow_template_text(self) -> None:
        layout = Template().resolve_ports({}, {"template": "Hi %%NAME%%, from %%PLACE%%"})
        assert layout.input_names == ("template", "token-NAME", "token-PLACE")

    def test_no_template_only_template_port(self) -> None:
        assert Template().resolve_ports({}, {}).input_names == ("template",)

    def test_substitutes_connected_tokens(self) -> None:
        out = Template().evaluate({"template": "Hi %%NAME%%!", "token-NAME": "Ada"}, {}, CTX)
        assert out == {"value": "Hi Ada!"}

    def test_unconnected_tokens_left_verbatim(self) -> None:
        out = Template().evaluate({"template": "%%A%% and %%B%%", "token-A": "1"}, {}, CTX)
        assert out == {"value": "1 and %%B%%"}

    def test_repeated_token_replaced_everywhere(self) -> None:
        out = Template().evaluate({"template": "%%X%%-%%X%%", "token-X": "o"}, {}, CTX)
        assert out == {"value": "o-o"}

    def test_missing_template_is_empty(self) -> None:
        assert Template().evaluate({"token-A": "1"}, {}, CTX) == {"value": ""}
