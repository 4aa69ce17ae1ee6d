# tests/unit/plugins/kinds/test_decorate.py
"""Unit tests for box, unicode style and wrap text kinds."""

from __future__ import annotations

import pytest

from textubes.plugins.config_base import ParamsError
from textubes.plugins.context import KindContext
from textubes.plugins.kinds.decorate import Box, UnicodeStyle, WrapText, draw_box, unicode_style, wrap_text


class TestBox:
    def test_simple_box(self) -> None:
        assert draw_box("hi", "simple") == "┌──┐\n│hi│\n└──┘"

    def test_lines_are_padded_to_widest(self) -> None:
        assert draw_box("a\nabc", "double") == "╔═══╗\n║a  ║\n║abc║\n╚═══╝"

    def test_empty_text_draws_nothing(self) -> None:
        assert draw_box("", "bold") == ""

    def test_kind_uses_style_param(self) -> None:
        out = Box().evaluate({"input": "x"}, {"style": "rounded"}, KindContext(node_id="n"))
        assert out == {"value": "╭─╮\n│x│\n╰─╯"}

    def test_unknown_style_rejected(self) -> None:
        with pytest.raises(ParamsError):
            Box().evaluate({"input": "x"}, {"style": "dashed"}, KindContext(node_id="n"))


class TestUnicodeStyle:
    def test_bold_is_default(self) -> None:
        out = UnicodeStyle().evaluate({"input": "Ab1"}, {}, KindContext(node_id="n"))
        assert out == {"value": "\U0001d400\U0001d41b\U0001d7cf"}

    def test_full_pitch_maps_letters_space_and_punctuation(self) -> None:
        assert unicode_style("A b!", "fullPitch") == "Ａ　ｂ！"

    def test_circled_digits(self) -> None:
        assert unicode_style("0 1 9", "circled") == "⓪ ① ⑨"

    def test_script_uses_letterlike_exceptions(self) -> None:
        assert unicode_style("B", "script") == "ℬ"
        assert unicode_style("A", "script") == "\U0001d49c"

    def test_italic_h_exception(self) -> None:
        assert unicode_style("h", "ital") == "ℎ"

    def test_doublestruck_exceptions(self) -> None:
        assert unicode_style("RZ", "doublestruck") == "ℝℤ"

    def test_superscript(self) -> None:
        assert unicode_style("2n", "superscript") == "²ⁿ"

    def test_subscript_only_maps_known_letters(self) -> None:
        assert unicode_style("ab", "subscript") == "ₐb"

    def test_dotbox_inserts_joiner_breakers(self) -> None:
        assert unicode_style("ab", "dotbox") == "\U0001f1e6\u200c\U0001f1e7\u200c"

    def test_non_ascii_is_untouched(self) -> None:
        assert unicode_style("é✓", "monospace") == "é✓"


class TestWrapText:
    def test_short_paragraph_untouched(self) -> None:
        assert wrap_text("short", 10) == "short"

    def test_left_wrap(self) -> None:
        assert wrap_text("the quick brown fox", 10) == "the quick\nbrown fox"

    def test_long_word_gets_own_line(self) -> None:
        assert wrap_text("a supercalifragilistic b", 5) == "a\nsupercalifragilistic\nb"

    def test_right_alignment(self) -> None:
        assert wrap_text("ab cd", 4, "right") == "  ab\n  cd"

    def test_center_alignment(self) -> None:
        assert wrap_text("ab", 6, "center") == "  ab"

    def test_full_justification_spares_last_line(self) -> None:
        assert wrap_text("aa b cc dd", 7, "full") == "aa b cc\ndd"
        assert wrap_text("a b c ddddd", 6, "full") == "a  b c\nddddd"

    def test_existing_newlines_are_paragraphs(self) -> None:
        assert wrap_text("one\ntwo", 80) == "one\ntwo"

    def test_kind_defaults(self) -> None:
        out = WrapText().evaluate({"input": "x " * 50}, {}, KindContext(node_id="n"))
        assert all(len(line) <= 80 for line in out["value"].split("\n"))
