# src/textubes/plugins/kinds/decorate.py
"""Decorating transforms: box frames, Unicode letter styles, word wrap."""

from __future__ import annotations

import re
import string
from functools import cache
from typing import Literal

from pydantic import Field

from textubes.plugins.base import TextTransform
from textubes.plugins.config_base import KindParams
from textubes.plugins.context import KindContext

# === Box ===

# (top-left, top-right, bottom-left, bottom-right, horizontal, vertical)
BOX_STYLES: dict[str, tuple[str, str, str, str, str, str]] = {
    "simple": ("┌", "┐", "└", "┘", "─", "│"),
    "double": ("╔", "╗", "╚", "╝", "═", "║"),
    "rounded": ("╭", "╮", "╰", "╯", "─", "│"),
    "bold": ("┏", "┓", "┗", "┛", "━", "┃"),
}

BoxStyle = Literal["simple", "double", "rounded", "bold"]


def draw_box(text: str, style: str) -> str:
    """Frame every line of `text`, padding lines to the widest one."""
    if not text:
        return ""
    tl, tr, bl, br, h, v = BOX_STYLES[style]
    lines = text.split("\n")
    width = max(len(line) for line in lines)
    rows = [tl + h * width + tr]
    rows.extend(v + line.ljust(width) + v for line in lines)
    rows.append(bl + h * width + br)
    return "\n".join(rows)


class BoxParams(KindParams):
    style: BoxStyle = "simple"


class Box(TextTransform):
    """Draws a box around the input text using box-drawing characters."""

    name = "box"
    label = "Box"
    params_model = BoxParams

    def transform(self, text: str, params: BoxParams, ctx: KindContext) -> str:
        return draw_box(text, params.style)


# === Unicode styles ===

UnicodeStyleName = Literal[
    "fullPitch",
    "circled",
    "parens",
    "bold",
    "ital",
    "boldital",
    "boldsans",
    "italsans",
    "bolditalsans",
    "script",
    "boldscript",
    "fraktur",
    "doublestruck",
    "monospace",
    "negcircle",
    "negbox",
    "box",
    "dotbox",
    "superscript",
    "subscript",
]

# Starting codepoints of contiguous A-Z / a-z / 0-9 runs per style.
_UPPER_BASE: dict[str, int] = {
    "fullPitch": 0xFF21,
    "circled": 0x24B6,
    "parens": 0x1F110,
    "bold": 0x1D400,
    "ital": 0x1D434,
    "boldital": 0x1D468,
    "boldsans": 0x1D5D4,
    "italsans": 0x1D608,
    "bolditalsans": 0x1D63C,
    "script": 0x1D49C,
    "boldscript": 0x1D4D0,
    "fraktur": 0x1D504,
    "doublestruck": 0x1D538,
    "monospace": 0x1D670,
    "negcircle": 0x1F150,
    "negbox": 0x1F170,
    "box": 0x1F130,
    "dotbox": 0x1F1E6,
}

_LOWER_BASE: dict[str, int] = {
    "fullPitch": 0xFF41,
    "circled": 0x24D0,
    "parens": 0x249C,
    "bold": 0x1D41A,
    "ital": 0x1D44E,
    "boldital": 0x1D482,
    "boldsans": 0x1D5EE,
    "italsans": 0x1D622,
    "bolditalsans": 0x1D656,
    "script": 0x1D4B6,
    "boldscript": 0x1D4EA,
    "fraktur": 0x1D51E,
    "doublestruck": 0x1D552,
    "monospace": 0x1D68A,
    # No lowercase forms; reuse the capitals
    "negcircle": 0x1F150,
    "negbox": 0x1F170,
    "box": 0x1F130,
    "dotbox": 0x1F1E6,
}

_DIGIT_BASE: dict[str, int] = {
    "fullPitch": 0xFF10,
    "bold": 0x1D7CE,
    "boldital": 0x1D7CE,
    "boldsans": 0x1D7EC,
    "bolditalsans": 0x1D7EC,
    "doublestruck": 0x1D7D8,
    "monospace": 0x1D7F6,
    "negbox": 0xFF10,
    "box": 0xFF10,
    "dotbox": 0xFF10,
    "subscript": 0x2080,
}

_SUPERSCRIPT_UPPER = [
    0x1D2C, 0x1D2E, 0x0043, 0x1D30, 0x1D31, 0x0046, 0x1D33, 0x1D34, 0x1D35, 0x1D36, 0x1D37, 0x1D38, 0x1D39,
    0x1D3A, 0x1D3C, 0x1D3E, 0x0051, 0x1D3F, 0x0053, 0x1D40, 0x1D41, 0x2C7D, 0x1D42, 0x0058, 0x0059, 0x005A,
]  # fmt: skip

_SUPERSCRIPT_LOWER = [
    0x1D43, 0x1D47, 0x1D9C, 0x1D48, 0x1D49, 0x1DA0, 0x1D4D, 0x02B0, 0x2071, 0x02B2, 0x1D4F, 0x02E1, 0x1D50,
    0x207F, 0x1D52, 0x1D56, 0x0071, 0x02B3, 0x02E2, 0x1D57, 0x1D58, 0x1D5B, 0x02B7, 0x02E3, 0x02B8, 0x1DBB,
]  # fmt: skip

_SUPERSCRIPT_DIGITS = [0x2070, 0x00B9, 0x00B2, 0x00B3, 0x2074, 0x2075, 0x2076, 0x2077, 0x2078, 0x2079]

_SUBSCRIPT_LOWER = {
    "a": 0x2090, "e": 0x2091, "h": 0x2095, "k": 0x2096, "l": 0x2097, "m": 0x2098, "n": 0x2099,
    "o": 0x2092, "p": 0x209A, "r": 0x1D63, "s": 0x209B, "t": 0x209C, "x": 0x2093,
}  # fmt: skip

# Letters that live in the Letterlike Symbols block instead of the math run
_EXCEPTIONS: dict[str, dict[str, int]] = {
    "ital": {"h": 0x210E},
    "script": {
        "e": 0x212F, "g": 0x210A, "o": 0x2134, "B": 0x212C, "E": 0x2130, "F": 0x2131,
        "H": 0x210B, "I": 0x2110, "L": 0x2112, "M": 0x2133, "R": 0x211B,
    },
    "fraktur": {"C": 0x212D, "H": 0x210C, "I": 0x2111, "R": 0x211C, "Z": 0x2128},
    "doublestruck": {"C": 0x2102, "H": 0x210D, "N": 0x2115, "P": 0x2119, "Q": 0x211A, "R": 0x211D, "Z": 0x2124},
}  # fmt: skip

# Keeps consecutive regional indicators from fusing into flag emoji
_ZWNJ = "\u200c"


@cache
def unicode_table(style: str) -> dict[int, str]:
    """Build the str.translate table for a style."""
    table: dict[int, str] = {}

    for j, char in enumerate(string.ascii_uppercase):
        if style == "superscript":
            table[ord(char)] = chr(_SUPERSCRIPT_UPPER[j])
        elif style in _UPPER_BASE:
            table[ord(char)] = chr(_UPPER_BASE[style] + j)

    for j, char in enumerate(string.ascii_lowercase):
        if style == "superscript":
            table[ord(char)] = chr(_SUPERSCRIPT_LOWER[j])
        elif style == "subscript":
            if char in _SUBSCRIPT_LOWER:
                table[ord(char)] = chr(_SUBSCRIPT_LOWER[char])
        elif style in _LOWER_BASE:
            table[ord(char)] = chr(_LOWER_BASE[style] + j)

    for j, char in enumerate(string.digits):
        if style == "superscript":
            table[ord(char)] = chr(_SUPERSCRIPT_DIGITS[j])
        elif style == "circled":
            table[ord(char)] = chr(0x24EA) if j == 0 else chr(0x2460 + j - 1)
        elif style == "negcircle":
            table[ord(char)] = chr(0x24FF) if j == 0 else chr(0x2776 + j - 1)
        elif style == "parens":
            if j > 0:
                table[ord(char)] = chr(0x2474 + j - 1)
        elif style in _DIGIT_BASE:
            table[ord(char)] = chr(_DIGIT_BASE[style] + j)

    for char, codepoint in _EXCEPTIONS.get(style, {}).items():
        table[ord(char)] = chr(codepoint)

    if style == "dotbox":
        table = {key: value + _ZWNJ if chr(key).isalpha() else value for key, value in table.items()}

    if style == "fullPitch":
        table[ord(" ")] = chr(0x3000)
        for char in string.punctuation:
            table[ord(char)] = chr(ord(char) + 0xFEE0)

    return table


def unicode_style(text: str, style: str) -> str:
    return text.translate(unicode_table(style))


class UnicodeStyleParams(KindParams):
    style: UnicodeStyleName = "bold"


class UnicodeStyle(TextTransform):
    """Transforms text using Unicode character variants (bold, italic, script, etc.)."""

    name = "unicode"
    label = "Unicode Style"
    params_model = UnicodeStyleParams

    def transform(self, text: str, params: UnicodeStyleParams, ctx: KindContext) -> str:
        return unicode_style(text, params.style)


# === Wrap text ===

Alignment = Literal["left", "right", "center", "full"]

_WHITESPACE_RUN = re.compile(r"(\s+)")


def _align(line: str, width: int, alignment: str, is_last: bool) -> str:
    line = line.rstrip()
    if alignment == "left" or len(line) >= width:
        return line

    if alignment == "full":
        if is_last:
            return line
        words = line.split()
        if len(words) <= 1:
            return line
        gaps = len(words) - 1
        per_gap, extra = divmod(width - sum(len(w) for w in words), gaps)
        out = ""
        for i, word in enumerate(words[:-1]):
            out += word + " " * (per_gap + (1 if i < extra else 0))
        return out + words[-1]

    padding = width - len(line)
    if alignment == "right":
        return " " * padding + line
    # center
    return " " * (padding // 2) + line


def _wrap_paragraph(paragraph: str, width: int, alignment: str) -> str:
    if len(paragraph) <= width:
        return _align(paragraph, width, alignment, True)

    lines: list[str] = []
    current = ""
    for piece in _WHITESPACE_RUN.split(paragraph):
        candidate = current + piece
        if len(candidate) <= width:
            current = candidate
        elif current:
            lines.append(current.rstrip())
            current = piece.lstrip()
        else:
            # A single word longer than the width stays on its own line
            lines.append(piece)
            current = ""
    if current:
        lines.append(current.rstrip())

    return "\n".join(_align(line, width, alignment, i == len(lines) - 1) for i, line in enumerate(lines))


def wrap_text(text: str, width: int, alignment: str = "left") -> str:
    """Greedy word wrap of each paragraph, then align each line to `width`."""
    if width <= 0:
        return text
    return "\n".join(_wrap_paragraph(p, width, alignment) for p in text.split("\n"))


class WrapTextParams(KindParams):
    length: int = Field(default=80, ge=1)
    alignment: Alignment = "left"


class WrapText(TextTransform):
    """Wraps text at a maximum line length and aligns it."""

    name = "wraptext"
    label = "Wrap Text"
    params_model = WrapTextParams

    def transform(self, text: str, params: WrapTextParams, ctx: KindContext) -> str:
        return wrap_text(text, params.length, params.alignment)
