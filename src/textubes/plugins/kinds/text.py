# src/textubes/plugins/kinds/text.py
"""Single-input deterministic text transforms."""

from typing import Literal

from pydantic import Field, field_validator

from textubes.plugins.base import TextTransform
from textubes.plugins.config_base import KindParams
from textubes.plugins.context import KindContext


class Capslock(TextTransform):
    """Converts all input text to uppercase letters."""

    name = "capslock"
    label = "Capslock"

    def transform(self, text: str, params: KindParams, ctx: KindContext) -> str:
        return text.upper()


class Reverse(TextTransform):
    """Reverses the order of characters in the input text."""

    name = "reverse"
    label = "Reverse"

    def transform(self, text: str, params: KindParams, ctx: KindContext) -> str:
        return text[::-1]


class ReplaceParams(KindParams):
    search_text: str = ""
    replace_text: str = ""


class Replace(TextTransform):
    """Finds all occurrences of a search string and replaces them with new text."""

    name = "replace"
    label = "Replace"
    params_model = ReplaceParams

    def transform(self, text: str, params: ReplaceParams, ctx: KindContext) -> str:
        if not params.search_text:
            return text
        return text.replace(params.search_text, params.replace_text)


class Rot13Params(KindParams):
    shift: int = Field(default=13, ge=0, le=25)


def caesar_shift(text: str, shift: int) -> str:
    """Rotate ASCII letters by `shift`; everything else is left alone."""
    out: list[str] = []
    for char in text:
        if "A" <= char <= "Z":
            out.append(chr((ord(char) - 65 + shift) % 26 + 65))
        elif "a" <= char <= "z":
            out.append(chr((ord(char) - 97 + shift) % 26 + 97))
        else:
            out.append(char)
    return "".join(out)


class Rot13(TextTransform):
    """Rotates letters by a fixed number of positions (Caesar cipher)."""

    name = "rot13"
    label = "ROT13 / Caesar Cipher"
    params_model = Rot13Params

    def transform(self, text: str, params: Rot13Params, ctx: KindContext) -> str:
        return caesar_shift(text, params.shift)


class TrimPadParams(KindParams):
    mode: Literal["trim", "padStart", "padEnd"] = "trim"
    pad_length: int = Field(default=10, ge=0)
    pad_char: str = " "

    @field_validator("pad_char")
    @classmethod
    def single_char(cls, v: str) -> str:
        # Only the first character is used; empty falls back to a space
        return v[:1] or " "


class TrimPad(TextTransform):
    """Trims whitespace from text or pads it to a specified length."""

    name = "trimpad"
    label = "Trim/Pad"
    params_model = TrimPadParams

    def transform(self, text: str, params: TrimPadParams, ctx: KindContext) -> str:
        if params.mode == "padStart":
            return text.rjust(params.pad_length, params.pad_char)
        if params.mode == "padEnd":
            return text.ljust(params.pad_length, params.pad_char)
        return text.strip()


class RepeatParams(KindParams):
    count: int = Field(default=3, ge=0)
    separator: str = ""


class Repeat(TextTransform):
    """Repeats the input text a specified number of times with an optional separator."""

    name = "repeat"
    label = "Repeat"
    params_model = RepeatParams

    def transform(self, text: str, params: RepeatParams, ctx: KindContext) -> str:
        return params.separator.join([text] * params.count)
