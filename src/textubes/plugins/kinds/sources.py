# src/textubes/plugins/kinds/sources.py
"""Deterministic source kinds: typed text, help text, and preset copypastas."""

from typing import Literal

from pydantic import Field

from textubes.plugins.base import SourceKind
from textubes.plugins.config_base import KindParams
from textubes.plugins.context import KindContext

HELP_TEXT = """Welcome to Textubes!

In Textubes, you connect boxes to each other to make text into different text.

There are three kinds of boxes:

- Text Sources
- Text Transformers
- Text Destinations

Text STARTS in Sources, goes THROUGH Transformers, and FINISHES in Destinations.

An output can connect to multiple inputs, but an input can only connect to one output.
Connecting a different output to an input replaces the old connection.
"""

COPYPASTAS: dict[str, str] = {
    "lorem": (
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor incididunt ut labore et dolore "
        "magna aliqua. Ut enim ad minim veniam, quis nostrud exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat."
    ),
    "bee_movie": (
        "According to all known laws of aviation, there is no way a bee should be able to fly. Its wings are too small "
        "to get its fat little body off the ground. The bee, of course, flies anyway because bees don't care what humans think is impossible."
    ),
    "lorem_short": "The quick brown fox jumps over the lazy dog. Pack my box with five dozen liquor jugs. How vexingly quick daft zebras jump!",
    "sample": (
        "This is sample text for testing your text transformation pipeline. It contains multiple sentences. Some are short. "
        "Others are a bit longer and more complex. You can use this to test various transformations and see how they work together."
    ),
}


class SourceTextParams(KindParams):
    value: str = ""


class SourceText(SourceKind):
    """A text input where you type or paste text manually."""

    name = "source"
    label = "Text"
    params_model = SourceTextParams

    def generate(self, params: SourceTextParams, ctx: KindContext) -> str:
        return params.value


class HelpText(SourceKind):
    """Outputs helpful information about Textubes."""

    name = "help"
    label = "Help"

    def generate(self, params: KindParams, ctx: KindContext) -> str:
        return HELP_TEXT


class CopypastaParams(KindParams):
    selected: Literal["lorem", "bee_movie", "lorem_short", "sample"] = Field(default="lorem")


class Copypasta(SourceKind):
    """Choose from a collection of classic copypastas and sample text."""

    name = "copypasta"
    label = "Copypasta"
    params_model = CopypastaParams

    def generate(self, params: CopypastaParams, ctx: KindContext) -> str:
        return COPYPASTAS[params.selected]
