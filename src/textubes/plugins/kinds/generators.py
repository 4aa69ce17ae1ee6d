# src/textubes/plugins/kinds/generators.py
"""Regenerative kinds.

Every random choice is drawn from ctx.rng, which the engine seeds from the
node's private seed, regenerate token, params and inputs. Output therefore
only changes when one of those changes, never on a plain re-render.
"""

import random
import re
import string
from typing import Literal

from pydantic import Field

from textubes.contracts import Determinism, KindCategory
from textubes.plugins.base import SourceKind, TextTransform
from textubes.plugins.config_base import KindParams
from textubes.plugins.context import KindContext
from textubes.plugins.kinds.wordlists import NOUNS

RANDOM_ALPHABET = string.ascii_letters + string.digits

Granularity = Literal["character", "word", "line"]

ZALGO_UP: tuple[str, ...] = tuple(
    "\u030d\u030e\u0304\u0305\u033f\u0311\u0306\u0310\u0352\u0357"
    "\u0351\u0307\u0308\u030a\u0342\u0343\u0344\u034a\u034b\u034c"
    "\u0303\u0302\u030c\u0350\u0300\u0301\u030b\u030f\u0312\u0313"
    "\u0314\u033d\u0309\u0363\u0364\u0365\u0366\u0367\u0368\u0369"
    "\u036a\u036b\u036c\u036d\u036e\u036f\u033e\u035b\u0346\u031a"
)

ZALGO_DOWN: tuple[str, ...] = tuple(
    "\u0316\u0317\u0318\u0319\u031c\u031d\u031e\u031f\u0320\u0324"
    "\u0325\u0326\u0329\u032a\u032b\u032c\u032d\u032e\u032f\u0330"
    "\u0331\u0332\u0333\u0339\u033a\u033b\u033c\u0345\u0347\u0348"
    "\u0349\u034d\u034e\u0353\u0354\u0355\u0356\u0359\u035a\u0323"
)

ZALGO_MID: tuple[str, ...] = tuple(
    "\u0315\u031b\u0340\u0341\u0358\u0321\u0322\u0327\u0328\u0334"
    "\u0335\u0336\u034f\u035c\u035d\u035e\u035f\u0360\u0362\u0338"
    "\u0337\u0361\u0489"
)

ZALGO_MARKS = frozenset(ZALGO_UP + ZALGO_DOWN + ZALGO_MID)


class RandomTextParams(KindParams):
    length: int = Field(default=10, ge=0)


class RandomText(SourceKind):
    """Generates a random alphanumeric string of a given length."""

    name = "random"
    label = "Random"
    determinism = Determinism.REGENERATIVE
    params_model = RandomTextParams

    def generate(self, params: RandomTextParams, ctx: KindContext) -> str:
        return "".join(ctx.rng.choice(RANDOM_ALPHABET) for _ in range(params.length))


class RandomNoun(SourceKind):
    """Picks a random noun from a bundled word list."""

    name = "randomnoun"
    label = "Random Noun"
    determinism = Determinism.REGENERATIVE

    def generate(self, params: KindParams, ctx: KindContext) -> str:
        return ctx.rng.choice(NOUNS)


class GranularityParams(KindParams):
    mode: Granularity = "character"


def shuffle_text(text: str, mode: str, rng: random.Random) -> str:
    if mode == "word":
        # Whitespace runs are shuffled along with the words
        pieces = re.split(r"(\s+)", text)
        rng.shuffle(pieces)
        return "".join(pieces)
    if mode == "line":
        lines = text.split("\n")
        rng.shuffle(lines)
        return "\n".join(lines)
    chars = list(text)
    rng.shuffle(chars)
    return "".join(chars)


class Shuffle(TextTransform):
    """Randomly shuffles the characters, words, or lines of the input."""

    name = "shuffle"
    label = "Shuffle"
    determinism = Determinism.REGENERATIVE
    params_model = GranularityParams

    def transform(self, text: str, params: GranularityParams, ctx: KindContext) -> str:
        return shuffle_text(text, params.mode, ctx.rng)


class RandomSelectionParams(KindParams):
    mode: Granularity = "word"


def select_random(text: str, mode: str, rng: random.Random) -> str:
    if mode == "character":
        candidates = list(text)
    elif mode == "line":
        candidates = [line for line in text.split("\n") if line]
    else:
        candidates = text.split()
    if not candidates:
        return ""
    return rng.choice(candidates)


class RandomSelection(TextTransform):
    """Picks a single random character, word, or line from the input."""

    name = "randomselection"
    label = "Random Selection"
    determinism = Determinism.REGENERATIVE
    params_model = RandomSelectionParams

    def transform(self, text: str, params: RandomSelectionParams, ctx: KindContext) -> str:
        return select_random(text, params.mode, ctx.rng)


class ZalgoParams(KindParams):
    intensity: int = Field(default=3, ge=1, le=10)


def zalgoify(text: str, intensity: int, rng: random.Random) -> str:
    """Follow each character with 1..intensity combining marks."""
    out: list[str] = []
    for char in text:
        out.append(char)
        for _ in range(rng.randint(1, intensity)):
            roll = rng.random()
            if roll < 0.4:
                marks = ZALGO_UP
            elif roll < 0.8:
                marks = ZALGO_DOWN
            else:
                marks = ZALGO_MID
            out.append(rng.choice(marks))
    return "".join(out)


class Zalgo(TextTransform):
    """Adds chaotic combining diacritical marks to create glitchy text."""

    name = "zalgo"
    label = "Zalgo"
    category = KindCategory.TRANSFORMER
    determinism = Determinism.REGENERATIVE
    params_model = ZalgoParams

    def transform(self, text: str, params: ZalgoParams, ctx: KindContext) -> str:
        return zalgoify(text, params.intensity, ctx.rng)
