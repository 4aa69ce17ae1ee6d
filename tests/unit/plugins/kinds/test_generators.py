# tests/unit/plugins/kinds/test_generators.py
"""Unit tests for regenerative kinds.

All randomness comes from ctx.rng, so a seeded rng makes output reproducible.
"""

from __future__ import annotations

import random

from textubes.contracts import Determinism
from textubes.plugins.context import KindContext
from textubes.plugins.kinds.generators import (
    RANDOM_ALPHABET,
    ZALGO_MARKS,
    RandomNoun,
    RandomSelection,
    RandomText,
    Shuffle,
    Zalgo,
    select_random,
    shuffle_text,
    zalgoify,
)
from textubes.plugins.kinds.wordlists import NOUNS


def seeded(seed: int = 7) -> KindContext:
    return KindContext(node_id="n", rng=random.Random(seed))


class TestDeterminismFlags:
    def test_all_generators_are_regenerative(self) -> None:
        for kind_cls in (RandomText, RandomNoun, Shuffle, RandomSelection, Zalgo):
            assert kind_cls.determinism == Determinism.REGENERATIVE
            assert kind_cls().is_regenerative


class TestRandomText:
    def test_length_and_alphabet(self) -> None:
        value = RandomText().evaluate({}, {"length": 25}, seeded())["value"]
        assert len(value) == 25
        assert set(value) <= set(RANDOM_ALPHABET)

    def test_default_length(self) -> None:
        assert len(RandomText().evaluate({}, {}, seeded())["value"]) == 10

    def test_same_seed_same_output(self) -> None:
        kind = RandomText()
        assert kind.evaluate({}, {}, seeded(3)) == kind.evaluate({}, {}, seeded(3))


class TestRandomNoun:
    def test_picks_from_word_list(self) -> None:
        assert RandomNoun().evaluate({}, {}, seeded())["value"] in NOUNS


class TestShuffle:
    def test_character_shuffle_is_permutation(self) -> None:
        out = shuffle_text("hello world", "character", random.Random(1))
        assert sorted(out) == sorted("hello world")

    def test_line_shuffle_keeps_lines(self) -> None:
        out = shuffle_text("a\nb\nc", "line", random.Random(2))
        assert sorted(out.split("\n")) == ["a", "b", "c"]

    def test_word_shuffle_keeps_words(self) -> None:
        out = shuffle_text("one two three", "word", random.Random(3))
        assert sorted(out.split()) == ["one", "three", "two"]


class TestRandomSelection:
    def test_word_mode(self) -> None:
        assert select_random("alpha beta gamma", "word", random.Random(0)) in {"alpha", "beta", "gamma"}

    def test_line_mode_skips_blank_lines(self) -> None:
        for seed in range(20):
            assert select_random("x\n\ny", "line", random.Random(seed)) in {"x", "y"}

    def test_character_mode(self) -> None:
        assert select_random("q", "character", random.Random(0)) == "q"

    def test_empty_input(self) -> None:
        assert select_random("   ", "word", random.Random(0)) == ""


class TestZalgo:
    def test_marks_follow_each_character(self) -> None:
        out = zalgoify("ab", 3, random.Random(5))
        base = [c for c in out if c not in ZALGO_MARKS]
        assert base == ["a", "b"]
        assert 2 <= len(out) - 2 <= 6

    def test_intensity_one_adds_exactly_one_mark(self) -> None:
        out = Zalgo().evaluate({"input": "abc"}, {"intensity": 1}, seeded())["value"]
        assert len(out) == 6
