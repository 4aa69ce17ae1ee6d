# tests/unit/plugins/test_discovery.py
"""Tests for dynamic node kind discovery."""

from pathlib import Path

import pytest

from textubes.plugins.base import BaseKind, TextTransform
from textubes.plugins.discovery import (
    EXCLUDED_FILES,
    create_dynamic_hookimpl,
    discover_builtin_kinds,
    discover_kinds_in_directory,
    get_kind_description,
)

KINDS_DIR = Path(__file__).parent.parent.parent.parent / "src" / "textubes" / "plugins" / "kinds"

BUILTIN_NAMES = {
    "box",
    "capslock",
    "concatenate",
    "copypasta",
    "help",
    "random",
    "randomnoun",
    "randomselection",
    "repeat",
    "replace",
    "result",
    "reverse",
    "rot13",
    "shuffle",
    "source",
    "split",
    "template",
    "trimpad",
    "unicode",
    "wraptext",
    "zalgo",
}


class TestDiscoverKinds:
    """Test kind discovery from the kinds package."""

    def test_discovers_every_builtin_kind(self) -> None:
        names = {cls.name for cls in discover_builtin_kinds()}
        assert names == BUILTIN_NAMES

    def test_directory_scan_matches_builtin_discovery(self) -> None:
        scanned = {cls.name for cls in discover_kinds_in_directory(KINDS_DIR)}
        assert scanned == BUILTIN_NAMES

    def test_skips_abstract_intermediate_classes(self) -> None:
        """SourceKind/TextTransform are imported into kind modules but never discovered."""
        for cls in discover_builtin_kinds():
            assert issubclass(cls, BaseKind)
            assert cls.__module__.startswith("textubes.plugins.kinds.")

    def test_word_list_module_not_scanned(self) -> None:
        assert "wordlists.py" in EXCLUDED_FILES

    def test_missing_directory_returns_empty(self, tmp_path: Path) -> None:
        assert discover_kinds_in_directory(tmp_path / "nope") == []


class TestKindDescription:
    def test_first_docstring_line(self) -> None:
        class Documented(TextTransform):
            """Shouts the text.

            More detail here.
            """

            name = "documented"

            def transform(self, text, params, ctx):  # type: ignore[no-untyped-def]
                return text

        assert get_kind_description(Documented) == "Shouts the text."

    def test_fallback_uses_name(self) -> None:
        class Bare(TextTransform):
            name = "bare"

            def transform(self, text, params, ctx):  # type: ignore[no-untyped-def]
                return text

        assert get_kind_description(Bare) == "bare kind"


class TestDynamicHookimpl:
    def test_hook_returns_given_classes(self) -> None:
        classes = discover_builtin_kinds()[:2]
        impl = create_dynamic_hookimpl(classes)
        assert impl.textubes_get_kinds() == classes  # type: ignore[attr-defined]

    @pytest.mark.parametrize("method", ["textubes_get_kinds", "custom_hook"])
    def test_hook_method_name(self, method: str) -> None:
        impl = create_dynamic_hookimpl([], hook_method_name=method)
        assert hasattr(impl, method)
