# src/textubes/plugins/hookspecs.py
"""pluggy hook specifications for Textubes node kinds.

Plugins implement these hooks to register node kinds with the registry.

Usage (implementing a plugin):
    from textubes.plugins.hookspecs import hookimpl

    class MyPlugin:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def textubes_get_kinds(self):
            return [MyKind]
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from textubes.plugins.base import BaseKind

PROJECT_NAME = "textubes"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)

hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class TextubesKindSpec:
    """Hook specifications for node kind plugins."""

    @hookspec
    def textubes_get_kinds(self) -> list[type["BaseKind"]]:  # type: ignore[empty-body]
        """Return node kind classes.

        Returns:
            List of BaseKind subclasses (not instances)
        """
