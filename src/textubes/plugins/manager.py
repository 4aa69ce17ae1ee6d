# src/textubes/plugins/manager.py
"""Transform registry: node kind discovery, registration, and lookup.

Uses pluggy for hook-based registration. The registry is populated once at
startup and then frozen; it holds one stateless instance per kind and no
per-node data, so a single registry is shared by every graph.
"""

from __future__ import annotations

from dataclasses import dataclass

import pluggy

from textubes.contracts import Determinism, KindCategory
from textubes.plugins.base import BaseKind
from textubes.plugins.hookspecs import PROJECT_NAME, TextubesKindSpec


@dataclass(frozen=True)
class KindSpec:
    """Catalog record for a registered kind."""

    name: str
    label: str
    category: KindCategory
    determinism: Determinism
    version: str
    description: str

    @classmethod
    def from_kind(cls, kind_cls: type[BaseKind]) -> KindSpec:
        from textubes.plugins.discovery import get_kind_description

        return cls(
            name=kind_cls.name,
            label=kind_cls.label or kind_cls.name,
            category=kind_cls.category,
            determinism=kind_cls.determinism,
            version=kind_cls.plugin_version,
            description=get_kind_description(kind_cls),
        )


class TransformRegistry:
    """Maps kind name to its shared contract instance.

    Usage:
        registry = TransformRegistry()
        registry.register_builtin_kinds()
        registry.freeze()

        kind = registry.get("capslock")  # None if unknown
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(TextubesKindSpec)
        self._kinds: dict[str, BaseKind] = {}
        self._frozen = False

    def register_builtin_kinds(self) -> None:
        """Discover and register every kind in textubes/plugins/kinds."""
        from textubes.plugins.discovery import create_dynamic_hookimpl, discover_builtin_kinds

        self.register(create_dynamic_hookimpl(discover_builtin_kinds()))

    def register(self, plugin: object) -> None:
        """Register a pluggy plugin implementing textubes_get_kinds.

        Raises:
            RuntimeError: If the registry is frozen
            ValueError: If a kind name is registered twice
        """
        self._check_mutable()
        self._pm.register(plugin)
        try:
            self._refresh_cache()
        except ValueError:
            self._pm.unregister(plugin)
            raise

    def register_kind(self, kind_cls: type[BaseKind]) -> None:
        """Register a single kind class directly."""
        from textubes.plugins.discovery import create_dynamic_hookimpl

        self.register(create_dynamic_hookimpl([kind_cls]))

    def _refresh_cache(self) -> None:
        new_kinds: dict[str, BaseKind] = {}
        for kind_classes in self._pm.hook.textubes_get_kinds():
            for cls in kind_classes:
                name = cls.name
                if not name or not name.strip():
                    raise ValueError(f"Kind class {cls.__name__} has an empty name")
                if name in new_kinds:
                    raise ValueError(f"Duplicate kind name: '{name}'. Already registered by {type(new_kinds[name]).__name__}")
                # Reuse existing instances so identity is stable across refreshes
                existing = self._kinds.get(name)
                new_kinds[name] = existing if type(existing) is cls else cls()

        self._kinds = new_kinds

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("TransformRegistry is frozen; register kinds before first use")

    def freeze(self) -> TransformRegistry:
        """Make the registry immutable."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # === Lookup ===

    def get(self, name: str) -> BaseKind | None:
        """Get a kind contract by name (None if never registered)."""
        return self._kinds.get(name)

    def names(self) -> list[str]:
        return sorted(self._kinds)

    def specs(self, category: KindCategory | None = None) -> list[KindSpec]:
        """Catalog entries, optionally filtered by category, sorted by name."""
        return [
            KindSpec.from_kind(type(kind))
            for name, kind in sorted(self._kinds.items())
            if category is None or kind.category == category
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._kinds

    def __len__(self) -> int:
        return len(self._kinds)


_default_registry: TransformRegistry | None = None


def get_default_registry() -> TransformRegistry:
    """Process-wide registry with all built-in kinds (built once, frozen)."""
    global _default_registry

    if _default_registry is None:
        registry = TransformRegistry()
        registry.register_builtin_kinds()
        _default_registry = registry.freeze()
    return _default_registry
