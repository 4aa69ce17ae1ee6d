# src/textubes/plugins/discovery.py
"""Dynamic node kind discovery by folder scanning.

Scans the kinds package for classes that:
1. Inherit from BaseKind
2. Have a non-empty `name` class attribute
3. Are not abstract (no @abstractmethod methods without implementation)
"""

import importlib
import inspect
import logging
from pathlib import Path

from textubes.plugins.base import BaseKind

logger = logging.getLogger(__name__)

# Files that should never be scanned for kinds
EXCLUDED_FILES: frozenset[str] = frozenset(
    {
        "__init__.py",
        "base.py",
        "wordlists.py",
    }
)

KINDS_PACKAGE = "textubes.plugins.kinds"


def discover_kinds_in_directory(directory: Path, package: str = KINDS_PACKAGE) -> list[type[BaseKind]]:
    """Discover kind classes in a package directory.

    Scans all .py files in the directory (non-recursive) and imports each as
    a submodule of `package`.

    Args:
        directory: Path to scan for kind modules
        package: Dotted package name the directory corresponds to

    Returns:
        List of discovered kind classes
    """
    discovered: list[type[BaseKind]] = []

    if not directory.exists():
        logger.warning("Kind directory does not exist: %s", directory)
        return discovered

    for py_file in sorted(directory.glob("*.py")):
        if py_file.name in EXCLUDED_FILES:
            continue

        # Kind modules are system code. Import errors are bugs - let them propagate.
        module = importlib.import_module(f"{package}.{py_file.stem}")
        discovered.extend(_kinds_in_module(module))

    return discovered


def _kinds_in_module(module: object) -> list[type[BaseKind]]:
    module_name = getattr(module, "__name__", "")
    discovered: list[type[BaseKind]] = []
    for name, obj in inspect.getmembers(module, inspect.isclass):
        # Must be defined in this module (not imported)
        if obj.__module__ != module_name:
            continue

        if not issubclass(obj, BaseKind) or obj is BaseKind:
            continue

        if inspect.isabstract(obj):
            continue

        kind_name = getattr(obj, "name", None)
        if not kind_name:
            logger.warning("Class %s in %s inherits from BaseKind but has no/empty 'name' attribute - skipping", name, module_name)
            continue

        discovered.append(obj)

    return discovered


def discover_builtin_kinds() -> list[type[BaseKind]]:
    """Discover all built-in kinds.

    Raises:
        ValueError: If two built-in kinds share a name
    """
    kinds_dir = Path(__file__).parent / "kinds"
    discovered = discover_kinds_in_directory(kinds_dir)

    seen: dict[str, type[BaseKind]] = {}
    for cls in discovered:
        if cls.name in seen:
            raise ValueError(
                f"Duplicate kind name '{cls.name}': found in both {seen[cls.name].__module__} and {cls.__module__}. Kind names must be unique."
            )
        seen[cls.name] = cls
    return discovered


def get_kind_description(kind_cls: type) -> str:
    """First non-empty docstring line, or a name-based fallback."""
    if kind_cls.__doc__:
        for line in kind_cls.__doc__.strip().split("\n"):
            cleaned = line.strip()
            if cleaned:
                return cleaned

    name = getattr(kind_cls, "name", kind_cls.__name__)
    return f"{name} kind"


def create_dynamic_hookimpl(kind_classes: list[type[BaseKind]], hook_method_name: str = "textubes_get_kinds") -> object:
    """Create a pluggy hookimpl object that returns the given kind classes.

    Args:
        kind_classes: Kind classes to register
        hook_method_name: Name of the hook method

    Returns:
        Object instance with the decorated hook method
    """
    from typing import Any

    from textubes.plugins.hookspecs import hookimpl

    class DynamicHookImpl:
        """Dynamically generated hook implementer."""

        pass

    def hook_method(self: Any) -> list[type[BaseKind]]:
        return kind_classes

    setattr(DynamicHookImpl, hook_method_name, hookimpl(hook_method))

    return DynamicHookImpl()
