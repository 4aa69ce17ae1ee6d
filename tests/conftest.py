# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from textubes.core.config import RandomSettings, TextubesSettings
from textubes.engine import Orchestrator
from textubes.plugins.manager import TransformRegistry, get_default_registry
from tests.helpers.kinds import TEST_KINDS, CountingUpper

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def registry() -> TransformRegistry:
    """The process-wide built-in registry (frozen)."""
    return get_default_registry()

@pytest.fixture
def test_registry() -> TransformRegistry:
    """Fresh registry with built-in kinds plus the test kinds."""
    CountingUpper.calls = 0
    reg = TransformRegistry()
    reg.register_builtin_kinds()
    for kind_cls in TEST_KINDS:
        reg.register_kind(kind_cls)
    return reg.freeze()

@pytest.fixture
def seeded_settings() -> TextubesSettings:
    return TextubesSettings(random=RandomSettings(seed=1234))

@pytest.fixture
def graph(registry: TransformRegistry, seeded_settings: TextubesSettings) -> Orchestrator:
    """Empty orchestrator over built-in kinds with reproducible seeds."""
    return Orchestrator(registry=registry, settings=seeded_settings)

@pytest.fixture
def test_graph(test_registry: TransformRegistry, seeded_settings: TextubesSettings) -> Orchestrator:
    """Empty orchestrator that also knows the test kinds."""
    return Orchestrator(registry=test_registry, settings=seeded_settings)
