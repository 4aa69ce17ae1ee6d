# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Strategy Categories:
- Text payloads (short, word-like, multi-line)
- Params (JSON-safe, RFC 8785 compatible)
- Node kinds (names drawn from the built-in registry)

Usage:
    from tests.property.conftest import short_text, words

    @given(text=short_text)
    def test_transform_is_pure(text: str) -> None:
        ...
"""

# =============================================================================
# Hypothesis Settings
# =============================================================================
#
# For standardized @settings decorators, import from tests.property.settings:
#   from tests.property.settings import STANDARD_SETTINGS, DETERMINISM_SETTINGS
#
# Tiers: DETERMINISM (500), STATE_MACHINE (200), STANDARD (100), QUICK (20)
# =============================================================================

from __future__ import annotations

from hypothesis import strategies as st

from textubes.contracts import Determinism
from textubes.plugins.manager import get_default_registry

# RFC 8785 (JCS) uses JavaScript-safe integers
MAX_SAFE_INT = 2**53 - 1
MIN_SAFE_INT = -(2**53 - 1)

# =============================================================================
# Text Strategies
# =============================================================================

# Printable text without surrogates; kept short so chained graphs stay small
short_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    max_size=12,
)

# A single word: letters only, never empty
word = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=8)

# Space-separated words
words = st.lists(word, min_size=1, max_size=10)

# Multi-line text built from short lines
lines = st.lists(st.text(alphabet="abc xyz", max_size=6), min_size=1, max_size=6).map("\n".join)

# Template token names (anything but "%", non-empty)
token_name = st.text(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ_", min_size=1, max_size=6)

# =============================================================================
# Params Strategies
# =============================================================================

json_primitives = (
    st.none()
    | st.booleans()
    | st.integers(min_value=MIN_SAFE_INT, max_value=MAX_SAFE_INT)
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(max_size=10)
)

json_params = st.dictionaries(st.text(min_size=1, max_size=8), json_primitives, max_size=5)

seeds = st.integers(min_value=0, max_value=2**32 - 1)

# =============================================================================
# Kind Strategies
# =============================================================================

_REGISTRY = get_default_registry()

deterministic_kinds = st.sampled_from(
    [spec.name for spec in _REGISTRY.specs() if spec.determinism == Determinism.DETERMINISTIC]
)

regenerative_kinds = st.sampled_from(
    [spec.name for spec in _REGISTRY.specs() if spec.determinism == Determinism.REGENERATIVE]
)
