# tests/property/settings.py
"""Standardized Hypothesis settings profiles for property tests.

Provides consistent test intensity across all property test modules.
Import these instead of using inline @settings(max_examples=...).

Usage:
    from tests.property.settings import STANDARD_SETTINGS

    @given(text=st.text())
    @STANDARD_SETTINGS
    def test_something(text):
        ...

Tiers:
- DETERMINISM_SETTINGS: 500 examples - stamp/canonical hashing and seeded randomness
- STATE_MACHINE_SETTINGS: 200 examples - Stateful tests (sufficient state exploration)
- STANDARD_SETTINGS: 100 examples - Regular property tests
- QUICK_SETTINGS: 20 examples - Fast validation tests (enums, simple rejection)
"""

from hypothesis import HealthCheck, settings

# Regenerative output must be a pure function of the evaluation stamp
DETERMINISM_SETTINGS = settings(max_examples=500)

# Stateful tests need enough steps to explore state space
STATE_MACHINE_SETTINGS = settings(
    max_examples=200,
    stateful_step_count=30,
    suppress_health_check=[HealthCheck.too_slow],
)

# Standard property tests - good balance of coverage and speed
STANDARD_SETTINGS = settings(max_examples=100)

# Quick validation tests - simple input rejection, enum validation
QUICK_SETTINGS = settings(max_examples=20)
