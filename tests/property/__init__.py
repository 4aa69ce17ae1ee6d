# tests/property/__init__.py
"""Property-based tests for Textubes.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- core/: canonical stamps, store rollback
- engine/: propagation invariants, mutation state machine
- plugins/: kind contracts (port resolution purity, split/template rules)
"""
