# src/textubes/engine/__init__.py
"""Propagation engine, port resolver, channel addressing and mutation facade.

Public API:
    Orchestrator       - graph mutations with rollback and propagation
    PropagationEngine  - dirty-set fixpoint passes over a GraphStore
    PortResolver       - dynamic port layouts and edge pruning
"""

from textubes.engine.orchestrator import Orchestrator
from textubes.engine.ports import PortResolver, Resolution
from textubes.engine.propagation import (
    DEFAULT_MAX_ITERATIONS,
    REGENERATE_PARAM,
    SEED_PARAM,
    PropagationEngine,
    evaluation_stamp,
)

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "REGENERATE_PARAM",
    "SEED_PARAM",
    "Orchestrator",
    "PortResolver",
    "PropagationEngine",
    "Resolution",
    "evaluation_stamp",
]
