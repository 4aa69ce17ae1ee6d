# src/textubes/plugins/context.py
"""Context passed to every node kind evaluation."""

from __future__ import annotations

import random
from dataclasses import dataclass, field


@dataclass
class KindContext:
    """Per-evaluation context.

    rng is seeded from the node's evaluation stamp, so regenerative kinds get
    reproducible randomness for identical inputs/params/seed. Deterministic
    kinds should not touch it.
    """

    node_id: str
    rng: random.Random = field(default_factory=lambda: random.Random(0))
