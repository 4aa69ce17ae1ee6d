# src/textubes/core/canonical.py
"""
Canonical JSON serialization for deterministic hashing.

Evaluation stamps of regenerative nodes are hashes of canonical JSON
(RFC 8785/JCS via the rfc8785 package), so the same seed, token, params and
inputs always produce the same stamp and therefore the same random stream.
"""

from __future__ import annotations

import hashlib
import math
from collections.abc import Mapping
from typing import Any

import rfc8785

CANONICAL_VERSION = "sha256-rfc8785-v1"


def _normalize(obj: Any) -> Any:
    if isinstance(obj, float) and (math.isnan(obj) or math.isinf(obj)):
        raise ValueError(f"Cannot canonicalize non-finite float: {obj}")
    if isinstance(obj, Mapping):
        return {str(k): _normalize(v) for k, v in obj.items()}
    if isinstance(obj, list | tuple):
        return [_normalize(v) for v in obj]
    return obj


def canonical_json(obj: Any) -> str:
    """Produce canonical JSON (no whitespace, sorted keys).

    Raises:
        ValueError: If data contains NaN or Infinity
        TypeError: If data contains types that cannot be serialized
    """
    result: bytes = rfc8785.dumps(_normalize(obj))
    return result.decode("utf-8")


def stable_hash(obj: Any, version: str = CANONICAL_VERSION) -> str:
    """SHA-256 hex digest of the canonical JSON form of obj."""
    canonical = canonical_json(obj)
    return hashlib.sha256(f"{version}:{canonical}".encode()).hexdigest()
