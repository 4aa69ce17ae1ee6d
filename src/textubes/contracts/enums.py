"""All categories, modes, and kinds used across subsystem boundaries.

CRITICAL: Every node kind MUST declare a Determinism value at registration.
Regenerative kinds are only refreshed on an explicit regenerate signal or a
change to their own inputs/params, never as a side effect of an unrelated pass.
"""

from enum import StrEnum


class Determinism(StrEnum):
    """Node kind determinism classification.

    - DETERMINISTIC: output is a pure function of current inputs + params.
    - REGENERATIVE: output also depends on a seed that is only redrawn at
      creation time or on an explicit regenerate signal.
    """

    DETERMINISTIC = "deterministic"
    REGENERATIVE = "regenerative"


class KindCategory(StrEnum):
    """Where a kind sits in a flow (used by the catalog/picker)."""

    SOURCE = "source"
    TRANSFORMER = "transformer"
    DESTINATION = "destination"


class PortDirection(StrEnum):
    """Direction of a resolved port."""

    INPUT = "input"
    OUTPUT = "output"


class ErrorCategory(StrEnum):
    """Non-fatal per-node error categories recorded in a propagation report."""

    UNKNOWN_KIND = "unknown_kind"
