# src/textubes/plugins/config_base.py
"""Base class for typed node kind params.

Kinds declare a KindParams subclass whose field defaults are the kind's
default params. The engine parses params leniently (unknown keys such as UI
flags are dropped); user edits are parsed strictly.

Example usage:
    class RepeatParams(KindParams):
        count: int = Field(default=3, ge=0)

    cfg = RepeatParams.from_params(node.params)
    cfg.count
"""

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ValidationError

ENGINE_PRIVATE_PREFIX = "_"


class ParamsError(ValueError):
    """Raised when node params fail validation."""

    pass


def public_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Strip engine-private keys (regenerate token, seed) from params."""
    return {key: value for key, value in params.items() if not key.startswith(ENGINE_PRIVATE_PREFIX)}


class KindParams(BaseModel):
    """Base class for typed node params."""

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def from_params(cls, params: Mapping[str, Any], *, strict: bool = False) -> Self:
        """Create params from a node's params mapping.

        Args:
            params: Raw node params (may include engine-private keys)
            strict: If True, unknown keys are rejected instead of dropped

        Raises:
            ParamsError: If params are invalid
        """
        data = public_params(params)
        if not strict:
            data = {key: value for key, value in data.items() if key in cls.model_fields}
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ParamsError(f"Invalid params for {cls.__name__}: {e}") from e

    @classmethod
    def defaults(cls) -> dict[str, Any]:
        """Default params as a plain dict."""
        return cls().model_dump(mode="json")
