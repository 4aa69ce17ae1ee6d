# tests/unit/plugins/test_config_base.py
"""Tests for typed node params parsing."""

import pytest
from pydantic import Field, ValidationError

from textubes.plugins.config_base import KindParams, ParamsError, public_params


class CountParams(KindParams):
    count: int = Field(default=3, ge=0)
    label: str = ""


class TestPublicParams:
    def test_strips_engine_private_keys(self) -> None:
        assert public_params({"count": 1, "_seed": 9, "_regenerate": 2}) == {"count": 1}


class TestFromParams:
    def test_defaults(self) -> None:
        assert CountParams.defaults() == {"count": 3, "label": ""}

    def test_lenient_drops_unknown_keys(self) -> None:
        """Evaluation ignores UI flags and other stray keys."""
        cfg = CountParams.from_params({"count": 5, "selected": True, "_seed": 1})
        assert cfg.count == 5

    def test_strict_rejects_unknown_keys(self) -> None:
        with pytest.raises(ParamsError, match="CountParams"):
            CountParams.from_params({"selected": True}, strict=True)

    def test_strict_still_ignores_private_keys(self) -> None:
        assert CountParams.from_params({"_seed": 4}, strict=True).count == 3

    def test_invalid_value_raises_params_error(self) -> None:
        with pytest.raises(ParamsError):
            CountParams.from_params({"count": -1})

    def test_params_error_is_value_error(self) -> None:
        assert issubclass(ParamsError, ValueError)

    def test_params_are_frozen(self) -> None:
        cfg = CountParams.from_params({})
        with pytest.raises(ValidationError):
            cfg.count = 1  # type: ignore[misc]
