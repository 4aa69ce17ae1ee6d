# src/textubes/core/config.py
"""Configuration schema and loading for Textubes.

Settings are frozen pydantic models. load_settings() reads a YAML file
through Dynaconf so that TEXTUBES_* environment variables override file
values (TEXTUBES_PROPAGATION__MAX_ITERATIONS=500 for nested keys).
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

ENV_PREFIX = "TEXTUBES"

# Pattern for ${VAR} or ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class PropagationSettings(BaseModel):
    """Propagation pass limits."""

    model_config = {"frozen": True}

    max_iterations: int = Field(
        default=10_000,
        gt=0,
        description="Maximum evaluations of any single node within one propagation pass before the pass is aborted",
    )


class RandomSettings(BaseModel):
    """Seed source for regenerative nodes.

    Example YAML:
        random:
          seed: 1234
    """

    model_config = {"frozen": True}

    seed: int | None = Field(
        default=None,
        description="When set, node seeds are drawn from random.Random(seed) instead of the system source",
    )


class LoggingSettings(BaseModel):
    """Log output configuration."""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO", description="Root log level")
    json_output: bool = Field(default=False, description="Emit JSON lines instead of console output")


class TextubesSettings(BaseModel):
    """Top-level Textubes configuration.

    All sections are optional; an empty settings file yields the defaults.
    """

    model_config = {"frozen": True}

    propagation: PropagationSettings = Field(default_factory=PropagationSettings)
    random: RandomSettings = Field(default_factory=RandomSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in string values."""

    def replacer(match: re.Match[str]) -> str:
        env_value = os.environ.get(match.group(1))
        if env_value is not None:
            return env_value
        if match.group(2) is not None:
            return match.group(2)
        return match.group(0)

    def expand(value: Any) -> Any:
        if isinstance(value, str):
            return _ENV_VAR_PATTERN.sub(replacer, value)
        if isinstance(value, dict):
            return {k: expand(v) for k, v in value.items()}
        if isinstance(value, list):
            return [expand(v) for v in value]
        return value

    return {k: expand(v) for k, v in config.items()}


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value


def load_settings(config_path: Path) -> TextubesSettings:
    """Load settings from a YAML file with environment variable overrides.

    Precedence:
    1. Environment variables (TEXTUBES_*) - highest priority
    2. Config file
    3. Defaults from the pydantic schema - lowest priority

    Raises:
        ValidationError: If configuration fails pydantic validation
        FileNotFoundError: If the config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=ENV_PREFIX,
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): _lower_keys(v) for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    raw_config = _expand_env_vars(raw_config)

    # Unknown top-level keys are ignored so one YAML can carry other tools' sections
    known = TextubesSettings.model_fields
    return TextubesSettings(**{k: v for k, v in raw_config.items() if k in known})
