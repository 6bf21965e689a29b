"""Configuration loading for b3prop.

Priority: explicit overrides > environment variables > TOML config file.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from b3prop.errors import ConfigError

DEFAULT_BAGGAGE_PREFIX = "baggage-"

CONFIG_FILE_NAME = "b3prop.toml"

# Environment variable -> (section, key)
ENV_VARS = {
    "B3PROP_BAGGAGE_PREFIX": ("propagation", "baggage_prefix"),
}


class PropagationConfig(BaseModel):
    """Settings consumed by B3TextMapPropagator at construction time."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    baggage_prefix: str = Field(
        default=DEFAULT_BAGGAGE_PREFIX,
        description="Carrier key prefix marking baggage entries",
    )

    @field_validator("baggage_prefix")
    @classmethod
    def _prefix_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("baggage_prefix must not be empty")
        return value


class B3PropConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    propagation: PropagationConfig = Field(default_factory=PropagationConfig)


def find_config_file() -> Optional[str]:
    """
    Look for b3prop.toml in the current directory, then the home directory.

    Returns:
        Path to the first file found, or None
    """
    for directory in (Path.cwd(), Path.home()):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return str(candidate)
    return None


def load_toml_config(path: str) -> Dict[str, Any]:
    """
    Load a TOML config file into a nested dict.

    A missing file yields an empty dict.

    Raises:
        ConfigError: if the file is not valid TOML
    """
    file_path = Path(path)
    if not file_path.is_file():
        return {}
    try:
        with file_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file: {e}", details={"path": str(path)}) from e


def load_config_from_env() -> Dict[str, Any]:
    """Collect settings from B3PROP_* environment variables as a nested dict."""
    result: Dict[str, Any] = {}
    for env_name, (section, key) in ENV_VARS.items():
        value = os.environ.get(env_name)
        if value is not None:
            result.setdefault(section, {})[key] = value
    return result


def _merge(base: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> B3PropConfig:
    """
    Build a validated B3PropConfig from file, environment and overrides.

    Args:
        config_file: TOML file to read; defaults to find_config_file()
        overrides: nested dict that wins over every other source

    Raises:
        ConfigError: if the file cannot be parsed or the result is invalid
    """
    path = config_file or find_config_file()
    data: Dict[str, Any] = load_toml_config(path) if path else {}
    data = _merge(data, load_config_from_env())
    if overrides:
        data = _merge(data, overrides)

    try:
        return B3PropConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", details={"errors": e.error_count()}) from e


def validate_config(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Tuple[bool, str, Optional[B3PropConfig]]:
    """
    Validate configuration without raising.

    Returns:
        (is_valid, message, config or None)
    """
    try:
        config = load_config(config_file=config_file, overrides=overrides)
    except ConfigError as e:
        return False, str(e), None
    return True, "Configuration is valid", config
