"""Configuration loading from YAML + environment variables."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from fillcast.common.errors import ConfigError
from fillcast.common.types import ProbabilityPolicy


def _resolve_env_vars(value: str) -> str:
    """Resolve ${VAR:default} patterns in strings."""
    pattern = r"\$\{(\w+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _resolve_config(obj: Any) -> Any:
    """Recursively resolve environment variables in config."""
    if isinstance(obj, str):
        return _resolve_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _resolve_config(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_resolve_config(v) for v in obj]
    return obj


class FillModelConfig(BaseModel):
    probability_policy: ProbabilityPolicy = ProbabilityPolicy.CLAMP
    min_spread: float = 0.0  # spreads below this earn no profit in predict()
    window_size: int = Field(default=60, gt=0)  # observations per generation when replaying


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class MonitoringConfig(BaseModel):
    enabled: bool = False
    prometheus_port: int = 9090


class AppConfig(BaseModel):
    fill_model: FillModelConfig = Field(default_factory=FillModelConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file with environment variable resolution."""
    config_path = Path("config/default.yaml") if config_path is None else Path(config_path)

    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")

    try:
        return AppConfig.model_validate(_resolve_config(raw))
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e
