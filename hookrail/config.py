"""Configuration models and loading for hookrail."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from hookrail.models import HookKind

PROJECT_CONFIG_NAME = ".hookrail.yaml"


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: str = "INFO"


class DefaultsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    priority: int = 10
    accepted_args: int = Field(default=1, ge=0)


class BindingConfig(BaseModel):
    """One callback to register at startup.

    ``callback`` is a descriptor understood by ``CallbackResolver``.
    """

    model_config = ConfigDict(extra="forbid")

    tag: str
    callback: str
    kind: HookKind = HookKind.FILTER
    priority: int | None = None
    accepted_args: int | None = Field(default=None, ge=0)


class ServerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    host: str = "127.0.0.1"
    port: int = 8000


class HookrailConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    bindings: list[BindingConfig] = Field(default_factory=list)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML at {path} must decode to a mapping")
    return data


def load_effective_config(
    project_path: str | Path,
    system_defaults: dict[str, Any] | None = None,
    runtime_override: dict[str, Any] | None = None,
) -> HookrailConfig:
    """Load config with precedence runtime > project .hookrail.yaml > system.

    Mappings merge key by key; lists such as ``bindings`` are replaced whole.
    """
    project_config = _load_yaml(Path(project_path) / PROJECT_CONFIG_NAME)

    merged: dict[str, Any] = {}
    if system_defaults:
        merged = _deep_merge(merged, system_defaults)
    if project_config:
        merged = _deep_merge(merged, project_config)
    if runtime_override:
        merged = _deep_merge(merged, runtime_override)

    return HookrailConfig.model_validate(merged)
