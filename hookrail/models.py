"""Pydantic views of registry state used by the CLI and the web API."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class HookKind(str, Enum):
    FILTER = "filter"
    ACTION = "action"


class HookView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tag: str
    priority: int
    identity: str
    callback: str
    accepted_args: int


class ActionCountView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tag: str
    times_triggered: int
    dispatching: bool = False


def describe_callback(callback: Any) -> str:
    if isinstance(callback, str):
        return callback
    if isinstance(callback, tuple) and len(callback) == 2:
        target, method = callback
        target_name = target if isinstance(target, str) else type(target).__qualname__
        return f"{target_name}@{method}"

    bound_to = getattr(callback, "__self__", None)
    name = getattr(callback, "__qualname__", None)
    if name is None:
        return type(callback).__qualname__
    if bound_to is not None and not isinstance(bound_to, type):
        return f"{type(bound_to).__module__}.{name}"
    module = getattr(callback, "__module__", None)
    return f"{module}.{name}" if module else name
