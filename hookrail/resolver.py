"""Resolution of callback descriptors into callables.

Supported descriptor forms:

- ``"package.module:Class@method"`` / ``"package.module.Class@method"``: the
  method bound to an instance of ``Class``;
- ``"package.module:Name"`` / ``"package.module.Name"``: ``Name().handle`` when
  ``Name`` is a class, otherwise ``Name`` itself if it is callable;
- ``(target, "method")``: ``target`` is an object or a class path as above;
- any callable, returned unchanged.

Classes are instantiated once per resolver through ``factory`` (``cls()`` by
default), so resolving the same descriptor twice yields callbacks with the same
registry identity.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Callable
from typing import Any

from hookrail.errors import DescriptorResolutionError

logger = logging.getLogger(__name__)

METHOD_SEPARATOR = "@"
DEFAULT_METHOD = "handle"


def import_object(path: str) -> Any:
    """Import ``"pkg.mod:attr.sub"`` or ``"pkg.mod.attr"``."""
    if ":" in path:
        module_path, _, attr_path = path.partition(":")
    else:
        module_path, _, attr_path = path.rpartition(".")
    if not module_path or not attr_path:
        raise ImportError(f"{path!r} is not a dotted import path")

    obj: Any = importlib.import_module(module_path)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj


class CallbackResolver:
    def __init__(self, factory: Callable[[type], Any] | None = None) -> None:
        self._factory = factory or (lambda cls: cls())
        self._instances: dict[type, Any] = {}

    def resolve(self, descriptor: Any) -> Callable[..., Any]:
        if isinstance(descriptor, str):
            return self._resolve_string(descriptor)
        if isinstance(descriptor, tuple):
            return self._resolve_pair(descriptor)
        if callable(descriptor):
            return descriptor
        raise DescriptorResolutionError(descriptor, "unsupported descriptor type")

    def instance_of(self, cls: type) -> Any:
        if cls not in self._instances:
            self._instances[cls] = self._factory(cls)
            logger.debug("Instantiated %s.%s for hook callbacks", cls.__module__, cls.__qualname__)
        return self._instances[cls]

    def _resolve_string(self, descriptor: str) -> Callable[..., Any]:
        target_path, separator, method = descriptor.partition(METHOD_SEPARATOR)
        if separator and not method:
            raise DescriptorResolutionError(descriptor, "missing method name")

        target = self._import(descriptor, target_path)
        if separator:
            if not inspect.isclass(target):
                raise DescriptorResolutionError(descriptor, f"{target_path!r} is not a class")
            return self._bound(descriptor, self.instance_of(target), method)
        if inspect.isclass(target):
            return self._bound(descriptor, self.instance_of(target), DEFAULT_METHOD)
        if callable(target):
            return target
        raise DescriptorResolutionError(descriptor, f"{target_path!r} is not callable")

    def _resolve_pair(self, descriptor: tuple[Any, ...]) -> Callable[..., Any]:
        if len(descriptor) != 2 or not isinstance(descriptor[1], str):
            raise DescriptorResolutionError(descriptor, "expected (target, method_name)")
        target, method = descriptor
        if isinstance(target, str):
            target = self._import(descriptor, target)
        if inspect.isclass(target):
            target = self.instance_of(target)
        return self._bound(descriptor, target, method)

    def _import(self, descriptor: Any, path: str) -> Any:
        try:
            return import_object(path)
        except (ImportError, AttributeError) as exc:
            raise DescriptorResolutionError(descriptor, f"cannot import {path!r} ({exc})") from exc

    def _bound(self, descriptor: Any, target: Any, method: str) -> Callable[..., Any]:
        bound = getattr(target, method, None)
        if bound is None or not callable(bound):
            raise DescriptorResolutionError(descriptor, f"{type(target).__qualname__} has no callable {method!r}")
        return bound
