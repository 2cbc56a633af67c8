"""Stable identity keys for registered callbacks."""

from __future__ import annotations

import itertools
import weakref
from collections.abc import Iterable
from typing import Any


class ObjectTokens:
    """Hands out one token per live object and reuses it until the object goes away.

    Weak-referenceable objects drop their token when collected. Other objects
    (lists, slotted instances, ...) are pinned next to their token so their id
    cannot be reused, until :meth:`prune` releases them.
    """

    def __init__(self) -> None:
        self._tokens: dict[int, str] = {}
        self._pinned: dict[int, Any] = {}
        self._counter = itertools.count()

    def token_for(self, obj: Any) -> str:
        key = id(obj)
        token = self._tokens.get(key)
        if token is not None:
            return token

        token = f"<{type(obj).__qualname__}#{next(self._counter)}>"
        try:
            weakref.finalize(obj, self._tokens.pop, key, None)
        except TypeError:
            self._pinned[key] = obj
        self._tokens[key] = token
        return token

    def prune(self, keep: Iterable[Any]) -> None:
        """Release pinned objects that are not in ``keep``."""
        keep_ids = {id(obj) for obj in keep}
        for key in [key for key in self._pinned if key not in keep_ids]:
            del self._pinned[key]
            self._tokens.pop(key, None)

    def __len__(self) -> int:
        return len(self._tokens)


def _bound_method_of(target: Any, method: str) -> Any:
    bound = getattr(target, method, None)
    if bound is not None and getattr(bound, "__self__", None) is target:
        return bound
    return None


def token_subjects(callback: Any) -> list[Any]:
    """Objects whose tokens make up the identity of ``callback``."""
    if isinstance(callback, str) or callback is None:
        return []
    if isinstance(callback, tuple) and len(callback) == 2 and isinstance(callback[1], str):
        target, method = callback
        if isinstance(target, str):
            return []
        bound = _bound_method_of(target, method)
        return token_subjects(bound) if bound is not None else [target]

    bound_to = getattr(callback, "__self__", None)
    if bound_to is not None:
        func = getattr(callback, "__func__", None)
        return [bound_to] if func is None else [bound_to, func]
    return [callback]


def callback_identity(tokens: ObjectTokens, tag: str, callback: Any, priority: int | None) -> str:
    """Identity for ``callback`` within ``tag``.

    The same callback always maps to the same key, whatever the tag or priority;
    ``tag`` and ``priority`` only scope where the key is stored.
    """
    _ = (tag, priority)
    if isinstance(callback, str):
        return callback
    if callback is None:
        return "None"

    if isinstance(callback, tuple) and len(callback) == 2 and isinstance(callback[1], str):
        target, method = callback
        if isinstance(target, str):
            return f"{target}{method}"
        bound = _bound_method_of(target, method)
        if bound is not None:
            return callback_identity(tokens, tag, bound, priority)
        return f"{tokens.token_for(target)}{method}"

    # Bound methods are recreated on every attribute access; key them by the
    # instance and the underlying function.
    bound_to = getattr(callback, "__self__", None)
    if bound_to is not None:
        func = getattr(callback, "__func__", None)
        if func is not None:
            return f"{tokens.token_for(bound_to)}{tokens.token_for(func)}"
        # Builtin methods such as ``items.append`` have no ``__func__``; their
        # names are unique per type.
        return f"{tokens.token_for(bound_to)}{getattr(callback, '__name__', '')}"

    return tokens.token_for(callback)
