"""Priority-ordered storage of registered callbacks."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RegisteredCallback:
    callback: Any
    accepted_args: int = 1


class HookTable:
    """tag -> priority -> identity -> RegisteredCallback.

    Priority keys of a tag are sorted lazily: any mutation of the tag clears its
    sorted flag and the next reader re-sorts.
    """

    def __init__(self) -> None:
        self._hooks: dict[str, dict[int, dict[str, RegisteredCallback]]] = {}
        self._sorted: set[str] = set()

    def add(self, tag: str, priority: int, identity: str, entry: RegisteredCallback) -> None:
        self._hooks.setdefault(tag, {}).setdefault(priority, {})[identity] = entry
        self._sorted.discard(tag)

    def remove(self, tag: str, priority: int, identity: str) -> bool:
        group = self._hooks.get(tag, {}).get(priority)
        if group is None or identity not in group:
            return False

        del group[identity]
        if not group:
            del self._hooks[tag][priority]
        if not self._hooks[tag]:
            del self._hooks[tag]
        self._sorted.discard(tag)
        return True

    def clear_tag(self, tag: str) -> None:
        self._hooks.pop(tag, None)
        self._sorted.discard(tag)

    def has_tag(self, tag: str) -> bool:
        return bool(self._hooks.get(tag))

    def find_priority(self, tag: str, identity: str) -> int | None:
        for priority, group in self._hooks.get(tag, {}).items():
            if identity in group:
                return priority
        return None

    def priorities(self, tag: str) -> list[int]:
        return list(self._ensure_sorted(tag))

    def group(self, tag: str, priority: int) -> list[RegisteredCallback]:
        """Snapshot of one priority group in insertion order."""
        return list(self._hooks.get(tag, {}).get(priority, {}).values())

    def next_priority(self, tag: str, after: int | None) -> int | None:
        """Smallest live priority of ``tag`` strictly greater than ``after``."""
        for priority in self._ensure_sorted(tag):
            if after is None or priority > after:
                return priority
        return None

    def is_sorted(self, tag: str) -> bool:
        return tag in self._sorted

    def tags(self) -> list[str]:
        return list(self._hooks)

    def entries(self) -> Iterator[RegisteredCallback]:
        for groups in self._hooks.values():
            for group in groups.values():
                yield from group.values()

    def items(self, tag: str) -> Iterator[tuple[int, str, RegisteredCallback]]:
        for priority in self.priorities(tag):
            for identity, entry in self._hooks[tag][priority].items():
                yield priority, identity, entry

    def _ensure_sorted(self, tag: str) -> dict[int, dict[str, RegisteredCallback]]:
        groups = self._hooks.get(tag)
        if groups is None:
            return {}
        if tag not in self._sorted:
            groups = dict(sorted(groups.items()))
            self._hooks[tag] = groups
            self._sorted.add(tag)
        return groups
