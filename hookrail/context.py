"""Execution stack and action counters shared by filters and actions."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager


class ExecutionContext:
    def __init__(self) -> None:
        self._stack: list[str] = []
        self._action_counts: Counter[str] = Counter()

    @contextmanager
    def dispatching(self, tag: str) -> Iterator[None]:
        """Mark ``tag`` as executing for the duration of the block, even if it raises."""
        self._stack.append(tag)
        try:
            yield
        finally:
            self._stack.pop()

    def current_tag(self) -> str | None:
        return self._stack[-1] if self._stack else None

    def is_dispatching(self, tag: str | None = None) -> bool:
        if tag is None:
            return bool(self._stack)
        return tag in self._stack

    def record_trigger(self, tag: str) -> int:
        self._action_counts[tag] += 1
        return self._action_counts[tag]

    def times_triggered(self, tag: str) -> int:
        return self._action_counts.get(tag, 0)

    def counts(self) -> dict[str, int]:
        return dict(self._action_counts)
