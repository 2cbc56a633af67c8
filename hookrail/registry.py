"""Filter and action hook registry.

Callbacks are registered against a tag at a numeric priority and run in
ascending priority order when the tag is dispatched. Filters thread a value
through every callback; actions run callbacks for their side effects.

    hooks = HookRegistry()
    hooks.register_filter("title", lambda title: title.strip())
    hooks.register_action("saved", audit.record, priority=20, accepted_args=2)

    title = hooks.apply_filters("title", raw_title)
    hooks.trigger_action("saved", record, user)

Callbacks registered under the reserved ``"all"`` tag run before the callbacks
of any dispatched tag and receive the complete, untruncated argument list
starting with the dispatched tag.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from typing import Any

from hookrail.context import ExecutionContext
from hookrail.identity import ObjectTokens, callback_identity, token_subjects
from hookrail.models import HookView, describe_callback
from hookrail.table import HookTable, RegisteredCallback

logger = logging.getLogger(__name__)

ALL_TAG = "all"
DEFAULT_PRIORITY = 10
DEFAULT_ACCEPTED_ARGS = 1

_MISSING: Any = object()

_NOT_OBJECT_LIKE = (str, bytes, bytearray, int, float, complex, bool, list, tuple, dict, set, frozenset)


def _share_single_object(args: tuple[Any, ...]) -> tuple[Any, ...]:
    """Unwrap ``([obj],)`` to ``(obj,)`` so every callback mutates the caller's object."""
    if len(args) != 1:
        return args
    arg = args[0]
    if isinstance(arg, (list, tuple)) and len(arg) == 1:
        inner = arg[0]
        if inner is not None and not isinstance(inner, _NOT_OBJECT_LIKE):
            return (inner,)
    return args


class HookRegistry:
    """In-process registry of filter and action callbacks.

    Filters and actions share one table: a callback registered as a filter can
    be triggered as an action and vice versa.
    """

    def __init__(self) -> None:
        self._table = HookTable()
        self._context = ExecutionContext()
        self._tokens = ObjectTokens()

    # -- registration ---------------------------------------------------

    def register(
        self,
        tag: str,
        callback: Any,
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = DEFAULT_ACCEPTED_ARGS,
    ) -> bool:
        """Register ``callback`` for ``tag``.

        Registering the same callback at the same tag and priority again replaces
        the earlier entry. Callability is not checked here; a bad callback fails
        when the tag is dispatched.
        """
        identity = callback_identity(self._tokens, tag, callback, priority)
        self._table.add(tag, priority, identity, RegisteredCallback(callback=callback, accepted_args=accepted_args))
        logger.debug("Registered %s on %r (priority=%s, accepted_args=%s)", identity, tag, priority, accepted_args)
        return True

    def unregister(self, tag: str, callback: Any, priority: int = DEFAULT_PRIORITY) -> bool:
        identity = callback_identity(self._tokens, tag, callback, priority)
        removed = self._table.remove(tag, priority, identity)
        if removed:
            logger.debug("Unregistered %s from %r (priority=%s)", identity, tag, priority)
        self._release_tokens()
        return removed

    def unregister_all(self, tag: str, priority: int | None = None) -> bool:
        """Remove every callback of ``tag``.

        ``priority`` is accepted for call compatibility only; all priorities of
        the tag are cleared whatever it is.
        """
        _ = priority
        self._table.clear_tag(tag)
        logger.debug("Cleared all callbacks from %r", tag)
        self._release_tokens()
        return True

    def has(self, tag: str, callback: Any = _MISSING) -> bool | int:
        """Without ``callback``: whether ``tag`` has any callback.

        With ``callback``: the priority it is registered at, or ``False``. The
        priority may be ``0``, so test the result with ``is not False``.
        """
        if not self._table.has_tag(tag):
            return False
        if callback is _MISSING:
            return True

        identity = callback_identity(self._tokens, tag, callback, None)
        priority = self._table.find_priority(tag, identity)
        self._release_tokens()
        return False if priority is None else priority

    def _release_tokens(self) -> None:
        # Drop tokens pinned by lookups with objects no registration references.
        self._tokens.prune(
            subject for entry in self._table.entries() for subject in token_subjects(entry.callback)
        )

    def register_filter(
        self,
        tag: str,
        callback: Any,
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = DEFAULT_ACCEPTED_ARGS,
    ) -> bool:
        return self.register(tag, callback, priority, accepted_args)

    def register_action(
        self,
        tag: str,
        callback: Any,
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = DEFAULT_ACCEPTED_ARGS,
    ) -> bool:
        return self.register(tag, callback, priority, accepted_args)

    def unregister_filter(self, tag: str, callback: Any, priority: int = DEFAULT_PRIORITY) -> bool:
        return self.unregister(tag, callback, priority)

    def unregister_action(self, tag: str, callback: Any, priority: int = DEFAULT_PRIORITY) -> bool:
        return self.unregister(tag, callback, priority)

    def unregister_all_filters(self, tag: str, priority: int | None = None) -> bool:
        return self.unregister_all(tag, priority)

    def unregister_all_actions(self, tag: str, priority: int | None = None) -> bool:
        return self.unregister_all(tag, priority)

    def has_filter(self, tag: str, callback: Any = _MISSING) -> bool | int:
        return self.has(tag, callback)

    def has_action(self, tag: str, callback: Any = _MISSING) -> bool | int:
        return self.has(tag, callback)

    add_filter = register_filter
    add_action = register_action
    remove_filter = unregister_filter
    remove_action = unregister_action
    remove_all_filters = unregister_all_filters
    remove_all_actions = unregister_all_actions

    # -- dispatch -------------------------------------------------------

    def apply_filters(self, tag: str, value: Any, *args: Any) -> Any:
        """Pass ``value`` through every filter of ``tag`` and return the result.

        Each callback receives the previous callback's return value followed by
        ``args``, truncated to its ``accepted_args``.
        """
        return self._apply_filters(tag, [value, *args], all_args=(tag, value, *args))

    def apply_filters_args(self, tag: str, args: Sequence[Any]) -> Any:
        """Like :meth:`apply_filters` with the argument list given as a sequence.

        ``args[0]`` is the filtered value. ``"all"`` callbacks receive
        ``(tag, args)``. The caller's sequence is left untouched.
        """
        return self._apply_filters(tag, list(args), all_args=(tag, args))

    def trigger_action(self, tag: str, *args: Any) -> None:
        """Run every action callback of ``tag``, discarding return values.

        Called without arguments, callbacks that accept one receive ``""``. A
        sole argument of the form ``[obj]`` is unwrapped so callbacks share
        ``obj``.
        """
        self._context.record_trigger(tag)
        call_args = _share_single_object(args) if args else ("",)
        self._dispatch(
            tag,
            all_args=(tag, *args),
            invoke=lambda entry: entry.callback(*call_args[: int(entry.accepted_args)]),
        )

    def trigger_action_args(self, tag: str, args: Sequence[Any]) -> None:
        self._context.record_trigger(tag)
        call_args = tuple(args)
        self._dispatch(
            tag,
            all_args=(tag, args),
            invoke=lambda entry: entry.callback(*call_args[: int(entry.accepted_args)]),
        )

    do_action = trigger_action
    do_action_args = trigger_action_args

    def _apply_filters(self, tag: str, args: list[Any], *, all_args: tuple[Any, ...]) -> Any:
        def invoke(entry: RegisteredCallback) -> None:
            args[0] = entry.callback(*args[: int(entry.accepted_args)])

        self._dispatch(tag, all_args=all_args, invoke=invoke)
        return args[0]

    def _dispatch(
        self,
        tag: str,
        *,
        all_args: tuple[Any, ...],
        invoke: Callable[[RegisteredCallback], None],
    ) -> None:
        has_all = self._table.has_tag(ALL_TAG)
        if not has_all and not self._table.has_tag(tag):
            return

        with self._context.dispatching(tag):
            if has_all:
                for entry in self._entries(ALL_TAG):
                    entry.callback(*all_args)
            for entry in self._entries(tag):
                invoke(entry)

    def _entries(self, tag: str) -> Iterator[RegisteredCallback]:
        # Walks the live table one priority at a time: groups added ahead of the
        # cursor are picked up, groups removed ahead of it are skipped. Each group
        # is snapshotted when the cursor reaches it.
        priority: int | None = None
        while True:
            priority = self._table.next_priority(tag, priority)
            if priority is None:
                return
            for entry in self._table.group(tag, priority):
                if entry.callback is not None:
                    yield entry

    # -- execution context ----------------------------------------------

    def times_triggered(self, tag: str) -> int:
        return self._context.times_triggered(tag)

    def current_tag(self) -> str | None:
        return self._context.current_tag()

    def is_dispatching(self, tag: str | None = None) -> bool:
        return self._context.is_dispatching(tag)

    def is_dispatching_filter(self, tag: str | None = None) -> bool:
        return self._context.is_dispatching(tag)

    def is_dispatching_action(self, tag: str | None = None) -> bool:
        return self._context.is_dispatching(tag)

    did_action = times_triggered
    current_filter = current_tag
    current_action = current_tag
    doing_filter = is_dispatching_filter
    doing_action = is_dispatching_action

    # -- introspection --------------------------------------------------

    def tags(self) -> list[str]:
        return sorted(self._table.tags())

    def trigger_counts(self) -> dict[str, int]:
        return self._context.counts()

    def describe(self, tag: str | None = None) -> list[HookView]:
        tags = [tag] if tag is not None else self.tags()
        views: list[HookView] = []
        for name in tags:
            for priority, identity, entry in self._table.items(name):
                views.append(
                    HookView(
                        tag=name,
                        priority=priority,
                        identity=identity,
                        callback=describe_callback(entry.callback),
                        accepted_args=entry.accepted_args,
                    )
                )
        return views
