import pytest

from hookrail.registry import HookRegistry


class Recorder:
    def __init__(self) -> None:
        self.seen: list[object] = []

    def record(self, value: object) -> object:
        self.seen.append(value)
        return value


def test_unregistered_tag_returns_value_unchanged() -> None:
    hooks = HookRegistry()
    marker = object()

    assert hooks.apply_filters("missing", "text") == "text"
    assert hooks.apply_filters("missing", marker) is marker
    assert hooks.has_filter("missing") is False


def test_applying_filters() -> None:
    hooks = HookRegistry()
    hooks.register_filter("greet", lambda value: value + " filtered", 10, 1)

    assert hooks.apply_filters("greet", "Hello World") == "Hello World filtered"


def test_filters_run_in_ascending_priority_order() -> None:
    hooks = HookRegistry()
    hooks.register_filter("trail", lambda value: value + "[20]", 20)
    hooks.register_filter("trail", lambda value: value + "[5]", 5)
    hooks.register_filter("trail", lambda value: value + "[10]", 10)

    assert hooks.apply_filters("trail", "") == "[5][10][20]"


def test_same_priority_runs_in_registration_order() -> None:
    hooks = HookRegistry()
    hooks.register_filter("trail", lambda value: value + "a")
    hooks.register_filter("trail", lambda value: value + "b")

    assert hooks.apply_filters("trail", "") == "ab"


def test_filters_receive_extra_args_up_to_accepted_args() -> None:
    hooks = HookRegistry()
    hooks.register_filter("price", lambda value, rate: value * rate, accepted_args=2)
    hooks.register_filter("price", lambda value, rate, bonus: value + bonus, priority=20, accepted_args=3)
    hooks.register_filter("price", lambda value: round(value), priority=30)

    assert hooks.apply_filters("price", 10, 1.5, 0.4) == 15


def test_zero_accepted_args_filter_replaces_value() -> None:
    hooks = HookRegistry()
    hooks.register_filter("reset", lambda: "fresh", accepted_args=0)

    assert hooks.apply_filters("reset", "stale") == "fresh"


def test_registering_twice_stores_one_entry() -> None:
    hooks = HookRegistry()
    recorder = Recorder()

    hooks.register_filter("tag", recorder.record)
    hooks.register_filter("tag", recorder.record)
    hooks.apply_filters("tag", "x")
    assert recorder.seen == ["x"]

    assert hooks.unregister_filter("tag", recorder.record) is True
    assert hooks.has_filter("tag", recorder.record) is False
    assert hooks.has_filter("tag") is False


def test_register_remove_round_trip() -> None:
    hooks = HookRegistry()
    callback = str.upper

    assert hooks.register_filter("tag", callback, 15) is True
    assert hooks.has_filter("tag", callback) == 15
    assert hooks.unregister_filter("tag", callback, 15) is True
    assert hooks.has_filter("tag", callback) is False
    assert hooks.unregister_filter("tag", callback, 15) is False


def test_unregister_requires_matching_priority() -> None:
    hooks = HookRegistry()
    hooks.register_filter("tag", str.strip, 5)

    assert hooks.unregister_filter("tag", str.strip) is False
    assert hooks.has_filter("tag", str.strip) == 5


def test_has_returns_zero_priority_distinct_from_false() -> None:
    hooks = HookRegistry()
    hooks.register_action("boot", print, priority=0)

    found = hooks.has_action("boot", print)
    assert found is not False
    assert found == 0
    assert hooks.has_action("boot", len) is False


def test_string_descriptors_are_their_own_identity() -> None:
    hooks = HookRegistry()

    assert hooks.add_filter("my_filter", "filterCallback", 10, 1) is True
    assert hooks.has_filter("my_filter", "filterCallback") == 10
    assert hooks.remove_filter("my_filter", "filterCallback", 10) is True
    assert hooks.has_filter("my_filter", "filterCallback") is False


def test_unregister_all_clears_every_priority() -> None:
    hooks = HookRegistry()
    hooks.register_action("tag", "first", 5)
    hooks.register_action("tag", "second", 50)

    assert hooks.unregister_all_actions("tag", 5) is True
    assert hooks.has_action("tag", "first") is False
    assert hooks.has_action("tag", "second") is False
    assert hooks.has_action("tag") is False
    assert "tag" not in hooks.tags()


def test_empty_tag_is_dropped_after_last_removal() -> None:
    hooks = HookRegistry()
    hooks.register_filter("tag", "only", 3)
    hooks.unregister_filter("tag", "only", 3)

    assert hooks.tags() == []
    assert hooks.apply_filters("tag", 1) == 1


def test_sort_cache_is_cleared_on_mutation() -> None:
    hooks = HookRegistry()
    table = hooks._table  # noqa: SLF001 - storage invariant test

    hooks.register_filter("tag", str.upper, 20)
    hooks.register_filter("tag", str.strip, 1)
    assert table.is_sorted("tag") is False

    assert hooks.apply_filters("tag", " a ") == "A"
    assert table.is_sorted("tag") is True
    assert table.priorities("tag") == [1, 20]

    hooks.register_filter("tag", str.title, 5)
    assert table.is_sorted("tag") is False
    assert hooks.apply_filters("tag", " a ") == "A"
    hooks.unregister_filter("tag", str.title, 5)
    assert table.is_sorted("tag") is False


def test_none_callbacks_are_skipped() -> None:
    hooks = HookRegistry()
    hooks.register_filter("tag", None)
    hooks.register_filter("tag", lambda value: value * 2, 20)

    assert hooks.apply_filters("tag", 4) == 8


def test_bad_callback_fails_only_on_dispatch() -> None:
    hooks = HookRegistry()
    assert hooks.register_filter("tag", "not.a.function") is True

    with pytest.raises(TypeError):
        hooks.apply_filters("tag", 1)


def test_filter_with_wrong_arity_surfaces_call_error() -> None:
    hooks = HookRegistry()
    hooks.register_filter("tag", lambda a, b: a + b)

    with pytest.raises(TypeError):
        hooks.apply_filters("tag", 1, 2)


def test_doing_action() -> None:
    hooks = HookRegistry()
    flags: dict[str, bool] = {}

    def ping() -> None:
        flags["ping"] = True

    hooks.register_action("ping", ping, 10, 0)
    hooks.trigger_action("ping")

    assert hooks.times_triggered("ping") == 1
    assert flags == {"ping": True}


def test_action_args_are_truncated_to_accepted_args() -> None:
    hooks = HookRegistry()
    received: list[tuple] = []
    hooks.register_action("tag", lambda *args: received.append(args), accepted_args=1)
    hooks.register_action("tag", lambda *args: received.append(args), priority=20, accepted_args=5)

    hooks.trigger_action("tag", "a", "b")

    assert received == [("a",), ("a", "b")]


def test_action_without_args_passes_empty_string() -> None:
    hooks = HookRegistry()
    received: list[object] = []
    hooks.register_action("tag", received.append)

    hooks.do_action("tag")

    assert received == [""]


def test_action_return_values_are_discarded() -> None:
    hooks = HookRegistry()
    hooks.register_action("tag", lambda value: "ignored")

    assert hooks.trigger_action("tag", "value") is None


def test_times_triggered_counts_actions_only() -> None:
    hooks = HookRegistry()
    assert hooks.times_triggered("nobody") == 0

    hooks.trigger_action("nobody")
    hooks.trigger_action("nobody", 1, 2)
    hooks.apply_filters("nobody", "v")

    assert hooks.did_action("nobody") == 2
    assert hooks.trigger_counts() == {"nobody": 2}


def test_single_wrapped_object_is_shared_between_callbacks() -> None:
    class Order:
        def __init__(self) -> None:
            self.steps: list[str] = []

    hooks = HookRegistry()
    hooks.register_action("checkout", lambda order: order.steps.append("tax"))
    hooks.register_action("checkout", lambda order: order.steps.append(f"ship after {order.steps[-1]}"), 20)

    order = Order()
    hooks.trigger_action("checkout", [order])

    assert order.steps == ["tax", "ship after tax"]


def test_wrapped_scalars_and_multiple_args_are_passed_as_is() -> None:
    hooks = HookRegistry()
    received: list[object] = []
    hooks.register_action("tag", received.append)

    hooks.trigger_action("tag", ["text"])
    hooks.trigger_action("tag", [{"k": 1}])
    marker = object()
    hooks.trigger_action("tag", [marker], "extra")

    assert received == [["text"], [{"k": 1}], [marker]]


def test_trigger_action_args_passes_sequence_items() -> None:
    hooks = HookRegistry()
    received: list[tuple] = []
    hooks.register_action("tag", lambda *args: received.append(args), accepted_args=2)

    hooks.trigger_action_args("tag", ["a", "b", "c"])

    assert received == [("a", "b")]
    assert hooks.times_triggered("tag") == 1


def test_apply_filters_args_threads_first_item() -> None:
    hooks = HookRegistry()
    hooks.register_filter("tag", lambda value, suffix: value + suffix, accepted_args=2)
    hooks.register_filter("tag", lambda value, suffix: value + suffix * 2, priority=20, accepted_args=2)
    args = ["x", "!"]

    assert hooks.apply_filters_args("tag", args) == "x!!!"
    assert args == ["x", "!"]


def test_all_hooks_run_first_with_full_args() -> None:
    hooks = HookRegistry()
    calls: list[tuple] = []
    hooks.register("all", lambda *args: calls.append(("all", *args)) or "ignored")
    hooks.register_filter("title", lambda value: calls.append(("title", value)) or value.upper())

    result = hooks.apply_filters("title", "draft", "extra")

    assert result == "DRAFT"
    assert calls == [("all", "title", "draft", "extra"), ("title", "draft")]


def test_all_hooks_run_for_tags_without_callbacks() -> None:
    hooks = HookRegistry()
    seen: list[tuple] = []

    def spy(*args: object) -> None:
        seen.append((hooks.current_tag(), *args))

    hooks.register("all", spy)

    assert hooks.apply_filters("untouched", 3) == 3
    hooks.trigger_action("event")
    hooks.trigger_action_args("event", [1, 2])

    assert seen == [
        ("untouched", "untouched", 3),
        ("event", "event"),
        ("event", "event", [1, 2]),
    ]
    assert hooks.is_dispatching() is False


def test_is_dispatching_inside_and_after_callback() -> None:
    hooks = HookRegistry()
    observed: dict[str, object] = {}

    def inspect_context() -> None:
        observed["action"] = hooks.is_dispatching_action("save")
        observed["other"] = hooks.is_dispatching_action("load")
        observed["any"] = hooks.doing_action()
        observed["current"] = hooks.current_action()

    hooks.register_action("save", inspect_context, accepted_args=0)
    hooks.trigger_action("save")

    assert observed == {"action": True, "other": False, "any": True, "current": "save"}
    assert hooks.is_dispatching_action("save") is False
    assert hooks.current_filter() is None


def test_nested_dispatch_tracks_whole_stack() -> None:
    hooks = HookRegistry()
    observed: list[object] = []

    def outer(value: str) -> str:
        return hooks.apply_filters("inner", value)

    def inner(value: str) -> str:
        observed.extend([hooks.current_filter(), hooks.doing_filter("outer"), hooks.doing_filter("inner")])
        return value + "!"

    hooks.register_filter("outer", outer)
    hooks.register_filter("inner", inner)

    assert hooks.apply_filters("outer", "hi") == "hi!"
    assert observed == ["inner", True, True]
    assert hooks.doing_filter() is False


def test_stack_is_released_when_callback_raises() -> None:
    hooks = HookRegistry()

    def explode(value: object) -> None:
        raise RuntimeError("boom")

    hooks.register_filter("tag", explode)
    hooks.register("all", lambda *args: None)

    with pytest.raises(RuntimeError, match="boom"):
        hooks.apply_filters("tag", 1)
    with pytest.raises(RuntimeError, match="boom"):
        hooks.trigger_action("tag")

    assert hooks.is_dispatching() is False
    assert hooks.current_tag() is None
    assert hooks.times_triggered("tag") == 1


def test_callbacks_added_ahead_of_cursor_run_in_same_dispatch() -> None:
    hooks = HookRegistry()
    order: list[str] = []

    def first() -> None:
        order.append("first")
        hooks.register_action("tag", lambda: order.append("late-ahead"), 30, 0)
        hooks.register_action("tag", lambda: order.append("late-behind"), 1, 0)
        hooks.register_action("tag", lambda: order.append("late-same"), 10, 0)

    hooks.register_action("tag", first, 10, 0)
    hooks.register_action("tag", lambda: order.append("second"), 20, 0)

    hooks.trigger_action("tag")
    assert order == ["first", "second", "late-ahead"]


def test_groups_removed_ahead_of_cursor_are_skipped() -> None:
    hooks = HookRegistry()
    order: list[str] = []

    def drop_later() -> None:
        order.append("first")
        hooks.unregister_action("tag", "later", 30)

    hooks.register_action("tag", drop_later, 10, 0)
    hooks.register_action("tag", lambda: order.append("sibling"), 10, 0)
    hooks.register_action("tag", "later", 30, 0)

    hooks.trigger_action("tag")
    assert order == ["first", "sibling"]


def test_current_group_runs_from_snapshot() -> None:
    hooks = HookRegistry()
    order: list[str] = []

    def sibling() -> None:
        order.append("sibling")

    def remove_sibling() -> None:
        order.append("remover")
        hooks.unregister_action("tag", sibling)

    hooks.register_action("tag", remove_sibling, accepted_args=0)
    hooks.register_action("tag", sibling, accepted_args=0)

    hooks.trigger_action("tag")
    assert order == ["remover", "sibling"]
    assert hooks.has_action("tag", sibling) is False


def test_removing_whole_tag_stops_dispatch() -> None:
    hooks = HookRegistry()
    order: list[str] = []

    def clear() -> None:
        order.append("clear")
        hooks.unregister_all_actions("tag")

    hooks.register_action("tag", clear, 1, 0)
    hooks.register_action("tag", lambda: order.append("never"), 2, 0)

    hooks.trigger_action("tag")
    assert order == ["clear"]


def test_describe_lists_registrations_in_order() -> None:
    hooks = HookRegistry()
    hooks.register_filter("b", "second", 20, 2)
    hooks.register_filter("b", "first", 5)
    hooks.register_action("a", "only")

    views = hooks.describe()

    assert [(view.tag, view.priority, view.callback, view.accepted_args) for view in views] == [
        ("a", 10, "only", 1),
        ("b", 5, "first", 1),
        ("b", 20, "second", 2),
    ]
    assert [view.tag for view in hooks.describe("b")] == ["b", "b"]


def test_has_finds_a_registered_none_callback() -> None:
    hooks = HookRegistry()
    hooks.register_filter("tag", None, 7)

    assert hooks.has_filter("tag", None) == 7
    assert hooks.has_filter("tag") is True
    assert hooks.has_filter("other", None) is False
    assert hooks.apply_filters("tag", "value") == "value"
