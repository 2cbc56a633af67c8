import pytest

from hookrail.context import ExecutionContext


def test_dispatching_pushes_and_pops() -> None:
    context = ExecutionContext()
    assert context.current_tag() is None

    with context.dispatching("outer"):
        with context.dispatching("inner"):
            assert context.current_tag() == "inner"
            assert context.is_dispatching("outer") is True
        assert context.current_tag() == "outer"

    assert context.is_dispatching() is False


def test_dispatching_pops_on_error() -> None:
    context = ExecutionContext()

    with pytest.raises(KeyError):
        with context.dispatching("tag"):
            raise KeyError("tag")

    assert context.is_dispatching("tag") is False


def test_trigger_counts() -> None:
    context = ExecutionContext()

    assert context.times_triggered("tag") == 0
    assert context.record_trigger("tag") == 1
    assert context.record_trigger("tag") == 2
    assert context.counts() == {"tag": 2}
