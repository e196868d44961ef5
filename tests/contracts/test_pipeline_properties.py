"""Behavioral guarantees shared by the helpers and the flow.

These pin the properties callers rely on when composing pipelines: failures
travel unchanged, taps never alter values, and contract violations raise
instead of returning.
"""

from __future__ import annotations

import pytest

from pipehelpers import (
    DuplicateStepError,
    Failure,
    Flow,
    StepFailure,
    Success,
    UnwrapError,
    error,
    flow,
    ok,
    pair,
    rpair,
    tap_ok,
    tap_on,
    then_ok,
    unpair,
    unwrap,
)

pytestmark = pytest.mark.contract

VALUES = [0, "", "text", None, [1, 2], {"k": "v"}, ("a", "b"), Failure("nested")]


@pytest.mark.parametrize("value", VALUES)
def test_pair_orders_round_trip(value) -> None:
    assert unpair(pair(value, "tag")) == value
    assert unpair(rpair(value, "tag")) == "tag"


@pytest.mark.parametrize("value", VALUES)
def test_unwrap_only_accepts_success(value) -> None:
    assert unwrap(Success(value)) is value
    with pytest.raises(UnwrapError):
        unwrap(Failure(value))


@pytest.mark.parametrize("value", VALUES)
def test_then_ok_runs_exactly_once_on_success(value, recorder) -> None:
    recorder.returns = "result"
    assert then_ok(Success(value), recorder) == "result"
    assert recorder.calls == [value]


@pytest.mark.parametrize("value", VALUES)
def test_then_ok_never_runs_on_failure(value, recorder) -> None:
    outcome = Failure(value)
    assert then_ok(outcome, recorder) is outcome
    assert recorder.call_count == 0


@pytest.mark.parametrize("outcome", [ok(1), error(1), 1, None])
def test_taps_return_first_argument(outcome) -> None:
    assert tap_ok(outcome, lambda v: "ignored") is outcome
    assert tap_on(outcome, outcome, lambda v: "ignored") is outcome
    assert tap_on(outcome, object(), lambda v: "ignored") is outcome


def test_all_successful_steps_are_bound() -> None:
    outcome = flow.then_ok(
        flow.start("a", lambda: ok("x")), "b", lambda: ok("y")
    )
    assert outcome == Success({"a": "x", "b": "y"})


def test_failing_step_keeps_earlier_results_only() -> None:
    outcome = flow.then_ok(
        flow.start("a", lambda: ok("x")), "b", lambda: error("boom")
    )
    assert outcome == StepFailure({"a": "x"}, "b", "boom")
    assert "b" not in outcome.context


def test_reused_name_aborts_before_second_step(recorder) -> None:
    with pytest.raises(DuplicateStepError):
        Flow.start("a", lambda: ok("x")).then("a", recorder)
    assert recorder.calls == []


def test_map_ok_exit(recorder) -> None:
    failed = flow.start("a", lambda: error("boom"))
    assert flow.map_ok(failed, recorder) is failed
    assert recorder.calls == []

    assert flow.map_ok(flow.start("a", lambda: ok(1)), lambda ctx: ("raw", ctx["a"])) == (
        "raw",
        1,
    )


def test_terminated_flow_is_absorbing(recorder) -> None:
    failed = flow.start("a", lambda: error("boom"))
    outcome = failed
    for name in ["b", "c", "a"]:
        outcome = flow.then_ok(outcome, name, recorder)
        outcome = flow.tap_ok(outcome, recorder)

    assert outcome is failed
    assert recorder.calls == []
