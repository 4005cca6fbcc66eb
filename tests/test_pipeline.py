from __future__ import annotations

import pytest

from desktopmate_installer.pipeline import run_pipeline
from desktopmate_installer.state_store import ensure_defaults, mark_step_completed


class RecordingStep:
    def __init__(self, step_id, calls, always_run=False):
        self.step_id = step_id
        self.calls = calls
        self.always_run = always_run

    def run(self, state):
        self.calls.append(self.step_id)
        return state


def _steps(calls, always=()):
    return [RecordingStep(s, calls, s in always) for s in ("10_a", "20_b", "30_c")]


def test_runs_in_order_and_marks_completed():
    calls = []
    state = ensure_defaults({})
    result = run_pipeline(state=state, steps=_steps(calls))

    assert calls == ["10_a", "20_b", "30_c"]
    assert result.ran_steps == calls
    assert state["execution"]["completed_steps"] == calls
    assert state["execution"]["current_step"] is None


def test_skips_completed_steps():
    calls = []
    state = ensure_defaults({})
    mark_step_completed(state, "20_b")

    result = run_pipeline(state=state, steps=_steps(calls))

    assert calls == ["10_a", "30_c"]
    assert result.skipped_steps == ["20_b"]


def test_always_run_and_force_ignore_completion():
    calls = []
    state = ensure_defaults({})
    for s in ("10_a", "20_b", "30_c"):
        mark_step_completed(state, s)

    run_pipeline(state=state, steps=_steps(calls, always=("20_b",)))
    assert calls == ["20_b"]

    calls.clear()
    run_pipeline(state=state, steps=_steps(calls), force=True)
    assert calls == ["10_a", "20_b", "30_c"]


def test_start_at_and_stop_after():
    calls = []
    result = run_pipeline(state=ensure_defaults({}), steps=_steps(calls), start_at="20_b", stop_after="20_b")

    assert calls == ["20_b"]
    assert result.ran_steps == ["20_b"]


def test_unknown_step_id_rejected_before_running():
    calls = []
    with pytest.raises(ValueError, match="99_nope"):
        run_pipeline(state=ensure_defaults({}), steps=_steps(calls), stop_after="99_nope")
    assert calls == []


def test_failure_leaves_current_step_set():
    class Boom:
        step_id = "20_boom"

        def run(self, state):
            raise RuntimeError("boom")

    state = ensure_defaults({})
    with pytest.raises(RuntimeError):
        run_pipeline(state=state, steps=[RecordingStep("10_a", []), Boom()])

    assert state["execution"]["current_step"] == "20_boom"
    assert state["execution"]["completed_steps"] == ["10_a"]
