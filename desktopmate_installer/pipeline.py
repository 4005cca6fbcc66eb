from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .state_store import is_step_completed, mark_step_completed

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single idempotent step.

    Steps that set ``always_run = True`` are re-evaluated on every run
    (they carry their own up-to-date checks) instead of being skipped once
    recorded as completed.
    """

    step_id: str

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    skipped_steps: List[str]


def _check_step_id(steps: Sequence[Step], step_id: Optional[str], flag: str) -> None:
    """Reject a start/stop id that names no step.

    A typo in --start-at would otherwise silently run nothing, and one in
    --stop-after would run everything.
    """
    if step_id is None:
        return
    known = [s.step_id for s in steps]
    if step_id not in known:
        raise ValueError(f"Unknown step for {flag}: {step_id} (known: {', '.join(known)})")


def run_pipeline(
    *,
    state: Dict[str, Any],
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    force: bool = False,
) -> PipelineResult:
    """Run steps in order with resume/idempotency semantics.

    - A step recorded in execution.completed_steps is skipped, unless
      ``force`` is set or the step declares ``always_run``.
    - ``start_at`` skips everything before the named step (not recorded as
      skipped); ``stop_after`` ends the run once the named step has been
      handled, whether it ran or was skipped.
    - A raising step leaves execution.current_step pointing at it.
    """

    _check_step_id(steps, start_at, "start_at")
    _check_step_id(steps, stop_after, "stop_after")

    ran: List[str] = []
    skipped: List[str] = []

    started = start_at is None

    for step in steps:
        if not started:
            if step.step_id == start_at:
                started = True
            else:
                continue

        state.setdefault("execution", {})["current_step"] = step.step_id
        always_run = bool(getattr(step, "always_run", False))

        if not (force or always_run) and is_step_completed(state, step.step_id):
            logger.info("Skipping step %s (already completed)", step.step_id)
            skipped.append(step.step_id)
        else:
            logger.debug("Running step %s", step.step_id)
            state = step.run(state)
            mark_step_completed(state, step.step_id)
            ran.append(step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran, skipped_steps=skipped)
