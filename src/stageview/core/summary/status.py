"""Status resolution.

Maps engine facts to a Status. Run-level resolution order (first match wins):

    no execution          -> NOT_EXECUTED
    failure cause present -> status mapped from the cause
    execution complete    -> SUCCESS
    input step waiting    -> PAUSED_PENDING_INPUT
    otherwise             -> IN_PROGRESS

Run failure causes go through an explicit table. A cause that is not in
the table raises UnrecognizedStatusError; there is no fallback status.
Node errors are free-form step messages: table hits keep their mapped
status, anything else is FAILED.
"""

from __future__ import annotations

from collections.abc import Mapping

from stageview.contracts import ExecutionNode, Status, UnrecognizedStatusError
from stageview.core.config import DEFAULT_FAILURE_CAUSES, normalize_cause


def status_for_failure_cause(
    cause: str,
    failure_causes: Mapping[str, Status] = DEFAULT_FAILURE_CAUSES,
) -> Status:
    """Translate an engine failure cause into a failure status.

    Raises:
        UnrecognizedStatusError: If the cause is not in failure_causes.
    """
    try:
        return failure_causes[normalize_cause(cause)]
    except KeyError:
        raise UnrecognizedStatusError(cause) from None


def resolve_run_status(
    has_execution: bool,
    completed: bool,
    failure_cause: str | None,
    pending_input_active: bool,
    *,
    failure_causes: Mapping[str, Status] = DEFAULT_FAILURE_CAUSES,
) -> Status:
    """Resolve a run's status from engine facts.

    Raises:
        UnrecognizedStatusError: If failure_cause is not a known cause.
    """
    if not has_execution:
        return Status.NOT_EXECUTED
    if failure_cause is not None:
        return status_for_failure_cause(failure_cause, failure_causes)
    if completed:
        return Status.SUCCESS
    if pending_input_active:
        return Status.PAUSED_PENDING_INPUT
    return Status.IN_PROGRESS


def resolve_node_status(
    node: ExecutionNode,
    *,
    failure_causes: Mapping[str, Status] = DEFAULT_FAILURE_CAUSES,
) -> Status:
    """Resolve a single node's status.

    A node without a start time was never reached and is NOT_EXECUTED
    whatever else it reports. Never raises: an error outside the
    failure-cause table is FAILED.
    """
    if node.start_time_millis is None:
        return Status.NOT_EXECUTED
    if node.error is not None:
        return failure_causes.get(normalize_cause(node.error), Status.FAILED)
    if node.active:
        return Status.PAUSED_PENDING_INPUT if node.awaiting_input else Status.IN_PROGRESS
    return Status.SUCCESS


# Ranking used when a stage's status is folded from its steps.
_SEVERITY: dict[Status, int] = {
    Status.FAILED: 6,
    Status.ABORTED: 5,
    Status.UNSTABLE: 4,
    Status.PAUSED_PENDING_INPUT: 3,
    Status.IN_PROGRESS: 2,
    Status.SUCCESS: 1,
    Status.NOT_EXECUTED: 0,
}


def combine_stage_status(marker: Status, steps: list[Status]) -> Status:
    """Fold the stage marker status with its steps' statuses.

    An unreached marker keeps the stage NOT_EXECUTED. Otherwise the most
    severe executed status wins (failures over running over success).
    """
    if marker is Status.NOT_EXECUTED:
        return marker
    return max([marker, *steps], key=_SEVERITY.__getitem__)
