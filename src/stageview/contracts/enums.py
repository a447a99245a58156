"""Status codes and node kinds shared across the summary layer.

Status is a closed set. Engines report failures as opaque cause identifiers;
those are translated into one of the failure statuses through an explicit
table (see stageview.core.summary.status), never by name lookup.
"""

from enum import StrEnum


class Status(StrEnum):
    """Execution status of a run, stage, or node."""

    NOT_EXECUTED = "NOT_EXECUTED"
    IN_PROGRESS = "IN_PROGRESS"
    PAUSED_PENDING_INPUT = "PAUSED_PENDING_INPUT"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    ABORTED = "ABORTED"
    UNSTABLE = "UNSTABLE"

    @property
    def is_running(self) -> bool:
        """Run is still live; end time is measured against the clock."""
        return self in _RUNNING

    @property
    def is_failure(self) -> bool:
        """Status can be produced by an engine failure cause."""
        return self in FAILURE_STATUSES


_RUNNING = frozenset({Status.IN_PROGRESS, Status.PAUSED_PENDING_INPUT})

FAILURE_STATUSES = frozenset({Status.FAILED, Status.ABORTED, Status.UNSTABLE})
"""Statuses a failure cause may map to. Everything else is engine-state derived."""


class NodeKind(StrEnum):
    """Type of node in the execution graph."""

    START = "start"
    END = "end"
    STEP = "step"
    STAGE = "stage"
    PARALLEL_START = "parallel_start"
    PARALLEL_BRANCH_START = "parallel_branch_start"
    PARALLEL_BRANCH_END = "parallel_branch_end"
    PARALLEL_END = "parallel_end"
