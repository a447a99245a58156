"""Derived summary objects: run -> ordered stages -> nodes.

Every object is built fresh for one observation of a run and is frozen
afterwards. Nothing here references the live execution graph.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from stageview.contracts.enums import Status
from stageview.contracts.types import FailureCause, NodeID, RunID


@dataclass(frozen=True, slots=True)
class NodeSummary:
    """Per-node view of one execution-graph node.

    start_time_millis is 0 when the node has not been reached; status is
    NOT_EXECUTED exactly in that case.
    """

    id: NodeID
    name: str
    status: Status
    start_time_millis: int = 0
    parent_node_ids: tuple[NodeID, ...] = ()
    pause_duration_millis: int = 0

    @property
    def executed(self) -> bool:
        return self.status is not Status.NOT_EXECUTED


@dataclass(frozen=True, slots=True)
class StageSummary(NodeSummary):
    """One logical stage of a run.

    pause_duration_millis covers the stage marker and every step inside
    the stage. nodes holds the executed steps of the stage in start order.
    """

    duration_millis: int = 0
    nodes: tuple[NodeSummary, ...] = ()


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Top-level summary of one run.

    Invariants:
        duration_millis == max(0, end - start - queue)
        pause_duration_millis == sum of stage pause durations
        stages are in chronological start order; the last one carries
        the run's own status
    """

    id: RunID
    name: str
    status: Status
    start_time_millis: int = 0
    end_time_millis: int = 0
    duration_millis: int = 0
    queue_duration_millis: int = 0
    pause_duration_millis: int = 0
    stages: tuple[StageSummary, ...] = field(default_factory=tuple)
    failure_cause: FailureCause | None = None
    pending_input: bool = False
    has_artifacts: bool = False
    has_changesets: bool = False


def first_executed_stage(stages: Sequence[StageSummary]) -> StageSummary | None:
    """Earliest stage in a chronological stage list that has started, if any."""
    for stage in stages:
        if stage.executed:
            return stage
    return None
