"""Engine-facing contracts.

The pipeline engine is an external collaborator. These protocols describe
the facts the summary layer reads from it; nothing here writes back.

FlowNode is the concrete node record used by in-memory snapshots. Engines
may supply their own node objects as long as they satisfy ExecutionNode.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from stageview.contracts.enums import NodeKind
from stageview.contracts.types import FailureCause, NodeID, RunID


class ExecutionNode(Protocol):
    """One node of the execution DAG as seen by the summary layer."""

    @property
    def node_id(self) -> NodeID: ...

    @property
    def parent_ids(self) -> Sequence[NodeID]: ...

    @property
    def kind(self) -> NodeKind: ...

    @property
    def display_name(self) -> str: ...

    @property
    def start_time_millis(self) -> int | None:
        """Start timestamp, or None if execution has not reached the node."""
        ...

    @property
    def pause_duration_millis(self) -> int: ...

    @property
    def error(self) -> str | None:
        """Failure-cause identifier recorded on the node, if any."""
        ...

    @property
    def active(self) -> bool:
        """Node is a current head that is still executing."""
        ...

    @property
    def awaiting_input(self) -> bool: ...


class FlowExecution(Protocol):
    """The execution behind a run."""

    @property
    def is_complete(self) -> bool: ...

    @property
    def failure_cause(self) -> FailureCause | None: ...

    def walk(self) -> Iterable[ExecutionNode]:
        """Iterate reachable nodes, most recent activity first.

        Each node is yielded exactly once per call. No stronger ordering
        guarantee is assumed by consumers.
        """
        ...


class PipelineRun(Protocol):
    """A single run of a pipeline, possibly not yet started."""

    @property
    def run_id(self) -> RunID: ...

    @property
    def display_name(self) -> str: ...

    @property
    def start_time_millis(self) -> int: ...

    @property
    def execution(self) -> FlowExecution | None:
        """None when the run has not started executing."""
        ...

    @property
    def pending_input_ids(self) -> Sequence[str]:
        """Ids of input steps currently waiting on a human decision."""
        ...

    @property
    def has_artifacts(self) -> bool: ...

    @property
    def has_changesets(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class FlowNode:
    """Immutable node record held by an ExecutionSnapshot."""

    node_id: NodeID
    kind: NodeKind = NodeKind.STEP
    parent_ids: tuple[NodeID, ...] = ()
    display_name: str = ""
    start_time_millis: int | None = None
    pause_duration_millis: int = 0
    error: str | None = None
    active: bool = False
    awaiting_input: bool = False

    def __post_init__(self) -> None:
        if self.start_time_millis is not None and self.start_time_millis < 0:
            raise ValueError(f"Node '{self.node_id}' has negative start time {self.start_time_millis}")
        if self.pause_duration_millis < 0:
            raise ValueError(f"Node '{self.node_id}' has negative pause duration {self.pause_duration_millis}")
