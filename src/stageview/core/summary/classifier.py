"""Node classification.

Turns one engine node into the facts the walker folds over. The stage
predicate is engine-defined; it is called once per node and trusted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from stageview.contracts import (
    ExecutionNode,
    NodeID,
    NodeKind,
    NodeSummary,
    StageStartPredicate,
    Status,
)
from stageview.core.config import DEFAULT_FAILURE_CAUSES
from stageview.core.summary.status import resolve_node_status


def is_stage_node(node: ExecutionNode) -> bool:
    """Default stage predicate: the node is a stage marker."""
    return node.kind is NodeKind.STAGE


@dataclass(frozen=True, slots=True)
class NodeFacts:
    """Per-node facts extracted during the walk."""

    node_id: NodeID
    name: str
    parent_ids: tuple[NodeID, ...]
    status: Status
    is_stage_start: bool
    start_time_millis: int | None
    pause_contribution_millis: int
    is_parallel_branch_start: bool = False
    is_parallel_branch_end: bool = False

    @property
    def executed(self) -> bool:
        return self.start_time_millis is not None

    def to_node_summary(self) -> NodeSummary:
        return NodeSummary(
            id=self.node_id,
            name=self.name,
            status=self.status,
            start_time_millis=self.start_time_millis or 0,
            parent_node_ids=self.parent_ids,
            pause_duration_millis=self.pause_contribution_millis,
        )


def classify(
    node: ExecutionNode,
    *,
    is_stage_start: StageStartPredicate = is_stage_node,
    failure_causes: Mapping[str, Status] = DEFAULT_FAILURE_CAUSES,
) -> NodeFacts:
    """Extract status and timing facts for one node."""
    return NodeFacts(
        node_id=node.node_id,
        name=node.display_name or node.node_id,
        parent_ids=tuple(node.parent_ids),
        status=resolve_node_status(node, failure_causes=failure_causes),
        is_stage_start=bool(is_stage_start(node)),
        start_time_millis=node.start_time_millis,
        pause_contribution_millis=node.pause_duration_millis,
        is_parallel_branch_start=node.kind is NodeKind.PARALLEL_BRANCH_START,
        is_parallel_branch_end=node.kind is NodeKind.PARALLEL_BRANCH_END,
    )
