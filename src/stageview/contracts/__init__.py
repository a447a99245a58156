"""Shared contracts: enums, identifiers, errors, engine protocols, summaries.

Leaf package. Modules here import nothing from stageview.core.
"""

from stageview.contracts.engine import (
    ExecutionNode,
    FlowExecution,
    FlowNode,
    PipelineRun,
)
from stageview.contracts.enums import FAILURE_STATUSES, NodeKind, Status
from stageview.contracts.errors import (
    SnapshotValidationError,
    StageViewError,
    UnrecognizedStatusError,
)
from stageview.contracts.summary import NodeSummary, RunSummary, StageSummary, first_executed_stage
from stageview.contracts.types import FailureCause, NodeID, RunID, StageStartPredicate

__all__ = [
    "FAILURE_STATUSES",
    "ExecutionNode",
    "FailureCause",
    "FlowExecution",
    "FlowNode",
    "NodeID",
    "NodeKind",
    "NodeSummary",
    "PipelineRun",
    "RunID",
    "RunSummary",
    "SnapshotValidationError",
    "StageStartPredicate",
    "StageSummary",
    "StageViewError",
    "Status",
    "UnrecognizedStatusError",
    "first_executed_stage",
]
