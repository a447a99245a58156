"""JSON run snapshot documents.

A snapshot document captures everything the summary layer reads from the
engine for one run at one instant:

    {
      "id": "42",
      "name": "#42",
      "start_time_millis": 1000,
      "pending_inputs": [],
      "has_artifacts": false,
      "execution": {
        "complete": true,
        "failure_cause": null,
        "heads": ["9"],
        "nodes": [
          {"id": "2", "kind": "start"},
          {"id": "3", "kind": "stage", "name": "Build", "parents": ["2"], "start_time_millis": 1200}
        ]
      }
    }

"execution" is null (or absent) for a run that has not started.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field

from stageview.contracts import FailureCause, FlowNode, NodeID, NodeKind, RunID
from stageview.core.graph import ExecutionSnapshot, SnapshotExecution, SnapshotRun


class NodeDocument(BaseModel):
    """One node of the execution graph."""

    model_config = {"frozen": True, "extra": "forbid"}

    id: str = Field(min_length=1)
    kind: NodeKind = NodeKind.STEP
    name: str = ""
    parents: list[str] = Field(default_factory=list)
    start_time_millis: int | None = Field(default=None, ge=0)
    pause_duration_millis: int = Field(default=0, ge=0)
    error: str | None = None
    active: bool = False
    awaiting_input: bool = False

    def to_flow_node(self) -> FlowNode:
        return FlowNode(
            node_id=NodeID(self.id),
            kind=self.kind,
            parent_ids=tuple(NodeID(p) for p in self.parents),
            display_name=self.name or self.id,
            start_time_millis=self.start_time_millis,
            pause_duration_millis=self.pause_duration_millis,
            error=self.error,
            active=self.active,
            awaiting_input=self.awaiting_input,
        )


class ExecutionDocument(BaseModel):
    """Execution state and graph of a started run."""

    model_config = {"frozen": True, "extra": "forbid"}

    complete: bool = False
    failure_cause: str | None = None
    heads: list[str] | None = None
    nodes: list[NodeDocument] = Field(default_factory=list)

    def to_execution(self) -> SnapshotExecution:
        """Build the snapshot graph.

        Raises:
            SnapshotValidationError: If the node graph is not a valid DAG.
        """
        snapshot = ExecutionSnapshot((n.to_flow_node() for n in self.nodes), heads=self.heads)
        cause = FailureCause(self.failure_cause) if self.failure_cause is not None else None
        return SnapshotExecution(snapshot=snapshot, is_complete=self.complete, failure_cause=cause)


class RunDocument(BaseModel):
    """Top-level snapshot document for one run."""

    model_config = {"frozen": True, "extra": "forbid"}

    id: str = Field(min_length=1)
    name: str = ""
    start_time_millis: int = Field(default=0, ge=0)
    pending_inputs: list[str] = Field(default_factory=list)
    has_artifacts: bool = False
    has_changesets: bool = False
    execution: ExecutionDocument | None = None

    def to_run(self) -> SnapshotRun:
        return SnapshotRun(
            run_id=RunID(self.id),
            display_name=self.name or f"#{self.id}",
            start_time_millis=self.start_time_millis,
            execution=self.execution.to_execution() if self.execution is not None else None,
            pending_input_ids=tuple(self.pending_inputs),
            has_artifacts=self.has_artifacts,
            has_changesets=self.has_changesets,
        )


def load_run(path: Path) -> SnapshotRun:
    """Load a run snapshot from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
        ValidationError: If the document doesn't match the schema
        SnapshotValidationError: If the node graph is not a valid DAG
    """
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    return RunDocument.model_validate(data).to_run()
