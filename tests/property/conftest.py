"""Shared Hypothesis strategies for execution graphs and runs.

Graphs are generated as DAGs by only letting a node pick parents among
nodes created before it, which also matches how engines append nodes.
"""

from __future__ import annotations

from hypothesis import strategies as st

from stageview.contracts import FailureCause, FlowNode, NodeID, NodeKind, RunID
from stageview.core.graph import ExecutionSnapshot, SnapshotExecution, SnapshotRun

start_times = st.one_of(st.none(), st.integers(min_value=0, max_value=1_000_000))
failure_causes = st.sampled_from([None, "FAILED", "ABORTED", "UNSTABLE"]).map(lambda c: FailureCause(c) if c else None)
# Step errors are free-form text, not necessarily known failure causes
node_errors = st.one_of(st.none(), st.sampled_from(["ABORTED", "unstable", "script returned exit code 1"]), st.text(max_size=10))


@st.composite
def flow_nodes(draw: st.DrawFn, max_nodes: int = 25) -> list[FlowNode]:
    count = draw(st.integers(min_value=1, max_value=max_nodes))
    nodes: list[FlowNode] = []
    for i in range(count):
        parent_count = draw(st.integers(min_value=0, max_value=min(2, i)))
        parents = draw(
            st.lists(st.sampled_from(range(i)), min_size=parent_count, max_size=parent_count, unique=True)
            if parent_count
            else st.just([])
        )
        nodes.append(
            FlowNode(
                node_id=NodeID(f"n{i}"),
                kind=draw(st.sampled_from([NodeKind.STEP, NodeKind.STEP, NodeKind.STAGE, NodeKind.PARALLEL_START])),
                parent_ids=tuple(NodeID(f"n{p}") for p in parents),
                start_time_millis=draw(start_times),
                pause_duration_millis=draw(st.integers(min_value=0, max_value=5_000)),
                error=draw(node_errors),
            )
        )
    return nodes


@st.composite
def runs(draw: st.DrawFn) -> SnapshotRun:
    """Started runs with arbitrary graphs and engine facts."""
    nodes = draw(flow_nodes())
    execution = SnapshotExecution(
        snapshot=ExecutionSnapshot(nodes),
        is_complete=draw(st.booleans()),
        failure_cause=draw(failure_causes),
    )
    return SnapshotRun(
        run_id=RunID("run"),
        display_name="#run",
        start_time_millis=draw(st.integers(min_value=0, max_value=1_000_000)),
        execution=execution,
        pending_input_ids=tuple(draw(st.lists(st.just("input"), max_size=1))),
    )
