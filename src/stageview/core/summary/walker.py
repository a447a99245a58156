"""Single-pass graph walk, expressed as a fold.

The engine's walk is consumed exactly once and turned into a list of
NodeFacts. A pure reduction over those facts then yields:

- the latest start timestamp seen (candidate end time of the run)
- one raw StageSummary per distinct stage-start node
- the pause total across those stages

Raw stages come out with the most recently discovered stage first: the walk
runs newest-to-oldest, so this puts them roughly oldest-first and makes the
later stable sort break timestamp ties in graph order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from stageview.contracts import ExecutionNode, StageSummary
from stageview.core.summary.classifier import NodeFacts, classify
from stageview.core.summary.status import combine_stage_status

type NodeClassifier = Callable[[ExecutionNode], NodeFacts]


@dataclass(frozen=True, slots=True)
class WalkResult:
    """Outcome of one walk. Stages are deduplicated but not yet ordered."""

    stages: tuple[StageSummary, ...]
    latest_timestamp: int
    pause_duration_millis: int


def walk(nodes: Iterable[ExecutionNode], *, classifier: NodeClassifier = classify) -> WalkResult:
    """Classify every node of one walk, then reduce."""
    return reduce_facts([classifier(node) for node in nodes])


def reduce_facts(facts: Sequence[NodeFacts]) -> WalkResult:
    """Reduce per-node facts (in walk order) to a WalkResult."""
    latest = max((f.start_time_millis for f in facts if f.start_time_millis is not None), default=0)

    by_id: dict[str, NodeFacts] = {}
    for f in facts:
        by_id.setdefault(f.node_id, f)
    members = _group_stage_members(facts, by_id)

    stages: list[StageSummary] = []
    seen: set[str] = set()
    for f in facts:
        if not f.is_stage_start or f.node_id in seen:
            continue
        seen.add(f.node_id)
        stages.insert(0, _build_stage(f, members.get(f.node_id, [])))

    return WalkResult(
        stages=tuple(stages),
        latest_timestamp=latest,
        pause_duration_millis=sum(s.pause_duration_millis for s in stages),
    )


def _build_stage(marker: NodeFacts, steps: list[NodeFacts]) -> StageSummary:
    # steps arrive in walk order (newest first); reverse before the stable sort
    executed = sorted(
        (s for s in reversed(steps) if s.executed),
        key=lambda s: s.start_time_millis or 0,
    )
    return StageSummary(
        id=marker.node_id,
        name=marker.name,
        status=combine_stage_status(marker.status, [s.status for s in executed]),
        start_time_millis=marker.start_time_millis or 0,
        parent_node_ids=marker.parent_ids,
        pause_duration_millis=marker.pause_contribution_millis + sum(s.pause_contribution_millis for s in steps),
        nodes=tuple(s.to_node_summary() for s in executed),
    )


def _group_stage_members(facts: Sequence[NodeFacts], by_id: dict[str, NodeFacts]) -> dict[str, list[NodeFacts]]:
    """Assign each non-stage node to its enclosing stage.

    The enclosing stage is the first stage-start node reached by following
    first-parent links upward. Nodes with no such ancestor belong to no stage.
    """
    enclosing: dict[str, str | None] = {}

    def resolve(node_id: str) -> str | None:
        path: list[str] = []
        current: str | None = node_id
        found: str | None = None
        while current is not None:
            if current in enclosing:
                found = enclosing[current]
                break
            path.append(current)
            node = by_id.get(current)
            if node is None or not node.parent_ids:
                break
            first_parent = node.parent_ids[0]
            first = by_id.get(first_parent)
            if first is not None and first.is_stage_start:
                found = first_parent
                break
            current = first_parent
        for visited in path:
            enclosing[visited] = found
        return found

    members: dict[str, list[NodeFacts]] = {}
    seen: set[str] = set()
    for f in facts:
        if f.is_stage_start or f.node_id in seen:
            continue
        seen.add(f.node_id)
        stage_id = resolve(f.node_id)
        if stage_id is not None:
            members.setdefault(stage_id, []).append(f)
    return members
