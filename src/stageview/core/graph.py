# src/stageview/core/graph.py
"""Immutable execution snapshot and in-memory engine collaborators.

ExecutionSnapshot is an arena of FlowNode records plus parent-id edges,
built once per observation. Edges point parent -> child in a NetworkX
DiGraph, so the current heads of the execution are the nodes with no
successors.

walk() reproduces the engine's native order: start at the current heads
(most recently added first) and go depth-first through parents, yielding
every reachable node exactly once. Consumers must not rely on anything
stronger than "each node once".
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

import networkx as nx
from networkx import DiGraph

from stageview.contracts import FailureCause, FlowNode, NodeID, RunID, SnapshotValidationError


class ExecutionSnapshot:
    """Read-only view of an execution graph at one instant.

    Wraps a frozen NetworkX DiGraph. Node insertion order is kept and used
    to order heads: later nodes are treated as more recent.
    """

    def __init__(self, nodes: Iterable[FlowNode], *, heads: Sequence[str] | None = None) -> None:
        graph: DiGraph[str] = nx.DiGraph()
        for node in nodes:
            if graph.has_node(node.node_id):
                raise SnapshotValidationError(f"Duplicate node id '{node.node_id}'")
            graph.add_node(node.node_id, info=node)

        for node_id in list(graph.nodes):
            info: FlowNode = graph.nodes[node_id]["info"]
            for parent_id in info.parent_ids:
                if not graph.has_node(parent_id):
                    raise SnapshotValidationError(f"Node '{node_id}' references unknown parent '{parent_id}'")
                graph.add_edge(parent_id, node_id)

        if not nx.is_directed_acyclic_graph(graph):
            cycle = nx.find_cycle(graph)
            path = " -> ".join(str(u) for u, _ in cycle)
            raise SnapshotValidationError(f"Execution graph contains a cycle: {path}")

        if heads is None:
            heads = [n for n in reversed(list(graph.nodes)) if graph.out_degree(n) == 0]
        else:
            unknown = [h for h in heads if not graph.has_node(h)]
            if unknown:
                raise SnapshotValidationError(f"Unknown head node(s): {unknown}")

        self._graph: DiGraph[str] = nx.freeze(graph)
        self._heads: tuple[str, ...] = tuple(heads)

    @property
    def node_count(self) -> int:
        """Number of nodes in the snapshot."""
        return self._graph.number_of_nodes()

    @property
    def heads(self) -> tuple[str, ...]:
        """Current heads, most recent first."""
        return self._heads

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, str) and self._graph.has_node(node_id)

    def get_node(self, node_id: str) -> FlowNode:
        """Return the node record.

        Raises:
            KeyError: If node_id is not in the snapshot.
        """
        if not self._graph.has_node(node_id):
            raise KeyError(f"Node not found: {node_id}")
        node: FlowNode = self._graph.nodes[node_id]["info"]
        return node

    def parents(self, node_id: str) -> tuple[NodeID, ...]:
        """Parent ids in the order the node declares them."""
        return self.get_node(node_id).parent_ids

    def walk(self) -> Iterator[FlowNode]:
        """Yield reachable nodes, heads first, then depth-first through parents."""
        visited: set[str] = set()
        stack: list[str] = list(reversed(self._heads))
        while stack:
            node_id = stack.pop()
            if node_id in visited:
                continue
            visited.add(node_id)
            node = self.get_node(node_id)
            yield node
            # First parent is explored first
            for parent_id in reversed(node.parent_ids):
                if parent_id not in visited:
                    stack.append(parent_id)


@dataclass(frozen=True, slots=True)
class SnapshotExecution:
    """FlowExecution backed by an ExecutionSnapshot."""

    snapshot: ExecutionSnapshot
    is_complete: bool = False
    failure_cause: FailureCause | None = None

    def walk(self) -> Iterator[FlowNode]:
        return self.snapshot.walk()


@dataclass(frozen=True, slots=True)
class SnapshotRun:
    """PipelineRun backed by in-memory facts."""

    run_id: RunID
    display_name: str
    start_time_millis: int
    execution: SnapshotExecution | None = None
    pending_input_ids: tuple[str, ...] = field(default_factory=tuple)
    has_artifacts: bool = False
    has_changesets: bool = False
