"""Tests for ExecutionSnapshot construction and walk order."""

import networkx as nx
import pytest

from stageview.contracts import NodeKind, SnapshotValidationError
from stageview.core.graph import ExecutionSnapshot, SnapshotExecution
from tests.helpers.runs import node


class TestSnapshotValidation:
    def test_duplicate_node_id_rejected(self) -> None:
        with pytest.raises(SnapshotValidationError, match="Duplicate node id 'a'"):
            ExecutionSnapshot([node("a"), node("a")])

    def test_unknown_parent_rejected(self) -> None:
        with pytest.raises(SnapshotValidationError, match="unknown parent 'ghost'"):
            ExecutionSnapshot([node("a", parents=["ghost"])])

    def test_cycle_rejected(self) -> None:
        with pytest.raises(SnapshotValidationError, match="cycle"):
            ExecutionSnapshot([node("a", parents=["b"]), node("b", parents=["a"])])

    def test_unknown_head_rejected(self) -> None:
        with pytest.raises(SnapshotValidationError, match="Unknown head"):
            ExecutionSnapshot([node("a")], heads=["zzz"])

    def test_snapshot_validation_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ExecutionSnapshot([node("a"), node("a")])

    def test_graph_is_frozen(self) -> None:
        snapshot = ExecutionSnapshot([node("a")])
        with pytest.raises(nx.NetworkXError):
            snapshot._graph.add_node("b")


class TestSnapshotQueries:
    def test_node_count_and_contains(self) -> None:
        snapshot = ExecutionSnapshot([node("a"), node("b", parents=["a"])])

        assert snapshot.node_count == 2
        assert "a" in snapshot
        assert "zzz" not in snapshot

    def test_get_node_missing(self) -> None:
        with pytest.raises(KeyError):
            ExecutionSnapshot([node("a")]).get_node("b")

    def test_parents_keep_declared_order(self) -> None:
        snapshot = ExecutionSnapshot([node("x"), node("y"), node("j", parents=["y", "x"])])

        assert snapshot.parents("j") == ("y", "x")

    def test_heads_default_to_childless_nodes_newest_first(self) -> None:
        snapshot = ExecutionSnapshot([node("root"), node("a", parents=["root"]), node("b", parents=["root"])])

        assert snapshot.heads == ("b", "a")

    def test_explicit_heads(self) -> None:
        snapshot = ExecutionSnapshot([node("a"), node("b", parents=["a"])], heads=["b"])

        assert snapshot.heads == ("b",)


class TestSnapshotWalk:
    def test_linear_walk_newest_first(self) -> None:
        snapshot = ExecutionSnapshot([node("1"), node("2", parents=["1"]), node("3", parents=["2"])])

        assert [n.node_id for n in snapshot.walk()] == ["3", "2", "1"]

    def test_diamond_visits_shared_ancestor_once(self) -> None:
        snapshot = ExecutionSnapshot(
            [
                node("stage", kind=NodeKind.STAGE),
                node("a", parents=["stage"]),
                node("b", parents=["stage"]),
                node("join", parents=["a", "b"]),
            ]
        )
        visited = [n.node_id for n in snapshot.walk()]

        assert visited == ["join", "a", "stage", "b"]
        assert visited.count("stage") == 1

    def test_multiple_heads_walk_all(self) -> None:
        snapshot = ExecutionSnapshot(
            [node("root"), node("a", parents=["root"]), node("b", parents=["root"])],
        )

        assert sorted(n.node_id for n in snapshot.walk()) == ["a", "b", "root"]

    def test_unreachable_from_heads_not_walked(self) -> None:
        snapshot = ExecutionSnapshot([node("a"), node("b", parents=["a"]), node("c")], heads=["b"])

        assert [n.node_id for n in snapshot.walk()] == ["b", "a"]

    def test_walk_is_repeatable(self) -> None:
        execution = SnapshotExecution(snapshot=ExecutionSnapshot([node("a"), node("b", parents=["a"])]))

        assert list(execution.walk()) == list(execution.walk())
