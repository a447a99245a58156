"""Semantic type aliases for compile-time type safety.

NewType creates distinct types that mypy treats as incompatible,
preventing accidental misuse of semantically different string values.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, NewType

if TYPE_CHECKING:
    from stageview.contracts.engine import ExecutionNode

NodeID = NewType("NodeID", str)
"""Node identifier, unique within one run's execution graph (e.g., '12')"""

RunID = NewType("RunID", str)
"""Engine run identifier (e.g., '42')"""

FailureCause = NewType("FailureCause", str)
"""Opaque failure-cause identifier reported by the engine (e.g., 'ABORTED')"""

type StageStartPredicate = Callable[["ExecutionNode"], bool]
"""Engine-defined test for whether a node begins a logical stage.

Called exactly once per visited node; the result is trusted as-is.
"""
