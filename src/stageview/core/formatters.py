"""Plain-data rendering of summaries for the CLI.

This is not a REST wire format; it mirrors the dataclass field names.
"""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from stageview.contracts import RunSummary, StageSummary


def dataclass_to_dict(obj: Any) -> Any:
    """Convert a dataclass (or tuple/list of them) to JSON-serializable data.

    Handles nested dataclasses, tuples/lists, and Enum values
    (converted to .value). Plain values pass through.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: dataclass_to_dict(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, (list, tuple)):
        return [dataclass_to_dict(item) for item in obj]
    if isinstance(obj, Enum):
        return obj.value
    return obj


def summary_to_dict(summary: RunSummary) -> dict[str, Any]:
    result: dict[str, Any] = dataclass_to_dict(summary)
    return result


def _format_millis(millis: int) -> str:
    seconds, ms = divmod(max(0, millis), 1000)
    minutes, seconds = divmod(seconds, 60)
    if minutes:
        return f"{minutes}m {seconds}s"
    if seconds:
        return f"{seconds}s"
    return f"{ms}ms"


class SummaryTextFormatter:
    """Format a RunSummary as human-readable text."""

    def format(self, summary: RunSummary) -> str:
        lines = [
            f"Run {summary.name} ({summary.id}): {summary.status.value}",
            f"  duration: {_format_millis(summary.duration_millis)}"
            f"  queued: {_format_millis(summary.queue_duration_millis)}"
            f"  paused: {_format_millis(summary.pause_duration_millis)}",
        ]
        if summary.failure_cause is not None:
            lines.append(f"  failure cause: {summary.failure_cause}")
        if summary.pending_input:
            lines.append("  waiting for input")
        if not summary.stages:
            lines.append("  (no stages)")
        for stage in summary.stages:
            lines.append(self._format_stage(stage))
        return "\n".join(lines)

    def _format_stage(self, stage: StageSummary) -> str:
        text = f"  - {stage.name} [{stage.status.value}] {_format_millis(stage.duration_millis)}"
        if stage.pause_duration_millis:
            text += f" (paused {_format_millis(stage.pause_duration_millis)})"
        return text
