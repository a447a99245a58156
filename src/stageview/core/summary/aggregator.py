"""Stage aggregation: dedup by id, then chronological order.

The engine walk is biased towards recent activity, which is the wrong
order to present stages in. Forks and joins can also reach the same stage
marker more than once.
"""

from __future__ import annotations

from collections.abc import Iterable

from stageview.contracts import StageSummary


def aggregate(raw_stages: Iterable[StageSummary]) -> tuple[StageSummary, ...]:
    """Keep the first stage seen per id and sort by start time.

    Duplicates are dropped, never merged. The sort is stable: stages with
    equal start times keep their relative input order.
    """
    unique: dict[str, StageSummary] = {}
    for stage in raw_stages:
        if stage.id not in unique:
            unique[stage.id] = stage
    return tuple(sorted(unique.values(), key=lambda s: s.start_time_millis))
