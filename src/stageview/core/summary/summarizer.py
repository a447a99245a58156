# src/stageview/core/summary/summarizer.py
"""Run summarization.

RunSummarizer turns one observation of a PipelineRun into a RunSummary:

1. No execution: NOT_EXECUTED summary, nothing walked.
2. Resolve status, walk the graph, aggregate stages. A running run ends
   "now"; a finished one ends at the latest node timestamp.
3. No stages: queue time runs from run start to "now", even for a
   finished run.
4. Otherwise queue time runs from run start to the first executed stage
   (0 if no stage has executed).
5. The chronologically last stage takes the run's status.
6. duration = max(0, end - start - queue).
7. Run pause = sum of stage pauses.

Stage durations are filled in from the final end time: each executed
stage runs until the next executed stage starts, the last one until the
run's end, minus its own pause time.

"Now" is read once per summary from the injected Clock.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from functools import partial

import structlog

from stageview.contracts import (
    PipelineRun,
    RunSummary,
    StageStartPredicate,
    StageSummary,
    Status,
    UnrecognizedStatusError,
    first_executed_stage,
)
from stageview.core.clock import DEFAULT_CLOCK, Clock
from stageview.core.config import StageViewSettings
from stageview.core.summary.aggregator import aggregate
from stageview.core.summary.classifier import classify, is_stage_node
from stageview.core.summary.status import resolve_run_status
from stageview.core.summary.walker import walk

logger = structlog.get_logger(__name__)


def is_pending_input(run: PipelineRun) -> bool:
    """True iff at least one input step of the run is waiting on a decision."""
    return len(run.pending_input_ids) > 0


class RunSummarizer:
    """Builds RunSummary snapshots.

    Example:
        summarizer = RunSummarizer(clock=MockClock(start=9000))
        summary = summarizer.summarize(run)
    """

    def __init__(
        self,
        settings: StageViewSettings | None = None,
        *,
        clock: Clock = DEFAULT_CLOCK,
        is_stage_start: StageStartPredicate = is_stage_node,
    ) -> None:
        self._settings = settings or StageViewSettings()
        self._failure_causes = self._settings.failure_cause_table()
        self._clock = clock
        self._classifier = partial(classify, is_stage_start=is_stage_start, failure_causes=self._failure_causes)

    def summarize(self, run: PipelineRun) -> RunSummary:
        """Summarize one observation of a run.

        Raises:
            UnrecognizedStatusError: If the run reports a failure cause with
                no status mapping. No partial summary is returned.
        """
        log = logger.bind(run_id=run.run_id)
        execution = run.execution
        pending = is_pending_input(run)

        if execution is None:
            log.debug("run_not_executed")
            return RunSummary(
                id=run.run_id,
                name=run.display_name,
                status=Status.NOT_EXECUTED,
                has_artifacts=run.has_artifacts,
                has_changesets=run.has_changesets,
            )

        try:
            status = resolve_run_status(
                True,
                execution.is_complete,
                execution.failure_cause,
                pending,
                failure_causes=self._failure_causes,
            )
        except UnrecognizedStatusError as e:
            log.warning("unrecognized_failure_cause", cause=e.cause)
            raise

        result = walk(execution.walk(), classifier=self._classifier)
        stages = aggregate(result.stages)
        now = self._clock.now_millis()
        start = run.start_time_millis
        end = now if status.is_running else result.latest_timestamp

        queue = 0
        if not stages:
            queue = now - start
        else:
            first_executed = first_executed_stage(stages)
            if first_executed is not None:
                queue = first_executed.start_time_millis - start
            stages = _with_stage_durations(stages, end)
            stages = (*stages[:-1], dataclasses.replace(stages[-1], status=status))

        summary = RunSummary(
            id=run.run_id,
            name=run.display_name,
            status=status,
            start_time_millis=start,
            end_time_millis=end,
            duration_millis=max(0, end - start - queue),
            queue_duration_millis=queue,
            pause_duration_millis=result.pause_duration_millis,
            stages=stages,
            failure_cause=execution.failure_cause,
            pending_input=pending,
            has_artifacts=run.has_artifacts,
            has_changesets=run.has_changesets,
        )
        log.debug(
            "run_summarized",
            status=summary.status.value,
            stage_count=len(stages),
            duration_millis=summary.duration_millis,
        )
        return summary


def _with_stage_durations(stages: Sequence[StageSummary], end_time_millis: int) -> tuple[StageSummary, ...]:
    """Fill in stage durations from the chronological stage list."""
    started = [i for i, s in enumerate(stages) if s.executed]
    ends: dict[int, int] = {}
    for pos, i in enumerate(started):
        ends[i] = stages[started[pos + 1]].start_time_millis if pos + 1 < len(started) else end_time_millis

    out: list[StageSummary] = []
    for i, stage in enumerate(stages):
        if i not in ends:
            out.append(stage)
            continue
        duration = max(0, ends[i] - stage.start_time_millis - stage.pause_duration_millis)
        out.append(dataclasses.replace(stage, duration_millis=duration))
    return tuple(out)


def summarize_run(
    run: PipelineRun,
    *,
    settings: StageViewSettings | None = None,
    clock: Clock = DEFAULT_CLOCK,
    is_stage_start: StageStartPredicate = is_stage_node,
) -> RunSummary:
    """Convenience wrapper: summarize a run with a one-off RunSummarizer."""
    return RunSummarizer(settings, clock=clock, is_stage_start=is_stage_start).summarize(run)
