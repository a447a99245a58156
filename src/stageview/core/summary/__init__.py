"""Run summary derivation: classify, walk, aggregate, summarize."""

from stageview.core.summary.aggregator import aggregate
from stageview.core.summary.classifier import NodeFacts, classify, is_stage_node
from stageview.core.summary.status import (
    resolve_node_status,
    resolve_run_status,
    status_for_failure_cause,
)
from stageview.core.summary.summarizer import RunSummarizer, is_pending_input, summarize_run
from stageview.core.summary.walker import WalkResult, reduce_facts, walk

__all__ = [
    "NodeFacts",
    "RunSummarizer",
    "WalkResult",
    "aggregate",
    "classify",
    "is_pending_input",
    "is_stage_node",
    "reduce_facts",
    "resolve_node_status",
    "resolve_run_status",
    "status_for_failure_cause",
    "summarize_run",
    "walk",
]
