"""
stageview: stage-level summaries of pipeline runs.

Derives ordered stages, statuses, and queue/pause/run durations from a
pipeline engine's execution graph, for running and finished runs alike.
"""

__version__ = "0.1.0"
