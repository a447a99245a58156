"""Exceptions raised by the summary layer.

Missing graphs and missing timestamps are NOT errors; they produce
NOT_EXECUTED summaries and nodes. Only contract violations raise.
"""


class StageViewError(Exception):
    """Base class for errors owned by stageview."""

    pass


class UnrecognizedStatusError(StageViewError, LookupError):
    """Raised when a run's failure cause has no status mapping.

    Resolution stops here and no partial summary is produced.

    Attributes:
        cause: The failure-cause identifier the engine reported
    """

    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(f"Unrecognized failure cause '{cause}'")


class SnapshotValidationError(StageViewError, ValueError):
    """Raised when an execution snapshot is structurally invalid.

    Covers duplicate node ids, parents that are not in the snapshot,
    and cycles.
    """

    pass
