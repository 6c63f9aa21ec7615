"""Cleanup run model.

Summary of one cleanup invocation with counts, timings and execution context.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class RunMode(Enum):
    """Run execution mode."""

    DRY_RUN = "dry-run"
    EXECUTE = "execute"


class RunStatus(Enum):
    """Run status with state transitions."""

    ENUMERATING = "enumerating"
    DRAINING = "draining"
    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class CleanupRun:
    """Cleanup run entity.

    State transitions:
        enumerating → draining → completed (no delete failed)
        enumerating → draining → partial (some deletes failed)
        enumerating → draining → failed (every submitted delete failed)

    Attributes:
        run_id: Unique identifier for the run
        resource_type: AWS resource type being cleaned up
        started_at: When the run started (UTC)
        mode: dry-run or execute
        status: Current status
        listed_count: Resources returned by the collector
        submitted_count: Eligible resources submitted to the worker pool
        succeeded_count: Submitted resources whose delete call succeeded
        failed_count: Submitted resources whose delete call failed
        skipped_count: Ineligible resources (excluded, too young, in use)
        concurrency: Number of worker threads used
        completed_at: When the run finished (optional)
        duration_seconds: Total run duration (optional)
    """

    run_id: str
    resource_type: str
    started_at: datetime
    mode: RunMode
    status: RunStatus
    listed_count: int = 0
    submitted_count: int = 0
    succeeded_count: int = 0
    failed_count: int = 0
    skipped_count: int = 0
    concurrency: int = 1
    completed_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None

    def validate(self) -> bool:
        """Validate run invariants.

        Validation rules:
            - submitted_count + skipped_count == listed_count
            - succeeded_count + failed_count == submitted_count once draining is over
            - completed_at must be after started_at

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.submitted_count + self.skipped_count != self.listed_count:
            raise ValueError("Submitted and skipped counts don't match listed total")

        if self.status in (RunStatus.COMPLETED, RunStatus.PARTIAL, RunStatus.FAILED):
            if self.succeeded_count + self.failed_count != self.submitted_count:
                raise ValueError("Completion counts don't match submitted total")

        if self.completed_at and self.completed_at < self.started_at:
            raise ValueError("Completion time before start time")

        return True

    def finish(self, completed_at: datetime) -> None:
        """Mark the run as drained and derive the final status.

        Args:
            completed_at: When the last completion was received
        """
        if self.failed_count > 0:
            if self.succeeded_count > 0:
                self.status = RunStatus.PARTIAL
            else:
                self.status = RunStatus.FAILED
        else:
            self.status = RunStatus.COMPLETED

        self.completed_at = completed_at
        self.duration_seconds = (completed_at - self.started_at).total_seconds()
