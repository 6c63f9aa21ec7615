"""Deletion record model.

Outcome of evaluating and, where eligible, deleting a single resource.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class DeletionStatus(Enum):
    """Individual resource deletion status."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class DeletionRecord:
    """Deletion record entity.

    One record exists per listed resource. Eligible resources get exactly one
    record from the worker pool once their job has been handled, whether the
    delete call succeeded or not. Ineligible resources get a skipped record
    from the cleaner and never reach the pool.

    Validation rules:
        - status=succeeded: no error_code or skip_reason
        - status=failed: requires error_code
        - status=skipped: requires skip_reason

    Attributes:
        resource_id: Resource identifier
        status: Outcome (succeeded, failed, skipped)
        dry_run: Whether the delete call was issued in dry-run mode
        error_code: AWS error code or exception name if failed (optional)
        error_message: Human-readable error if failed (optional)
        skip_reason: Why the resource was not submitted (optional)
        timestamp: When the outcome was recorded (UTC)
    """

    resource_id: str
    status: DeletionStatus
    dry_run: bool = False
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    skip_reason: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def succeeded(self) -> bool:
        return self.status == DeletionStatus.SUCCEEDED

    def validate(self) -> bool:
        """Validate record invariants.

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.status == DeletionStatus.FAILED:
            if not self.error_code:
                raise ValueError("Failed status requires error_code")
        elif self.status == DeletionStatus.SKIPPED:
            if not self.skip_reason:
                raise ValueError("Skipped status requires skip_reason")
        elif self.status == DeletionStatus.SUCCEEDED:
            if self.error_code or self.skip_reason:
                raise ValueError("Succeeded status cannot have error or skip reason")

        return True

    def to_dict(self) -> dict:
        return {
            "resource_id": self.resource_id,
            "status": self.status.value,
            "dry_run": self.dry_run,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "skip_reason": self.skip_reason,
            "timestamp": self.timestamp.isoformat(),
        }
