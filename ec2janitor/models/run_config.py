"""Run configuration model.

Immutable settings that drive a single cleanup run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import FrozenSet, Iterable


@dataclass(frozen=True)
class RunConfig:
    """Run configuration entity.

    Built once at run start and shared read-only by the policy, the worker
    pool and the deleter.

    Validation rules:
        - concurrency must be >= 1
        - retention must not be negative

    Attributes:
        exclude_ids: Resource IDs that are never deleted
        retention: Maximum age a resource may reach before it is delete-eligible
        concurrency: Number of worker threads
        dry_run: Invoke deletions with DryRun=True so nothing is mutated
    """

    retention: timedelta
    exclude_ids: FrozenSet[str] = field(default_factory=frozenset)
    concurrency: int = 1
    dry_run: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.exclude_ids, frozenset):
            object.__setattr__(self, "exclude_ids", frozenset(self.exclude_ids))
        self.validate()

    def validate(self) -> bool:
        """Validate configuration invariants.

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.concurrency < 1:
            raise ValueError(f"Concurrency must be at least 1, got {self.concurrency}")

        if self.retention < timedelta(0):
            raise ValueError("Retention duration cannot be negative")

        return True

    @property
    def retention_seconds(self) -> int:
        return int(self.retention.total_seconds())

    @classmethod
    def from_values(
        cls,
        retention_seconds: int,
        exclude_ids: Iterable[str] = (),
        concurrency: int = 1,
        dry_run: bool = True,
    ) -> RunConfig:
        """Build a RunConfig from plain values.

        Args:
            retention_seconds: Retention duration in seconds
            exclude_ids: Resource IDs to exclude
            concurrency: Number of worker threads
            dry_run: Dry-run flag

        Returns:
            RunConfig instance
        """
        return cls(
            retention=timedelta(seconds=retention_seconds),
            exclude_ids=frozenset(exclude_ids),
            concurrency=concurrency,
            dry_run=dry_run,
        )
