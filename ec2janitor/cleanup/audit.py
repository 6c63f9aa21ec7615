"""Audit storage for cleanup runs.

Stores and retrieves run logs in YAML format.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import yaml

from ..models.cleanup_run import CleanupRun
from ..models.deletion_record import DeletionRecord


def _iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class AuditStorage:
    """Cleanup run audit log storage.

    Storage structure:
        <storage_dir>/
            2026/
                10/
                    run-run_123.yaml

    Attributes:
        storage_dir: Base directory for audit logs
    """

    def __init__(self, storage_dir: Optional[str] = None) -> None:
        """Initialize audit storage.

        Args:
            storage_dir: Base directory for audit logs (default: ~/.ec2janitor/audit-logs)
        """
        if storage_dir is None:
            storage_dir = str(Path.home() / ".ec2janitor" / "audit-logs")

        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def log_run(self, run: CleanupRun, records: List[DeletionRecord]) -> Path:
        """Write a run and its records to a YAML file.

        Overwrites an existing log with the same run ID.

        Args:
            run: Cleanup run summary
            records: Deletion records for the run

        Returns:
            Path of the written audit file
        """
        year_month_dir = self.storage_dir / str(run.started_at.year) / f"{run.started_at.month:02d}"
        year_month_dir.mkdir(parents=True, exist_ok=True)

        audit_data = {
            "metadata": {
                "version": "1.0",
                "log_type": "retention_cleanup",
                "created_at": _iso(datetime.now(timezone.utc)),
            },
            "run": {
                "run_id": run.run_id,
                "resource_type": run.resource_type,
                "mode": run.mode.value,
                "status": run.status.value,
                "concurrency": run.concurrency,
                "listed_count": run.listed_count,
                "submitted_count": run.submitted_count,
                "succeeded_count": run.succeeded_count,
                "failed_count": run.failed_count,
                "skipped_count": run.skipped_count,
                "started_at": _iso(run.started_at),
                "completed_at": _iso(run.completed_at),
                "duration_seconds": run.duration_seconds,
            },
            "records": [record.to_dict() for record in records],
        }

        audit_file = year_month_dir / f"run-{run.run_id}.yaml"
        with open(audit_file, "w") as f:
            yaml.safe_dump(audit_data, f, default_flow_style=False, sort_keys=False)

        return audit_file

    def get_run(self, run_id: str) -> Optional[dict]:
        """Retrieve a run audit log by ID.

        Args:
            run_id: Run ID to retrieve

        Returns:
            Audit log dictionary if found, None otherwise
        """
        for audit_file in self.storage_dir.glob(f"*/*/run-{run_id}.yaml"):
            with open(audit_file, "r") as f:
                return yaml.safe_load(f)

        return None

    def query_runs(self, since: Optional[datetime] = None, until: Optional[datetime] = None) -> List[dict]:
        """Query runs started within a date range.

        Args:
            since: Start date (inclusive), None for all
            until: End date (inclusive), None for all

        Returns:
            List of run audit logs matching criteria, oldest directory first
        """
        results = []

        for audit_file in sorted(self.storage_dir.glob("*/*/run-*.yaml")):
            with open(audit_file, "r") as f:
                audit_data = yaml.safe_load(f)

            started_at = datetime.fromisoformat(audit_data["run"]["started_at"])

            if since and started_at < _as_utc(since):
                continue
            if until and started_at > _as_utc(until):
                continue

            results.append(audit_data)

        return results


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
