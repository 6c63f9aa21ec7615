"""Retention cleaner.

Coordinates a cleanup run: list resources once, evaluate each against the
retention policy, queue eligible ones on the worker pool, then drain one
completion per queued job.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..collectors.base import BaseResourceCollector
from ..models.cleanup_run import CleanupRun, RunMode, RunStatus
from ..models.deletion_record import DeletionRecord, DeletionStatus
from ..models.run_config import RunConfig
from .audit import AuditStorage
from .policy import RetentionPolicy
from .pool import DeleteFn, WorkerPool

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RetentionCleaner:
    """Cleanup run orchestrator.

    Listing happens before any worker is started, so a listing failure aborts
    the run with no deletions attempted. Once enumeration starts every listed
    resource ends up either skipped or completed; a failing delete call never
    aborts the run.

    Attributes:
        collector: Lists deletion candidates
        delete_fn: Delete callable handed to the worker pool
        config: Run configuration
        audit_storage: Where to record the run (optional)
    """

    def __init__(
        self,
        collector: BaseResourceCollector,
        delete_fn: DeleteFn,
        config: RunConfig,
        audit_storage: Optional[AuditStorage] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize retention cleaner.

        Args:
            collector: Resource collector for the run's resource type
            delete_fn: Delete callable, invoked as delete_fn(resource_id, dry_run)
            config: Run configuration
            audit_storage: Audit storage for run logs (optional)
            clock: Returns the current time; the start time is the age reference
        """
        self.collector = collector
        self.delete_fn = delete_fn
        self.config = config
        self.audit_storage = audit_storage
        self.clock = clock
        self.policy = RetentionPolicy(config)

    def run(self) -> tuple[CleanupRun, List[DeletionRecord]]:
        """Execute a cleanup run.

        Returns:
            Tuple of (run summary, one record per listed resource)

        Raises:
            ResourceCollectionError: If resources cannot be listed
        """
        started_at = self.clock()

        resources = self.collector.collect()

        run = CleanupRun(
            run_id=f"run_{uuid.uuid4()}",
            resource_type=self.collector.resource_type,
            started_at=started_at,
            mode=RunMode.DRY_RUN if self.config.dry_run else RunMode.EXECUTE,
            status=RunStatus.ENUMERATING,
            listed_count=len(resources),
            concurrency=self.config.concurrency,
        )
        records: List[DeletionRecord] = []

        logger.info(
            f"Evaluating {len(resources)} {run.resource_type} resources "
            f"(retention={self.config.retention_seconds}s, workers={self.config.concurrency}, mode={run.mode.value})"
        )

        with WorkerPool(self.config.concurrency, self.delete_fn, dry_run=self.config.dry_run) as pool:
            for resource in resources:
                eligible, reason = self.policy.evaluate(resource, started_at)

                if not eligible:
                    logger.debug(f"Skipping {resource.resource_id}: {reason}")
                    run.skipped_count += 1
                    records.append(
                        DeletionRecord(
                            resource_id=resource.resource_id,
                            status=DeletionStatus.SKIPPED,
                            dry_run=self.config.dry_run,
                            skip_reason=reason,
                        )
                    )
                    continue

                logger.info(
                    f"Queueing {resource.resource_id} for deletion "
                    f"(created {resource.created_at_utc.isoformat()}, {resource.display_name})"
                )
                pool.submit(resource.resource_id)
                run.submitted_count += 1

            run.status = RunStatus.DRAINING
            for record in pool.results():
                if record.succeeded:
                    run.succeeded_count += 1
                else:
                    run.failed_count += 1
                records.append(record)

        run.finish(self.clock())
        logger.info(
            f"Run {run.run_id} {run.status.value}: {run.succeeded_count} succeeded, "
            f"{run.failed_count} failed, {run.skipped_count} skipped"
        )

        if self.audit_storage is not None:
            self.audit_storage.log_run(run, records)

        return run, records
