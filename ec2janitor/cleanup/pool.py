"""Fixed-size worker pool for delete calls.

Workers are long-lived threads sharing one job queue and one result queue.
Submitting never blocks, so every eligible resource can be queued before the
first result is consumed and up to ``worker_count`` deletions run at once.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Iterator, List, Optional

from ..models.deletion_record import DeletionRecord, DeletionStatus
from .deleter import DeletionError

logger = logging.getLogger(__name__)

DeleteFn = Callable[[str, bool], None]

# Close marker; one is queued per worker
_STOP = object()


class WorkerPool:
    """Pool of worker threads invoking a delete function per job.

    Every submitted job produces exactly one DeletionRecord on the result
    queue, whether or not the delete call raised.

    Attributes:
        worker_count: Number of worker threads
        delete_fn: Callable invoked as delete_fn(resource_id, dry_run)
        dry_run: Dry-run flag passed to every call
    """

    def __init__(self, worker_count: int, delete_fn: DeleteFn, dry_run: bool = True) -> None:
        """Initialize worker pool.

        Args:
            worker_count: Number of worker threads (>= 1)
            delete_fn: Delete callable; raising marks the job as failed
            dry_run: Dry-run flag passed to every call

        Raises:
            ValueError: If worker_count is less than 1
        """
        if worker_count < 1:
            raise ValueError(f"Worker count must be at least 1, got {worker_count}")

        self.worker_count = worker_count
        self.delete_fn = delete_fn
        self.dry_run = dry_run

        self._jobs: queue.Queue = queue.Queue()
        self._results: queue.Queue = queue.Queue()
        self._workers: List[threading.Thread] = []
        self._started = False
        self._closed = False
        self._submitted = 0
        self._received = 0

    def __enter__(self) -> WorkerPool:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close(cancel_pending=exc_type is not None)

    @property
    def submitted_count(self) -> int:
        return self._submitted

    @property
    def outstanding_count(self) -> int:
        """Jobs submitted whose completion has not been consumed yet."""
        return self._submitted - self._received

    def start(self) -> None:
        """Start the worker threads.

        Raises:
            RuntimeError: If the pool was already started
        """
        if self._started:
            raise RuntimeError("Worker pool already started")

        for worker_id in range(1, self.worker_count + 1):
            worker = threading.Thread(
                target=self._worker_loop,
                args=(worker_id,),
                name=f"ec2janitor-worker-{worker_id}",
                daemon=True,
            )
            worker.start()
            self._workers.append(worker)

        self._started = True
        logger.debug(f"Started {self.worker_count} workers (dry_run={self.dry_run})")

    def submit(self, resource_id: str) -> None:
        """Queue a resource ID for deletion without waiting for a worker.

        Raises:
            RuntimeError: If the pool is not started or already closed
        """
        if not self._started:
            raise RuntimeError("Worker pool not started")
        if self._closed:
            raise RuntimeError("Worker pool is closed")

        self._jobs.put_nowait(resource_id)
        self._submitted += 1

    def results(self, count: Optional[int] = None) -> Iterator[DeletionRecord]:
        """Yield completion records as workers publish them.

        Blocks until each record is available. Order follows completion, not
        submission.

        Args:
            count: Number of records to wait for (default: all outstanding)

        Raises:
            ValueError: If count exceeds the number of outstanding jobs
        """
        outstanding = self.outstanding_count
        if count is None:
            count = outstanding
        elif count > outstanding:
            raise ValueError(f"Requested {count} results but only {outstanding} jobs are outstanding")

        for _ in range(count):
            record = self._results.get()
            self._received += 1
            yield record

    def close(self, cancel_pending: bool = False) -> None:
        """Signal that no more jobs will be submitted and wait for workers to exit.

        Queued jobs are still processed before the workers stop; their
        records stay available through results(). Leaving a ``with`` block
        on an exception closes with ``cancel_pending=True``. Calling close()
        more than once is a no-op.

        Args:
            cancel_pending: Discard jobs no worker has picked up yet. Deletes
                already in progress still finish.
        """
        if self._closed:
            return
        self._closed = True

        if cancel_pending:
            cancelled = self._cancel_pending()
            if cancelled:
                logger.warning(f"Cancelled {cancelled} queued deletions")

        for _ in self._workers:
            self._jobs.put(_STOP)
        for worker in self._workers:
            worker.join()

        logger.debug(f"Worker pool closed after {self._submitted} jobs")

    def _cancel_pending(self) -> int:
        cancelled = 0
        while True:
            try:
                self._jobs.get_nowait()
            except queue.Empty:
                break
            cancelled += 1
        self._submitted -= cancelled
        return cancelled

    def _worker_loop(self, worker_id: int) -> None:
        while True:
            job = self._jobs.get()
            if job is _STOP:
                return
            self._results.put(self._process(worker_id, job))

    def _process(self, worker_id: int, resource_id: str) -> DeletionRecord:
        logger.info(f"Worker {worker_id} deleting {resource_id}")

        try:
            self.delete_fn(resource_id, self.dry_run)
        except DeletionError as e:
            logger.error(f"Worker {worker_id} failed to delete {resource_id}: {e.error_code} - {e.error_message}")
            return DeletionRecord(
                resource_id=resource_id,
                status=DeletionStatus.FAILED,
                dry_run=self.dry_run,
                error_code=e.error_code,
                error_message=e.error_message,
            )
        except Exception as e:
            logger.error(f"Worker {worker_id} hit unexpected error deleting {resource_id}: {e}")
            return DeletionRecord(
                resource_id=resource_id,
                status=DeletionStatus.FAILED,
                dry_run=self.dry_run,
                error_code=e.__class__.__name__,
                error_message=str(e),
            )

        return DeletionRecord(
            resource_id=resource_id,
            status=DeletionStatus.SUCCEEDED,
            dry_run=self.dry_run,
        )
