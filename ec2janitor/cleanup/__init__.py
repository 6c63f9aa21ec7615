"""Retention cleanup module.

This module deletes EC2 resources older than a retention duration, with an
exclusion list, dry-run mode and a bounded pool of worker threads.

Classes:
    RetentionCleaner: Main orchestrator for cleanup runs
    RetentionPolicy: Eligibility evaluation
    WorkerPool: Fixed-size pool of delete workers
    ResourceDeleter: EC2 delete/deregister calls
    AuditStorage: Run log storage and retrieval
"""

from __future__ import annotations

from .audit import AuditStorage
from .cleaner import RetentionCleaner
from .deleter import DeletionError, ResourceDeleter
from .policy import RetentionPolicy, is_eligible
from .pool import WorkerPool

__all__ = [
    "RetentionCleaner",
    "RetentionPolicy",
    "WorkerPool",
    "ResourceDeleter",
    "DeletionError",
    "AuditStorage",
    "is_eligible",
]
