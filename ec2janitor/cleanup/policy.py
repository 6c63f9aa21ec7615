"""Retention policy evaluation.

Decides whether a resource is old enough, not excluded, and in a deletable
state.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ..models.resource import VOLUME_RESOURCE_TYPE, Resource
from ..models.run_config import RunConfig

AVAILABLE_STATE = "available"

# Resource types whose lifecycle state must be available before deletion
STATEFUL_RESOURCE_TYPES = frozenset({VOLUME_RESOURCE_TYPE})


def _epoch_seconds(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


def age_seconds(resource: Resource, now: datetime) -> int:
    """Age of a resource in whole seconds.

    Both timestamps are truncated to second resolution before subtraction.
    """
    return _epoch_seconds(now) - _epoch_seconds(resource.created_at)


def is_eligible(resource: Resource, config: RunConfig, now: datetime) -> bool:
    """Check whether a resource may be deleted.

    Args:
        resource: Deletion candidate
        config: Run configuration
        now: Reference time for age calculation

    Returns:
        True if the resource is older than the retention duration, not
        excluded, and available when its type carries a
        lifecycle state
    """
    eligible, _ = RetentionPolicy(config).evaluate(resource, now)
    return eligible


class RetentionPolicy:
    """Retention policy for one run.

    Wraps an immutable RunConfig so every resource in the run is evaluated
    against the same exclusion set and retention duration.

    Attributes:
        config: Run configuration
    """

    def __init__(self, config: RunConfig) -> None:
        self.config = config

    def evaluate(self, resource: Resource, now: datetime) -> tuple[bool, Optional[str]]:
        """Evaluate a resource against the policy.

        Exclusion is checked first so excluded resources are reported as such
        regardless of age.

        Args:
            resource: Deletion candidate
            now: Reference time for age calculation

        Returns:
            Tuple of (eligible, reason)
                eligible: True if the resource should be deleted
                reason: Human-readable reason it was skipped, None if eligible
        """
        if resource.resource_id in self.config.exclude_ids:
            return False, "Excluded by configuration"

        if resource.state is None and resource.resource_type in STATEFUL_RESOURCE_TYPES:
            return False, "State is unknown, not available"
        if resource.state is not None and resource.state != AVAILABLE_STATE:
            return False, f"State is {resource.state}, not {AVAILABLE_STATE}"

        age = age_seconds(resource, now)
        if age <= self.config.retention_seconds:
            return False, f"Age {age}s within retention of {self.config.retention_seconds}s"

        return True, None

    def is_eligible(self, resource: Resource, now: datetime) -> bool:
        eligible, _ = self.evaluate(resource, now)
        return eligible
