"""Resource model.

Point-in-time view of a single EC2 resource that is a candidate for deletion.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

IMAGE_RESOURCE_TYPE = "AWS::EC2::Image"
VOLUME_RESOURCE_TYPE = "AWS::EC2::Volume"


@dataclass(frozen=True)
class Resource:
    """Deletion candidate.

    Attributes:
        resource_id: Resource identifier (e.g. ami-0abc..., vol-0abc...)
        created_at: Creation time, already normalized by the collector
        name: Resource name if the provider returned one (optional)
        state: Lifecycle state for state-gated resources such as volumes (optional)
        resource_type: AWS resource type (e.g. "AWS::EC2::Volume")
    """

    resource_id: str
    created_at: datetime
    name: Optional[str] = None
    state: Optional[str] = None
    resource_type: str = IMAGE_RESOURCE_TYPE

    @property
    def created_at_utc(self) -> datetime:
        """Creation time as an aware UTC datetime (naive values are read as UTC)."""
        if self.created_at.tzinfo is None:
            return self.created_at.replace(tzinfo=timezone.utc)
        return self.created_at.astimezone(timezone.utc)

    @property
    def display_name(self) -> str:
        return self.name if self.name else "No name specified"
