"""EBS volume collector."""

from __future__ import annotations

from datetime import datetime
from typing import List

from botocore.exceptions import BotoCoreError, ClientError

from ..models.resource import VOLUME_RESOURCE_TYPE, Resource
from .base import BaseResourceCollector, ResourceCollectionError


class VolumeCollector(BaseResourceCollector):
    """Collector for EBS volumes in the client's region."""

    @property
    def resource_type(self) -> str:
        return VOLUME_RESOURCE_TYPE

    def collect(self) -> List[Resource]:
        """Collect EBS volumes.

        Returns:
            List of volume resources

        Raises:
            ResourceCollectionError: If DescribeVolumes fails or a volume lacks
                CreateTime or State
        """
        resources = []

        try:
            paginator = self.client.get_paginator("describe_volumes")

            for page in paginator.paginate():
                for volume in page.get("Volumes", []):
                    volume_id = volume["VolumeId"]
                    created_at = volume.get("CreateTime")
                    if not isinstance(created_at, datetime):
                        raise ResourceCollectionError(f"{volume_id}: malformed CreateTime {created_at!r}")
                    state = volume.get("State")
                    if not state:
                        raise ResourceCollectionError(f"{volume_id}: missing State")

                    tags = {tag["Key"]: tag["Value"] for tag in volume.get("Tags", [])}
                    resources.append(
                        Resource(
                            resource_id=volume_id,
                            created_at=created_at,
                            name=tags.get("Name"),
                            state=state,
                            resource_type=VOLUME_RESOURCE_TYPE,
                        )
                    )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            raise ResourceCollectionError(f"DescribeVolumes failed: {error_code}") from e
        except BotoCoreError as e:
            raise ResourceCollectionError(f"DescribeVolumes failed: {e}") from e

        self.logger.debug(f"Collected {len(resources)} volumes")
        return resources
