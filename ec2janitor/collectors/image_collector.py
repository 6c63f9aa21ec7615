"""AMI collector."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..models.resource import IMAGE_RESOURCE_TYPE, Resource
from .base import BaseResourceCollector, ResourceCollectionError

# DescribeImages returns CreationDate as text, e.g. "2024-03-01T12:30:45.000Z"
CREATION_DATE_FORMATS = ("%Y-%m-%dT%H:%M:%S.%fZ", "%Y-%m-%dT%H:%M:%SZ")


def parse_creation_date(value: Optional[str]) -> datetime:
    """Parse an AMI CreationDate string into an aware UTC datetime.

    Args:
        value: CreationDate as returned by DescribeImages

    Returns:
        Creation time in UTC, truncated to whole seconds

    Raises:
        ResourceCollectionError: If the value is missing or malformed
    """
    if not value:
        raise ResourceCollectionError("Image is missing CreationDate")

    for fmt in CREATION_DATE_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return parsed.replace(microsecond=0, tzinfo=timezone.utc)

    raise ResourceCollectionError(f"Malformed image CreationDate: {value!r}")


class ImageCollector(BaseResourceCollector):
    """Collector for AMIs owned by a given account."""

    def __init__(self, client: Any, owner_id: Optional[str] = None) -> None:
        """Initialize collector.

        Args:
            client: boto3 EC2 client
            owner_id: Owning account ID (default: "self")
        """
        super().__init__(client)
        self.owner_id = owner_id or "self"

    @property
    def resource_type(self) -> str:
        return IMAGE_RESOURCE_TYPE

    def collect(self) -> List[Resource]:
        """Collect AMIs owned by the configured owner.

        Returns:
            List of image resources

        Raises:
            ResourceCollectionError: If DescribeImages fails or returns a bad CreationDate
        """
        try:
            response = self.client.describe_images(Owners=[self.owner_id])
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            raise ResourceCollectionError(f"DescribeImages failed: {error_code}") from e
        except BotoCoreError as e:
            raise ResourceCollectionError(f"DescribeImages failed: {e}") from e

        resources = []
        for image in response.get("Images", []):
            image_id = image["ImageId"]
            try:
                created_at = parse_creation_date(image.get("CreationDate"))
            except ResourceCollectionError as e:
                raise ResourceCollectionError(f"{image_id}: {e}") from e

            resources.append(
                Resource(
                    resource_id=image_id,
                    created_at=created_at,
                    name=image.get("Name"),
                    resource_type=IMAGE_RESOURCE_TYPE,
                )
            )

        self.logger.debug(f"Collected {len(resources)} images owned by {self.owner_id}")
        return resources
