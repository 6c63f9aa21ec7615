"""EC2 resource deletion.

Maps resource types to their EC2 delete/deregister calls. A single attempt is
made per call; failures are raised to the worker pool.
"""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ..models.resource import IMAGE_RESOURCE_TYPE, VOLUME_RESOURCE_TYPE

logger = logging.getLogger(__name__)

# EC2 answers a DryRun request that would have succeeded with this error code
DRY_RUN_SUCCESS_CODE = "DryRunOperation"


class DeletionError(Exception):
    """Raised when a single delete call fails.

    Attributes:
        resource_id: Resource that could not be deleted
        error_code: AWS error code (or exception class name)
        error_message: Human-readable cause
    """

    def __init__(self, resource_id: str, error_code: str, error_message: str) -> None:
        super().__init__(f"Failed to delete {resource_id}: {error_code} - {error_message}")
        self.resource_id = resource_id
        self.error_code = error_code
        self.error_message = error_message


class ResourceDeleter:
    """EC2 resource deleter.

    One instance serves every worker thread of a run; boto3 clients are
    thread-safe.
    """

    # Deletion method mapping: resource_type -> (method, id_field)
    DELETION_METHODS = {
        IMAGE_RESOURCE_TYPE: ("deregister_image", "ImageId"),
        VOLUME_RESOURCE_TYPE: ("delete_volume", "VolumeId"),
    }

    def __init__(self, client: Any, resource_type: str) -> None:
        """Initialize resource deleter.

        Args:
            client: boto3 EC2 client
            resource_type: AWS resource type handled by this deleter

        Raises:
            ValueError: If the resource type is not supported
        """
        if resource_type not in self.DELETION_METHODS:
            raise ValueError(f"Unsupported resource type: {resource_type}")

        self.client = client
        self.resource_type = resource_type

    def __call__(self, resource_id: str, dry_run: bool) -> None:
        self.delete(resource_id, dry_run)

    def delete(self, resource_id: str, dry_run: bool) -> None:
        """Delete a resource.

        Args:
            resource_id: Resource identifier
            dry_run: Send the request with DryRun=True so nothing is mutated

        Raises:
            DeletionError: If the call fails (not found, already deleted,
                permission denied, ...)
        """
        method, id_field = self.DELETION_METHODS[self.resource_type]

        try:
            getattr(self.client, method)(**{id_field: resource_id, "DryRun": dry_run})
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            error_message = e.response.get("Error", {}).get("Message", str(e))

            if dry_run and error_code == DRY_RUN_SUCCESS_CODE:
                logger.info(f"[dry-run] {method} would have succeeded for {resource_id}")
                return

            raise DeletionError(resource_id, error_code, error_message) from e
        except BotoCoreError as e:
            raise DeletionError(resource_id, e.__class__.__name__, str(e)) from e

        if dry_run:
            # Only reachable against endpoints that ignore DryRun (e.g. stubs)
            logger.info(f"[dry-run] {method} accepted for {resource_id}")
        else:
            logger.info(f"Successfully deleted {self.resource_type}: {resource_id}")
