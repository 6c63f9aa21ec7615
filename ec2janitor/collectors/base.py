"""Base class for resource collectors."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List

from ..models.resource import Resource


class ResourceCollectionError(Exception):
    """Raised when resources cannot be listed or the provider returns bad data."""


class BaseResourceCollector(ABC):
    """Lists deletion candidates of one resource type.

    Collectors are called once per run; any failure is fatal for the run and
    surfaces as ResourceCollectionError.
    """

    def __init__(self, client: Any) -> None:
        """Initialize collector.

        Args:
            client: boto3 EC2 client
        """
        self.client = client
        self.logger = logging.getLogger(self.__class__.__module__)

    @property
    @abstractmethod
    def resource_type(self) -> str:
        """AWS resource type produced by this collector."""

    @abstractmethod
    def collect(self) -> List[Resource]:
        """List resources.

        Returns:
            List of Resource snapshots

        Raises:
            ResourceCollectionError: If the listing call fails
        """
