"""Resource collectors.

Each collector performs one listing call per run and returns Resource
snapshots with already-normalized creation times.
"""

from __future__ import annotations

from .base import BaseResourceCollector, ResourceCollectionError
from .image_collector import ImageCollector
from .volume_collector import VolumeCollector

__all__ = [
    "BaseResourceCollector",
    "ResourceCollectionError",
    "ImageCollector",
    "VolumeCollector",
]
