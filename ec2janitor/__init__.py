"""EC2 Janitor - retention-based cleanup of stale AMIs and EBS volumes."""

__version__ = "0.1.0"
