"""Data models for resources, run configuration and deletion outcomes."""
