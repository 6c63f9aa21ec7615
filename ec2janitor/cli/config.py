"""Configuration file loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import yaml

from ..models.run_config import RunConfig

DEFAULT_CONFIG_PATH = "config.yaml"
SECONDS_PER_DAY = 86400


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or invalid."""


# key -> accepted aliases, first match wins
_KEY_ALIASES = {
    "exclude_ids": ("exclude_ids", "exclude_ami"),
    "concurrency": ("concurrency", "no_of_executer"),
    "dry_run": ("dry_run", "dryrun"),
}


def _lookup(data: dict, key: str, default: Any = None) -> Any:
    for alias in _KEY_ALIASES.get(key, (key,)):
        if alias in data and data[alias] is not None:
            return data[alias]
    return default


@dataclass
class Config:
    """Cleanup configuration.

    Attributes:
        retention_seconds: Maximum resource age in seconds
        exclude_ids: Resource IDs that are never deleted
        concurrency: Number of worker threads
        dry_run: Issue delete calls with DryRun=True
        aws_region: AWS region (optional)
        aws_credential_file: Shared credentials file path (optional)
        aws_credential_profile: Profile within the credentials file (optional)
        aws_user_id: Owner account ID used to scope image listing (optional)
        log_location: Log file path (optional)
        audit_dir: Directory for YAML run logs (optional)
        log_level: Console log level
    """

    retention_seconds: int
    exclude_ids: List[str] = field(default_factory=list)
    concurrency: int = 1
    dry_run: bool = True
    aws_region: Optional[str] = None
    aws_credential_file: Optional[str] = None
    aws_credential_profile: Optional[str] = None
    aws_user_id: Optional[str] = None
    log_location: Optional[str] = None
    audit_dir: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def load(cls, path: str = DEFAULT_CONFIG_PATH) -> Config:
        """Load configuration from a YAML file.

        Args:
            path: Config file path

        Returns:
            Config instance

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        config_path = Path(path)
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {config_path}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        """Build configuration from a parsed mapping.

        Retention comes from "duration" (seconds) or "retention_days"; exactly
        one of them must be set.

        Raises:
            ConfigError: If a value is missing or has the wrong type
        """
        duration = data.get("duration")
        retention_days = data.get("retention_days")
        if duration is not None and retention_days is not None:
            raise ConfigError("Set either 'duration' or 'retention_days', not both")
        if duration is None and retention_days is None:
            raise ConfigError("Missing retention: set 'duration' (seconds) or 'retention_days'")

        if duration is not None:
            retention_seconds = _as_int(duration, "duration")
        else:
            retention_seconds = _as_int(retention_days, "retention_days") * SECONDS_PER_DAY
        if retention_seconds < 0:
            raise ConfigError("Retention cannot be negative")

        exclude_ids = _lookup(data, "exclude_ids", [])
        if not isinstance(exclude_ids, list) or not all(isinstance(i, str) for i in exclude_ids):
            raise ConfigError("'exclude_ids' must be a list of resource IDs")

        concurrency = _as_int(_lookup(data, "concurrency", 1), "no_of_executer")
        if concurrency < 1:
            raise ConfigError(f"'no_of_executer' must be at least 1, got {concurrency}")

        dry_run = _lookup(data, "dry_run", True)
        if not isinstance(dry_run, bool):
            raise ConfigError("'dryrun' must be true or false")

        return cls(
            retention_seconds=retention_seconds,
            exclude_ids=list(exclude_ids),
            concurrency=concurrency,
            dry_run=dry_run,
            aws_region=_as_optional_str(data.get("aws_region")),
            aws_credential_file=_as_optional_str(data.get("aws_credential_file")),
            aws_credential_profile=_as_optional_str(data.get("aws_credential_profile")),
            aws_user_id=_as_optional_str(data.get("aws_user_id")),
            log_location=_as_optional_str(data.get("log_location")),
            audit_dir=_as_optional_str(data.get("audit_dir")),
            log_level=str(data.get("log_level", "INFO")).upper(),
        )

    def to_run_config(self, dry_run: Optional[bool] = None) -> RunConfig:
        """Build the immutable run configuration.

        Args:
            dry_run: Override the file's dry-run value (optional)
        """
        return RunConfig.from_values(
            retention_seconds=self.retention_seconds,
            exclude_ids=self.exclude_ids,
            concurrency=self.concurrency,
            dry_run=self.dry_run if dry_run is None else dry_run,
        )


def _as_int(value: Any, key: str) -> int:
    # bool is an int subclass; "dryrun: true" pasted under the wrong key should fail
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    return value


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)
