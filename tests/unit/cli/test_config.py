"""Tests for Config loading."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from ec2janitor.cli.config import Config, ConfigError


def _write(tmp_path: Path, content: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(content)
    return str(path)


class TestConfigLoad:
    """Test suite for Config.load."""

    def test_load_image_config_with_original_keys(self, tmp_path: Path) -> None:
        """Test the original config.yaml keys are understood."""
        path = _write(
            tmp_path,
            """
exclude_ami:
  - ami-111
  - ami-222
aws_region: us-east-1
aws_credential_file: /home/ops/.aws/credentials
aws_credential_profile: default
no_of_executer: 5
duration: 2592000
aws_user_id: "123456789012"
dryrun: false
log_location: /var/log/ec2janitor.log
""",
        )

        config = Config.load(path)

        assert config.exclude_ids == ["ami-111", "ami-222"]
        assert config.concurrency == 5
        assert config.retention_seconds == 2592000
        assert config.dry_run is False
        assert config.aws_region == "us-east-1"
        assert config.aws_credential_file == "/home/ops/.aws/credentials"
        assert config.aws_credential_profile == "default"
        assert config.aws_user_id == "123456789012"
        assert config.log_location == "/var/log/ec2janitor.log"
        assert config.audit_dir is None

    def test_load_with_retention_days(self, tmp_path: Path) -> None:
        """Test retention_days is converted to seconds."""
        config = Config.load(_write(tmp_path, "retention_days: 30\nexclude_ids: [vol-1]\n"))

        assert config.retention_seconds == 30 * 86400
        assert config.exclude_ids == ["vol-1"]
        assert config.dry_run is True
        assert config.concurrency == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file is a config error."""
        with pytest.raises(ConfigError, match="not found"):
            Config.load(str(tmp_path / "nope.yaml"))

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        """Test YAML syntax errors are config errors."""
        with pytest.raises(ConfigError, match="Malformed YAML"):
            Config.load(_write(tmp_path, "duration: [1, 2\n"))

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        """Test the document must be a mapping."""
        with pytest.raises(ConfigError, match="mapping"):
            Config.load(_write(tmp_path, "- just\n- a list\n"))

    def test_empty_document(self, tmp_path: Path) -> None:
        """Test an empty file is rejected."""
        with pytest.raises(ConfigError):
            Config.load(_write(tmp_path, ""))


class TestConfigFromDict:
    """Test suite for Config.from_dict validation."""

    def test_missing_retention(self) -> None:
        """Test a retention value is required."""
        with pytest.raises(ConfigError, match="Missing retention"):
            Config.from_dict({"no_of_executer": 2})

    def test_both_retention_keys(self) -> None:
        """Test duration and retention_days are mutually exclusive."""
        with pytest.raises(ConfigError, match="not both"):
            Config.from_dict({"duration": 10, "retention_days": 1})

    @pytest.mark.parametrize("value", ["30d", 1.5, True])
    def test_non_integer_duration(self, value) -> None:
        """Test duration must be an integer."""
        with pytest.raises(ConfigError, match="integer"):
            Config.from_dict({"duration": value})

    def test_negative_duration(self) -> None:
        """Test retention cannot be negative."""
        with pytest.raises(ConfigError, match="negative"):
            Config.from_dict({"duration": -5})

    def test_zero_executers(self) -> None:
        """Test at least one worker is required."""
        with pytest.raises(ConfigError, match="at least 1"):
            Config.from_dict({"duration": 10, "no_of_executer": 0})

    def test_exclude_must_be_list_of_strings(self) -> None:
        """Test exclusion list shape."""
        with pytest.raises(ConfigError, match="exclude_ids"):
            Config.from_dict({"duration": 10, "exclude_ids": "ami-1"})

    def test_dryrun_must_be_bool(self) -> None:
        """Test dryrun must be a boolean."""
        with pytest.raises(ConfigError, match="dryrun"):
            Config.from_dict({"duration": 10, "dryrun": "yes please"})

    def test_new_key_names_take_precedence(self) -> None:
        """Test exclude_ids/concurrency/dry_run win over the original aliases."""
        config = Config.from_dict(
            {
                "duration": 10,
                "exclude_ids": ["a"],
                "exclude_ami": ["b"],
                "concurrency": 3,
                "no_of_executer": 9,
                "dry_run": False,
                "dryrun": True,
            }
        )

        assert config.exclude_ids == ["a"]
        assert config.concurrency == 3
        assert config.dry_run is False


class TestToRunConfig:
    """Test suite for Config.to_run_config."""

    def test_builds_run_config(self) -> None:
        """Test conversion to the immutable run configuration."""
        config = Config.from_dict({"duration": 3600, "exclude_ids": ["ami-1"], "no_of_executer": 4, "dryrun": False})

        run_config = config.to_run_config()

        assert run_config.retention == timedelta(hours=1)
        assert run_config.exclude_ids == frozenset({"ami-1"})
        assert run_config.concurrency == 4
        assert run_config.dry_run is False

    def test_dry_run_override(self) -> None:
        """Test the CLI override replaces the file value."""
        config = Config.from_dict({"duration": 3600, "dryrun": False})

        assert config.to_run_config(dry_run=True).dry_run is True
        assert config.to_run_config(dry_run=None).dry_run is False
