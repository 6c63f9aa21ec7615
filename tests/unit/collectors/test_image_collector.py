"""Tests for ImageCollector and CreationDate parsing."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from ec2janitor.collectors.base import ResourceCollectionError
from ec2janitor.collectors.image_collector import ImageCollector, parse_creation_date
from ec2janitor.models.resource import IMAGE_RESOURCE_TYPE
from tests.fixtures.resources import client_error


class TestParseCreationDate:
    """Test suite for parse_creation_date."""

    def test_parses_milliseconds_format(self) -> None:
        """Test the usual DescribeImages format."""
        assert parse_creation_date("2024-03-01T12:30:45.000Z") == datetime(2024, 3, 1, 12, 30, 45, tzinfo=timezone.utc)

    def test_truncates_fraction_to_seconds(self) -> None:
        """Test fractional seconds are dropped."""
        assert parse_creation_date("2024-03-01T12:30:45.999Z") == datetime(2024, 3, 1, 12, 30, 45, tzinfo=timezone.utc)

    def test_parses_without_fraction(self) -> None:
        """Test timestamps without fractional seconds."""
        assert parse_creation_date("2024-03-01T12:30:45Z") == datetime(2024, 3, 1, 12, 30, 45, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["", None, "yesterday", "2024-13-01T00:00:00.000Z", "2024-03-01 12:30:45"])
    def test_malformed_raises(self, value) -> None:
        """Test malformed values are a provider error, not coerced."""
        with pytest.raises(ResourceCollectionError):
            parse_creation_date(value)


class TestImageCollector:
    """Test suite for ImageCollector."""

    def test_collect_images(self) -> None:
        """Test images are converted to resources."""
        client = Mock()
        client.describe_images.return_value = {
            "Images": [
                {"ImageId": "ami-1", "CreationDate": "2024-01-01T00:00:00.000Z", "Name": "base", "State": "available"},
                {"ImageId": "ami-2", "CreationDate": "2024-02-01T00:00:00.000Z"},
            ]
        }
        collector = ImageCollector(client, owner_id="123456789012")

        resources = collector.collect()

        client.describe_images.assert_called_once_with(Owners=["123456789012"])
        assert [r.resource_id for r in resources] == ["ami-1", "ami-2"]
        assert resources[0].name == "base"
        assert resources[1].name is None
        assert resources[0].created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert all(r.state is None for r in resources)
        assert all(r.resource_type == IMAGE_RESOURCE_TYPE for r in resources)
        assert collector.resource_type == IMAGE_RESOURCE_TYPE

    def test_default_owner_is_self(self) -> None:
        """Test images default to the caller's own."""
        client = Mock()
        client.describe_images.return_value = {"Images": []}

        assert ImageCollector(client).collect() == []
        client.describe_images.assert_called_once_with(Owners=["self"])

    def test_api_failure_raises(self) -> None:
        """Test DescribeImages errors are fatal."""
        client = Mock()
        client.describe_images.side_effect = client_error("AuthFailure", operation="DescribeImages")

        with pytest.raises(ResourceCollectionError, match="AuthFailure"):
            ImageCollector(client).collect()

    def test_malformed_creation_date_raises(self) -> None:
        """Test one bad timestamp aborts the listing with the image ID."""
        client = Mock()
        client.describe_images.return_value = {
            "Images": [
                {"ImageId": "ami-ok", "CreationDate": "2024-01-01T00:00:00.000Z"},
                {"ImageId": "ami-bad", "CreationDate": "not-a-date"},
            ]
        }

        with pytest.raises(ResourceCollectionError, match="ami-bad"):
            ImageCollector(client).collect()
