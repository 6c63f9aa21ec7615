"""boto3 session and client construction."""

from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
import botocore.session

logger = logging.getLogger(__name__)


def create_session(
    region_name: Optional[str] = None,
    profile_name: Optional[str] = None,
    credentials_file: Optional[str] = None,
) -> boto3.Session:
    """Create a boto3 session.

    Args:
        region_name: AWS region (optional, falls back to the default chain)
        profile_name: Named profile from the shared credentials file (optional)
        credentials_file: Path to a shared credentials file (optional)

    Returns:
        boto3 Session
    """
    core_session = botocore.session.Session()
    if credentials_file:
        core_session.set_config_variable("credentials_file", credentials_file)

    logger.debug(
        f"Creating boto3 session (region={region_name}, profile={profile_name}, credentials_file={credentials_file})"
    )
    return boto3.Session(
        botocore_session=core_session,
        region_name=region_name,
        profile_name=profile_name,
    )


def create_boto_client(
    service_name: str,
    region_name: Optional[str] = None,
    profile_name: Optional[str] = None,
    credentials_file: Optional[str] = None,
) -> Any:
    """Create a boto3 client for a service.

    Clients are safe to share between worker threads; sessions are not, so
    the session is built here on the calling thread.

    Args:
        service_name: AWS service name (e.g. "ec2")
        region_name: AWS region (optional)
        profile_name: AWS profile name (optional)
        credentials_file: Shared credentials file path (optional)

    Returns:
        boto3 client
    """
    session = create_session(
        region_name=region_name,
        profile_name=profile_name,
        credentials_file=credentials_file,
    )
    return session.client(service_name)
