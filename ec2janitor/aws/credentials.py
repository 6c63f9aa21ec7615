"""AWS credential validation."""

from __future__ import annotations

import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError, ProfileNotFound

from .client import create_boto_client

logger = logging.getLogger(__name__)


class CredentialValidationError(Exception):
    """Raised when AWS credentials are missing or rejected."""


def validate_credentials(
    profile_name: Optional[str] = None,
    credentials_file: Optional[str] = None,
    region_name: Optional[str] = None,
) -> dict:
    """Validate credentials by calling STS GetCallerIdentity.

    Args:
        profile_name: AWS profile name (optional)
        credentials_file: Shared credentials file path (optional)
        region_name: AWS region (optional)

    Returns:
        Dictionary with account_id, arn and user_id

    Raises:
        CredentialValidationError: If credentials cannot be loaded or are invalid
    """
    try:
        sts = create_boto_client(
            "sts",
            region_name=region_name,
            profile_name=profile_name,
            credentials_file=credentials_file,
        )
        identity = sts.get_caller_identity()
    except ProfileNotFound as e:
        raise CredentialValidationError(f"AWS profile not found: {e}") from e
    except NoCredentialsError as e:
        raise CredentialValidationError("No AWS credentials found") from e
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        error_message = e.response.get("Error", {}).get("Message", str(e))
        raise CredentialValidationError(f"{error_code}: {error_message}") from e
    except BotoCoreError as e:
        raise CredentialValidationError(str(e)) from e

    logger.debug(f"Authenticated as {identity.get('Arn')}")
    return {
        "account_id": identity["Account"],
        "arn": identity.get("Arn", ""),
        "user_id": identity.get("UserId", ""),
    }
