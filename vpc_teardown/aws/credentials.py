"""AWS credential validation."""

from __future__ import annotations

import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError, ProfileNotFound

from .client import create_boto_client

logger = logging.getLogger(__name__)


class CredentialValidationError(Exception):
    """Raised when AWS credentials are missing or rejected."""


def validate_credentials(profile_name: Optional[str] = None, region_name: Optional[str] = None) -> dict:
    """Validate credentials by asking STS who we are.

    Args:
        profile_name: AWS profile name (optional)
        region_name: Region for the STS call (optional)

    Returns:
        Dictionary with account_id, user_id and arn

    Raises:
        CredentialValidationError: If credentials cannot be resolved or are rejected
    """
    try:
        sts = create_boto_client("sts", region_name=region_name, profile_name=profile_name)
        identity = sts.get_caller_identity()
    except ProfileNotFound as e:
        raise CredentialValidationError(f"AWS profile not found: {e}") from e
    except NoCredentialsError as e:
        raise CredentialValidationError(
            "No AWS credentials found. Configure credentials with 'aws configure' or set AWS_PROFILE."
        ) from e
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        error_message = e.response.get("Error", {}).get("Message", str(e))
        raise CredentialValidationError(f"Credentials rejected: {error_code} - {error_message}") from e
    except BotoCoreError as e:
        raise CredentialValidationError(f"Unable to validate credentials: {e}") from e

    logger.debug(f"Authenticated as {identity.get('Arn')}")
    return {
        "account_id": identity["Account"],
        "user_id": identity.get("UserId"),
        "arn": identity.get("Arn"),
    }
