"""Boto3 client construction."""

from __future__ import annotations

import logging
from typing import Any, Optional

import boto3

logger = logging.getLogger(__name__)


def create_boto_client(
    service_name: str,
    region_name: Optional[str] = None,
    profile_name: Optional[str] = None,
) -> Any:
    """Create a boto3 client on a fresh session.

    boto3 sessions are not thread-safe, so every caller gets its own session
    rather than sharing the default one.

    Args:
        service_name: AWS service name (e.g., "ec2")
        region_name: AWS region (optional)
        profile_name: AWS profile name (optional)

    Returns:
        Boto3 client for the service
    """
    session = boto3.Session(profile_name=profile_name, region_name=region_name)
    logger.debug(f"Creating {service_name} client for region={region_name} profile={profile_name}")
    return session.client(service_name, region_name=region_name)
