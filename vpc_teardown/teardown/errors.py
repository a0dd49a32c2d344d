"""Teardown orchestration errors."""

from __future__ import annotations


class TeardownError(Exception):
    """Base class for orchestration failures."""


class RegionDiscoveryError(TeardownError):
    """Region list could not be retrieved; nothing can run."""


class DefaultVpcUnavailableError(TeardownError):
    """A region's default VPC id could not be resolved."""

    def __init__(self, region: str, reason: str) -> None:
        self.region = region
        self.reason = reason
        super().__init__(reason)
