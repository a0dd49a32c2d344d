"""Teardown outcome model.

Result of a single resource deletion attempt.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..aws.errors import ErrorKind, ProviderError
from .resource_kind import ResourceKind


class OutcomeStatus(Enum):
    """Individual resource deletion status."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FailedStep(Enum):
    """Step of a deletion attempt that failed."""

    DETACH = "detach"
    DELETE = "delete"


@dataclass
class TeardownOutcome:
    """Teardown outcome entity.

    One record per attempted resource. Outcomes are transient: they feed the
    reporter and the run summary and are never persisted.

    Validation rules:
        - status=succeeded: no error fields
        - status=failed: requires error_message and failed_step
        - failed_step=detach: only valid for internet gateways

    Attributes:
        region: AWS region
        resource_id: Resource identifier
        resource_kind: Kind of resource
        status: Deletion outcome
        error_message: Flat provider error text if failed (optional)
        error_code: AWS error code if failed (optional)
        error_kind: Categorized error if failed (optional)
        failed_step: Which call failed (optional)
    """

    region: str
    resource_id: str
    resource_kind: ResourceKind
    status: OutcomeStatus
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    failed_step: Optional[FailedStep] = None

    @classmethod
    def succeeded(cls, region: str, resource_id: str, resource_kind: ResourceKind) -> "TeardownOutcome":
        return cls(region=region, resource_id=resource_id, resource_kind=resource_kind, status=OutcomeStatus.SUCCEEDED)

    @classmethod
    def failed(
        cls,
        region: str,
        resource_id: str,
        resource_kind: ResourceKind,
        error: ProviderError,
        step: FailedStep = FailedStep.DELETE,
    ) -> "TeardownOutcome":
        return cls(
            region=region,
            resource_id=resource_id,
            resource_kind=resource_kind,
            status=OutcomeStatus.FAILED,
            error_message=str(error),
            error_code=error.code,
            error_kind=error.kind,
            failed_step=step,
        )

    @property
    def is_success(self) -> bool:
        return self.status == OutcomeStatus.SUCCEEDED

    def validate(self) -> bool:
        """Validate outcome invariants.

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.status == OutcomeStatus.SUCCEEDED:
            if self.error_message or self.error_code or self.failed_step:
                raise ValueError("Succeeded status cannot have error details")
        elif self.status == OutcomeStatus.FAILED:
            if not self.error_message:
                raise ValueError("Failed status requires error_message")
            if self.failed_step is None:
                raise ValueError("Failed status requires failed_step")

        if self.failed_step == FailedStep.DETACH and self.resource_kind != ResourceKind.INTERNET_GATEWAY:
            raise ValueError("Only internet gateways have a detach step")

        return True
