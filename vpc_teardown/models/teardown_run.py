"""Teardown run models.

Per-region results and the aggregate of one orchestration run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from .teardown_outcome import TeardownOutcome


class RegionStatus(Enum):
    """Region teardown status."""

    SKIPPED = "skipped"
    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class RegionTeardown:
    """Result of tearing down one region's default VPC.

    Status derivation:
        skipped   - default VPC was never resolved
        completed - no failed outcomes and no phase errors
        partial   - some failures, some successes
        failed    - failures and nothing succeeded

    Attributes:
        region: AWS region
        vpc_id: Resolved default VPC id (None if resolution failed)
        outcomes: Deletion outcomes in the order they were attempted
        errors: Region-abandoning and phase-skipping error messages
    """

    region: str
    vpc_id: Optional[str] = None
    outcomes: list[TeardownOutcome] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def succeeded_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.is_success)

    @property
    def failed_count(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.is_success)

    @property
    def status(self) -> RegionStatus:
        if self.vpc_id is None:
            return RegionStatus.SKIPPED
        if self.failed_count == 0 and not self.errors:
            return RegionStatus.COMPLETED
        if self.succeeded_count > 0:
            return RegionStatus.PARTIAL
        return RegionStatus.FAILED

    @property
    def has_failures(self) -> bool:
        return self.failed_count > 0 or bool(self.errors)


@dataclass
class TeardownRun:
    """Aggregate of one orchestration run across all regions.

    Attributes:
        regions: Per-region results, sorted by region name
        started_at: When the run started (UTC)
        completed_at: When the last region finished (optional)
    """

    regions: list[RegionTeardown]
    started_at: datetime
    completed_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    @property
    def succeeded_count(self) -> int:
        return sum(region.succeeded_count for region in self.regions)

    @property
    def failed_count(self) -> int:
        return sum(region.failed_count for region in self.regions)

    @property
    def error_count(self) -> int:
        return sum(len(region.errors) for region in self.regions)

    @property
    def skipped_regions(self) -> list[str]:
        return [region.region for region in self.regions if region.status == RegionStatus.SKIPPED]

    @property
    def has_failures(self) -> bool:
        return any(region.has_failures for region in self.regions)

    def get_region(self, region: str) -> Optional[RegionTeardown]:
        """Look up a region's result by name."""
        for result in self.regions:
            if result.region == region:
                return result
        return None

    def validate(self) -> bool:
        """Validate run invariants.

        Validation rules:
            - completed_at must not be before started_at
            - each region appears at most once
            - every outcome is valid and belongs to its region

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.completed_at and self.completed_at < self.started_at:
            raise ValueError("Completion time before start time")

        names = [region.region for region in self.regions]
        if len(names) != len(set(names)):
            raise ValueError("Duplicate region in run")

        for region in self.regions:
            for outcome in region.outcomes:
                outcome.validate()
                if outcome.region != region.region:
                    raise ValueError(f"Outcome for {outcome.resource_id} recorded under wrong region")

        return True
