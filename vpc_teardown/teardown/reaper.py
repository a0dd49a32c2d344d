"""Per-region resource reaper.

Deletes the dependent resources of one VPC, kind by kind, then the VPC.
Every failure is recorded and reported where it happens; nothing here stops
early.
"""

from __future__ import annotations

import logging

from ..aws.errors import ProviderError
from ..aws.gateway import RegionGateway
from ..models.resource_kind import DEPENDENT_KINDS, ResourceKind
from ..models.teardown_outcome import FailedStep, TeardownOutcome
from ..models.teardown_run import RegionTeardown
from .reporter import TeardownReporter

logger = logging.getLogger(__name__)


class ResourceReaper:
    """Ordered teardown of one (region, VPC) pair.

    Phases run in DEPENDENT_KINDS order followed by the VPC itself. Each phase
    finishes all of its deletion attempts before the next one starts.

    Attributes:
        gateway: Region-scoped provider gateway
        vpc_id: VPC being torn down
        reporter: Output sink shared with other regions
        result: Accumulated outcomes and phase errors for this region
    """

    PHASES = DEPENDENT_KINDS

    def __init__(self, gateway: RegionGateway, vpc_id: str, reporter: TeardownReporter) -> None:
        self.gateway = gateway
        self.vpc_id = vpc_id
        self.reporter = reporter
        self.result = RegionTeardown(region=gateway.region, vpc_id=vpc_id)

    @property
    def region(self) -> str:
        return self.gateway.region

    def reap(self) -> RegionTeardown:
        """Run every phase, then delete the VPC.

        Returns:
            RegionTeardown with one outcome per attempted resource
        """
        for kind in self.PHASES:
            self.reap_phase(kind)
        self.remove_vpc()
        return self.result

    def reap_phase(self, kind: ResourceKind) -> list[TeardownOutcome]:
        """List and delete every resource of one kind in the VPC.

        A failed list call skips the phase and is reported once.

        Args:
            kind: Dependent resource kind

        Returns:
            Outcomes recorded during this phase
        """
        try:
            resource_ids = self.gateway.list_resource_ids(kind, self.vpc_id)
        except ProviderError as e:
            logger.info(f"Skipping {kind.noun} in {self.region} {self.vpc_id}: {e}")
            self.result.errors.append(f"failed to get {kind.noun}: {e}")
            self.reporter.phase_error(self.region, self.vpc_id, kind, str(e))
            return []

        outcomes = []
        for resource_id in resource_ids:
            if kind == ResourceKind.INTERNET_GATEWAY:
                outcome = self._remove_internet_gateway(resource_id)
            else:
                outcome = self._remove(kind, resource_id)
            outcomes.append(self._record(outcome))
        return outcomes

    def remove_vpc(self) -> TeardownOutcome:
        """Delete the VPC itself, exactly once, whatever happened before."""
        kind = ResourceKind.VPC
        try:
            self.gateway.delete_vpc(self.vpc_id)
        except ProviderError as e:
            return self._record(TeardownOutcome.failed(self.region, self.vpc_id, kind, e))
        return self._record(TeardownOutcome.succeeded(self.region, self.vpc_id, kind))

    def _remove(self, kind: ResourceKind, resource_id: str) -> TeardownOutcome:
        try:
            self.gateway.delete_resource(kind, resource_id)
        except ProviderError as e:
            return TeardownOutcome.failed(self.region, resource_id, kind, e)
        return TeardownOutcome.succeeded(self.region, resource_id, kind)

    def _remove_internet_gateway(self, internet_gateway_id: str) -> TeardownOutcome:
        kind = ResourceKind.INTERNET_GATEWAY
        try:
            self.gateway.detach_internet_gateway(internet_gateway_id, self.vpc_id)
        except ProviderError as e:
            return TeardownOutcome.failed(self.region, internet_gateway_id, kind, e, step=FailedStep.DETACH)
        return self._remove(kind, internet_gateway_id)

    def _record(self, outcome: TeardownOutcome) -> TeardownOutcome:
        if outcome.is_success:
            logger.info(f"Deleted {outcome.resource_kind.name} {outcome.resource_id} in {outcome.region}")
        else:
            logger.info(
                f"Failed to delete {outcome.resource_kind.name} {outcome.resource_id} "
                f"in {outcome.region}: {outcome.error_message}"
            )
        self.result.outcomes.append(outcome)
        self.reporter.outcome(outcome)
        return outcome
