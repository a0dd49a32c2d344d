"""Teardown orchestrator.

Discovers regions, resolves each region's default VPC and runs the reaper for
every region in parallel. Regions never wait on each other; the only join is
at the end of the run.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Optional

from ..aws.errors import ProviderError
from ..aws.gateway import ProviderGateway, RegionGateway
from ..models.teardown_run import RegionTeardown, TeardownRun
from .errors import DefaultVpcUnavailableError, RegionDiscoveryError
from .reaper import ResourceReaper
from .reporter import TeardownReporter

logger = logging.getLogger(__name__)

NO_DEFAULT_VPC = "none"


class RegionResultCollector:
    """Collects region results from concurrently running tasks."""

    def __init__(self) -> None:
        self._results: list[RegionTeardown] = []
        self._lock = threading.Lock()

    def add(self, result: RegionTeardown) -> None:
        with self._lock:
            self._results.append(result)

    def results(self) -> list[RegionTeardown]:
        with self._lock:
            return sorted(self._results, key=lambda r: r.region)


def resolve_default_vpc_id(gateway: RegionGateway) -> str:
    """Resolve a region's default VPC id from the default-vpc account attribute.

    Args:
        gateway: Region-scoped gateway

    Returns:
        Default VPC id

    Raises:
        ProviderError: If the attribute lookup fails
        DefaultVpcUnavailableError: If the attribute is missing, empty or "none"
    """
    records = gateway.describe_default_vpc_attribute()
    if not records:
        raise DefaultVpcUnavailableError(gateway.region, "no default-vpc attribute returned")

    values = records[0]
    if not values:
        raise DefaultVpcUnavailableError(gateway.region, "default-vpc attribute has no values")

    vpc_id = values[0]
    if not vpc_id or vpc_id == NO_DEFAULT_VPC:
        raise DefaultVpcUnavailableError(gateway.region, "account has no default VPC")

    return vpc_id


class TeardownOrchestrator:
    """Runs default VPC teardown across every region of the account.

    Attributes:
        gateway: Account-wide provider gateway
        reporter: Output sink shared by all region tasks
    """

    def __init__(self, gateway: ProviderGateway, reporter: Optional[TeardownReporter] = None) -> None:
        self.gateway = gateway
        self.reporter = reporter or TeardownReporter()

    def discover_regions(self) -> list[str]:
        """List regions to tear down.

        Raises:
            RegionDiscoveryError: If the region list cannot be retrieved
        """
        try:
            regions = self.gateway.list_regions()
        except ProviderError as e:
            raise RegionDiscoveryError(f"Failed to list regions: {e}") from e

        logger.info(f"Discovered {len(regions)} regions")
        return regions

    def run(self) -> TeardownRun:
        """Tear down the default VPC of every region and wait for all of them.

        Returns:
            TeardownRun with one RegionTeardown per region

        Raises:
            RegionDiscoveryError: If the region list cannot be retrieved
        """
        started_at = datetime.now(timezone.utc)
        regions = self.discover_regions()
        collector = RegionResultCollector()

        if regions:
            # One worker per region; leaving the block waits for all of them
            with ThreadPoolExecutor(max_workers=len(regions), thread_name_prefix="teardown") as executor:
                for region in regions:
                    executor.submit(self._run_region, region, collector)

        return TeardownRun(
            regions=collector.results(),
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
        )

    def teardown_region(self, region: str) -> RegionTeardown:
        """Resolve one region's default VPC and reap it.

        Attribute lookup failures abandon this region only.

        Args:
            region: AWS region

        Returns:
            RegionTeardown for the region
        """
        gateway = self.gateway.for_region(region)

        try:
            vpc_id = resolve_default_vpc_id(gateway)
        except (ProviderError, DefaultVpcUnavailableError) as e:
            message = f"account attrs: {e}"
            logger.info(f"Skipping {region}: {e}")
            self.reporter.region_error(region, message)
            return RegionTeardown(region=region, errors=[message])

        logger.info(f"Tearing down default VPC {vpc_id} in {region}")
        reaper = ResourceReaper(gateway, vpc_id, self.reporter)
        try:
            return reaper.reap()
        except Exception as e:
            # Keep whatever the reaper recorded before the failure
            reaper.result.errors.append(self._report_unexpected(region, e))
            return reaper.result

    def _run_region(self, region: str, collector: RegionResultCollector) -> None:
        try:
            result = self.teardown_region(region)
        except Exception as e:
            result = RegionTeardown(region=region, errors=[self._report_unexpected(region, e)])
        collector.add(result)

    def _report_unexpected(self, region: str, error: Exception) -> str:
        # Traceback at debug level only
        logger.debug(f"Unexpected error tearing down {region}", exc_info=True)
        message = f"unexpected error: {error}"
        self.reporter.region_error(region, message)
        return message
