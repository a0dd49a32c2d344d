"""Teardown output.

Outcome lines go to stdout, region and phase errors to stderr. Region tasks
call the reporter concurrently, so every write holds a single lock.
"""

from __future__ import annotations

import threading
from typing import Optional

from rich.console import Console
from rich.table import Table

from ..models.resource_kind import ResourceKind
from ..models.teardown_outcome import FailedStep, TeardownOutcome
from ..models.teardown_run import RegionStatus, TeardownRun


def format_outcome(outcome: TeardownOutcome) -> str:
    """Render one outcome as an aligned ``rm`` line."""
    suffix = ""
    if not outcome.is_success:
        label = "detach error" if outcome.failed_step == FailedStep.DETACH else "error"
        suffix = f" ({label}: {outcome.error_message})"
    return f"rm {outcome.region:<15} {outcome.resource_id:<15}{suffix}"


def format_region_error(region: str, message: str) -> str:
    return f"error: {region} {message}"


def format_phase_error(region: str, vpc_id: str, kind: ResourceKind, message: str) -> str:
    return f"error: {region} {vpc_id} failed to get {kind.noun}: {message}"


class TeardownReporter:
    """Thread-safe teardown line printer.

    Attributes:
        console: Console for outcome lines (stdout)
        error_console: Console for error lines (stderr)
    """

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)
        self._lock = threading.Lock()

    def _write(self, console: Console, line: str) -> None:
        with self._lock:
            console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def outcome(self, outcome: TeardownOutcome) -> None:
        self._write(self.console, format_outcome(outcome))

    def region_error(self, region: str, message: str) -> None:
        self._write(self.error_console, format_region_error(region, message))

    def phase_error(self, region: str, vpc_id: str, kind: ResourceKind, message: str) -> None:
        self._write(self.error_console, format_phase_error(region, vpc_id, kind, message))

    def summary(self, run: TeardownRun) -> None:
        """Print a per-region summary table once all regions are done."""
        table = Table(title="Default VPC Teardown", show_header=True)
        table.add_column("Region", style="cyan")
        table.add_column("VPC")
        table.add_column("Status")
        table.add_column("Deleted", justify="right", style="green")
        table.add_column("Failed", justify="right", style="red")
        table.add_column("Errors", justify="right", style="yellow")

        status_styles = {
            RegionStatus.COMPLETED: "green",
            RegionStatus.PARTIAL: "yellow",
            RegionStatus.FAILED: "red",
            RegionStatus.SKIPPED: "dim",
        }

        for region in run.regions:
            style = status_styles[region.status]
            table.add_row(
                region.region,
                region.vpc_id or "-",
                f"[{style}]{region.status.value}[/{style}]",
                str(region.succeeded_count),
                str(region.failed_count),
                str(len(region.errors)),
            )

        with self._lock:
            self.console.print()
            self.console.print(table)
            duration = run.duration_seconds
            timing = f" in {duration:.1f}s" if duration is not None else ""
            self.console.print(
                f"{len(run.regions)} regions, {run.succeeded_count} deleted, "
                f"{run.failed_count} failed, {run.error_count} errors{timing}"
            )
