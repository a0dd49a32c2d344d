"""Default VPC teardown.

Classes:
    TeardownOrchestrator: Region discovery and concurrent per-region fan-out
    ResourceReaper: Ordered deletion of one VPC's dependent resources
    TeardownReporter: Thread-safe outcome lines and run summary
"""

from __future__ import annotations

__all__ = [
    "TeardownOrchestrator",
    "ResourceReaper",
    "TeardownReporter",
]

from .orchestrator import TeardownOrchestrator
from .reaper import ResourceReaper
from .reporter import TeardownReporter
