# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Mapping of Cucumber step outcomes to ReportPortal statuses and log levels.

Both functions are total: any input, including None, maps to a value.
Unknown outcomes are treated as failures so that nothing unexpected is
reported as green.
"""

from types import MappingProxyType

from cucumber_rp.core.types import ItemStatus, LogLevel

STATUS_MAPPING: MappingProxyType[str, ItemStatus] = MappingProxyType(
    {
        "passed": ItemStatus.PASSED,
        "skipped": ItemStatus.SKIPPED,
        "pending": ItemStatus.SKIPPED,
        # TODO: map to a "not implemented" status once the service has one
        "undefined": ItemStatus.SKIPPED,
    }
)


def map_status(cukes_status: str | None) -> ItemStatus:
    """Map a Cucumber status to a ReportPortal item status.

    Args:
        cukes_status: Raw runner status, e.g. "passed" or "Undefined".

    Returns:
        The mapped status. Empty, None or unrecognized values give FAILED.
    """
    if not cukes_status:
        return ItemStatus.FAILED
    return STATUS_MAPPING.get(cukes_status.lower(), ItemStatus.FAILED)


def map_level(cukes_status: str | None) -> LogLevel:
    """Map a Cucumber status to the level used for its log entries.

    Args:
        cukes_status: Raw runner status.

    Returns:
        INFO for passed, WARN for skipped, ERROR for everything else.
    """
    status = (cukes_status or "").lower()
    if status == "passed":
        return LogLevel.INFO
    if status == "skipped":
        return LogLevel.WARN
    return LogLevel.ERROR
