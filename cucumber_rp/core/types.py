# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Enumerations understood by the ReportPortal service."""

from enum import Enum


class ItemStatus(str, Enum):
    """Final status of a reported test item.

    Cucumber has a richer set of step outcomes (pending, undefined, ...);
    they are folded into these three values by ``map_status``.
    """

    PASSED = "PASSED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


class LogLevel(str, Enum):
    """Log levels accepted by the reporting service."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"


class ItemType(str, Enum):
    """Test item types.

    Features are reported as STORY, scenarios as SCENARIO and steps as STEP.
    """

    SUITE = "SUITE"
    STORY = "STORY"
    TEST = "TEST"
    SCENARIO = "SCENARIO"
    STEP = "STEP"
