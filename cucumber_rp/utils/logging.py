# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Logging setup for the cucumber-rp command line."""

import logging
import sys
from enum import Enum

import errorhandler


class VerbosityLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def configure_logging(
    level: VerbosityLevel | str, error_handler: errorhandler.ErrorHandler
) -> None:
    """Route log records to stderr at the requested verbosity.

    Replaces any handlers previously attached to the root logger so repeated
    calls (e.g. from tests) do not duplicate output. The error handler is reset
    so that only errors logged after this call count towards the exit code.

    Args:
        level: Verbosity level name.
        error_handler: Handler tracking whether an ERROR record was emitted.
    """
    verbosity = VerbosityLevel(level)
    logger = logging.getLogger()
    for handler in list(logger.handlers):
        if handler is not error_handler:
            logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(stream_handler)
    logger.setLevel(getattr(logging, verbosity.value))
    error_handler.reset()
