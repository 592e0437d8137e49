# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Fixtures for CLI tests."""

import logging
from collections.abc import Generator

import pytest

from cucumber_rp.cli.main import error_handler


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Undo the logging configuration applied by each CLI invocation."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    error_handler.reset()
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    error_handler.reset()
