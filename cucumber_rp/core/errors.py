# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Exceptions raised by cucumber-rp."""


class ConfigurationError(ValueError):
    """ReportPortal settings are missing or malformed."""


class ReportingError(RuntimeError):
    """The reporting service did not accept a request."""
