# -*- coding: utf-8 -*-

"""Core constants shared across the cucumber-rp adapter."""

# Multiline argument rendering
TABLE_SEPARATOR = "|"
TABLE_LINE_BREAK = "\r\n"
TABLE_HEADER_SEPARATOR = f"{TABLE_SEPARATOR}-{TABLE_SEPARATOR}"
DOCSTRING_DECORATOR = '\n"""\n'

# Item naming
FEATURE_NAME_INFIX = ": "
SCENARIO_NAME_INFIX = ": "
STEP_NAME_INFIX = " "

# Configuration
DEFAULT_CONFIG_FILENAME = "reportportal.yaml"
CONFIG_SECTION = "reportportal"
DEFAULT_LAUNCH_NAME = "cucumber-rp launch"
DEFAULT_LAUNCH_MODE = "DEFAULT"
USERDATA_CONFIG_KEY = "rp_config"

# Environment variables overriding the configuration file
ENV_ENDPOINT = "RP_ENDPOINT"
ENV_PROJECT = "RP_PROJECT"
ENV_API_KEY = "RP_API_KEY"
ENV_LAUNCH = "RP_LAUNCH"
ENV_DESCRIPTION = "RP_DESCRIPTION"
ENV_ATTRIBUTES = "RP_ATTRIBUTES"
ENV_MODE = "RP_MODE"
ENV_ENABLED = "RP_ENABLED"
ENV_VERIFY_SSL = "RP_VERIFY_SSL"

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_INVALID_CONFIG = 2
