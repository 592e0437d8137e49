# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""ReportPortal connection settings.

Settings are read from the ``reportportal`` section of a YAML file and can be
overridden with ``RP_*`` environment variables:

    reportportal:
      endpoint: https://rp.example.com
      project: my_project
      api_key: xxxxxxxx
      launch: nightly
      attributes: [env:staging, smoke]
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from cucumber_rp.core.constants import (
    CONFIG_SECTION,
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_LAUNCH_MODE,
    DEFAULT_LAUNCH_NAME,
    ENV_API_KEY,
    ENV_ATTRIBUTES,
    ENV_DESCRIPTION,
    ENV_ENABLED,
    ENV_ENDPOINT,
    ENV_LAUNCH,
    ENV_MODE,
    ENV_PROJECT,
    ENV_VERIFY_SSL,
)
from cucumber_rp.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")

# Environment variable -> settings field
_ENV_FIELDS: dict[str, str] = {
    ENV_ENDPOINT: "endpoint",
    ENV_PROJECT: "project",
    ENV_API_KEY: "api_key",
    ENV_LAUNCH: "launch",
    ENV_DESCRIPTION: "description",
    ENV_ATTRIBUTES: "attributes",
    ENV_MODE: "mode",
    ENV_ENABLED: "enabled",
    ENV_VERIFY_SSL: "verify_ssl",
}

_REQUIRED_FIELDS = ("endpoint", "project", "api_key")


def _to_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for '{name}': {value!r}")


def _to_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, list):
        return [str(item) for item in value]
    raise ConfigurationError(f"Invalid attributes: {value!r}")


@dataclass
class ReportPortalSettings:
    """Settings used to open a ReportPortal launch.

    Attributes:
        endpoint: Base URL of the ReportPortal server.
        project: Project name.
        api_key: API key of the reporting user.
        launch: Launch name.
        description: Launch description.
        attributes: Launch attributes as ``key:value`` or plain values.
        mode: Launch mode, DEFAULT or DEBUG.
        enabled: Whether anything is reported at all.
        verify_ssl: Verify the server certificate.
    """

    endpoint: str | None = None
    project: str | None = None
    api_key: str | None = None
    launch: str = DEFAULT_LAUNCH_NAME
    description: str | None = None
    attributes: list[str] = field(default_factory=list)
    mode: str = DEFAULT_LAUNCH_MODE
    enabled: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ReportPortalSettings":
        """Build settings from a mapping, ignoring unknown keys.

        Raises:
            ConfigurationError: If a value has the wrong type.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown ReportPortal settings: {', '.join(unknown)}")

        settings = cls()
        for name in known & set(data):
            settings._set(name, data[name])
        return settings

    @classmethod
    def load(
        cls, path: Path | None = None, environ: Mapping[str, str] | None = None
    ) -> "ReportPortalSettings":
        """Load settings from a YAML file and the environment.

        Args:
            path: Configuration file. If omitted, ``reportportal.yaml`` in the
                working directory is used when it exists.
            environ: Environment to read overrides from (default: os.environ).

        Returns:
            The merged settings. They are not validated.

        Raises:
            ConfigurationError: If the file is missing, unreadable or malformed.
        """
        environ = os.environ if environ is None else environ
        if path is None:
            default = Path(DEFAULT_CONFIG_FILENAME)
            path = default if default.is_file() else None

        settings = cls.from_mapping(cls._read_file(path)) if path else cls()

        for env_name, name in _ENV_FIELDS.items():
            if env_name in environ:
                settings._set(name, environ[env_name])
        return settings

    @staticmethod
    def _read_file(path: Path) -> dict[str, Any]:
        if not path.is_file():
            raise ConfigurationError(f"Configuration file not found: {path}")
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

        # Handle empty file (yaml.safe_load returns None)
        if data is None:
            return {}
        section = data.get(CONFIG_SECTION) if isinstance(data, dict) else None
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"'{CONFIG_SECTION}' in {path} must be a mapping"
            )
        logger.debug(f"Loaded ReportPortal settings from {path}")
        return section

    def _set(self, name: str, value: Any) -> None:
        # Empty YAML values keep the default
        if value is None:
            return
        if name in ("enabled", "verify_ssl"):
            value = _to_bool(name, value)
        elif name == "attributes":
            value = _to_list(value)
        elif name == "mode":
            value = str(value).upper()
        else:
            value = str(value)
        setattr(self, name, value)

    @property
    def missing(self) -> list[str]:
        """Required settings that have no value."""
        return [name for name in _REQUIRED_FIELDS if not getattr(self, name)]

    def validate(self) -> "ReportPortalSettings":
        """Check that reporting can be started with these settings.

        Disabled settings are always valid.

        Raises:
            ConfigurationError: If a required value is missing or the mode is
                not DEFAULT or DEBUG.
        """
        if not self.enabled:
            return self
        if self.missing:
            raise ConfigurationError(
                f"Missing ReportPortal settings: {', '.join(self.missing)}"
            )
        if self.mode not in ("DEFAULT", "DEBUG"):
            raise ConfigurationError(f"Invalid launch mode: {self.mode}")
        return self
