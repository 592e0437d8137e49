# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt
import logging
from pathlib import Path

from behave.__main__ import main as behave_main

from cucumber_rp.core.constants import USERDATA_CONFIG_KEY

logger = logging.getLogger(__name__)

FORMATTER = "cucumber_rp.behave.formatter:ReportPortalFormatter"


def _tag(name: str) -> str:
    return name if name.startswith("@") else f"@{name}"


def build_behave_args(
    paths: list[Path] | None = None,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
    dry_run: bool = False,
    config: Path | None = None,
    console_format: str = "pretty",
) -> list[str]:
    """Build the behave command line with the ReportPortal formatter attached.

    Include tags are ORed together, exclude tags each remove matching
    scenarios.
    """
    include = include or []
    exclude = exclude or []
    args = ["--format", console_format, "--format", FORMATTER]

    if config is not None:
        args.extend(["--define", f"{USERDATA_CONFIG_KEY}={config}"])
    if dry_run:
        args.append("--dry-run")
    if include:
        args.append("--tags=" + ",".join(_tag(i) for i in include))
    for e in exclude:
        args.append(f"--tags=~{_tag(e)}")
    args.extend(str(p) for p in paths or [])
    return args


def run_behave(
    paths: list[Path] | None = None,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
    dry_run: bool = False,
    config: Path | None = None,
    console_format: str = "pretty",
) -> int:
    """Run behave"""
    args = build_behave_args(paths, include, exclude, dry_run, config, console_format)
    logger.info("Running behave with args: %s", " ".join(args))
    return behave_main(args)
