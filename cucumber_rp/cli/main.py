# -*- coding: utf-8 -*-

# Copyright: (c) 2025, Daniel Schmidt <danischm@cisco.com>

import logging
from pathlib import Path
from typing import Optional

import errorhandler
import typer
from typing_extensions import Annotated

import cucumber_rp
from cucumber_rp.config import ReportPortalSettings
from cucumber_rp.core.constants import EXIT_ERROR, EXIT_INVALID_CONFIG
from cucumber_rp.core.errors import ConfigurationError
from cucumber_rp.runner import run_behave
from cucumber_rp.utils.logging import VerbosityLevel, configure_logging

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)

error_handler = errorhandler.ErrorHandler()


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cucumber-rp, version {cucumber_rp.__version__}")
        raise typer.Exit()


Verbosity = Annotated[
    VerbosityLevel,
    typer.Option(
        "-v",
        "--verbosity",
        help="Verbosity level.",
        envvar="CUCUMBER_RP_VERBOSITY",
        is_eager=True,
    ),
]


Paths = Annotated[
    Optional[list[Path]],
    typer.Argument(
        exists=True,
        dir_okay=True,
        file_okay=True,
        help="Feature files or directories (default: features).",
    ),
]


Config = Annotated[
    Optional[Path],
    typer.Option(
        "-c",
        "--config",
        exists=True,
        dir_okay=False,
        file_okay=True,
        help="Path to the ReportPortal YAML configuration.",
        envvar="CUCUMBER_RP_CONFIG",
    ),
]


Include = Annotated[
    list[str],
    typer.Option(
        "-i",
        "--include",
        help="Selects the scenarios by tag (include).",
        envvar="CUCUMBER_RP_INCLUDE",
    ),
]


Exclude = Annotated[
    list[str],
    typer.Option(
        "-e",
        "--exclude",
        help="Selects the scenarios by tag (exclude).",
        envvar="CUCUMBER_RP_EXCLUDE",
    ),
]


Format = Annotated[
    str,
    typer.Option(
        "-f",
        "--format",
        help="behave formatter used for console output.",
    ),
]


DryRun = Annotated[
    bool,
    typer.Option(
        "--dry-run",
        help="Dry run flag. See behave dry run mode.",
        envvar="CUCUMBER_RP_DRY_RUN",
    ),
]


Version = Annotated[
    bool,
    typer.Option(
        "--version",
        callback=version_callback,
        help="Display version number.",
        is_eager=True,
    ),
]


@app.command()
def main(
    paths: Paths = None,
    config: Config = None,
    include: Include = [],
    exclude: Exclude = [],
    console_format: Format = "pretty",
    dry_run: DryRun = False,
    verbosity: Verbosity = VerbosityLevel.WARNING,
    version: Version = False,
) -> None:
    """A CLI tool to run behave features and report them to ReportPortal."""
    configure_logging(verbosity, error_handler)

    try:
        settings = ReportPortalSettings.load(config).validate()
    except ConfigurationError as e:
        logger.error(str(e))
        raise typer.Exit(EXIT_INVALID_CONFIG)
    if not settings.enabled:
        logger.warning("ReportPortal reporting is disabled, running behave only")

    rc = run_behave(
        paths=paths,
        include=include,
        exclude=exclude,
        dry_run=dry_run,
        config=config,
        console_format=console_format,
    )
    exit(rc)


def exit(rc: int = 0) -> None:
    if error_handler.fired:
        raise typer.Exit(EXIT_ERROR)
    else:
        raise typer.Exit(rc)
