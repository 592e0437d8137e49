# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Tests for building and running the behave command line."""

from pathlib import Path
from unittest.mock import Mock, patch

from cucumber_rp.runner import FORMATTER, build_behave_args, run_behave


class TestBuildBehaveArgs:
    """Tests for build_behave_args."""

    def test_defaults(self) -> None:
        assert build_behave_args() == ["--format", "pretty", "--format", FORMATTER]

    def test_formatter_reference_points_at_formatter_class(self) -> None:
        from cucumber_rp.behave.formatter import ReportPortalFormatter

        module, _, name = FORMATTER.partition(":")
        assert module == ReportPortalFormatter.__module__
        assert name == ReportPortalFormatter.__name__

    def test_config_passed_as_userdata(self) -> None:
        args = build_behave_args(config=Path("rp.yaml"))

        assert args[args.index("--define") + 1] == "rp_config=rp.yaml"

    def test_include_tags_ored(self) -> None:
        args = build_behave_args(include=["smoke", "@sanity"])

        assert "--tags=@smoke,@sanity" in args

    def test_exclude_tags_separate(self) -> None:
        args = build_behave_args(exclude=["wip", "slow"])

        assert "--tags=~@wip" in args
        assert "--tags=~@slow" in args

    def test_paths_last(self) -> None:
        args = build_behave_args(
            paths=[Path("features/a.feature"), Path("other")], dry_run=True
        )

        assert "--dry-run" in args
        assert args[-2:] == ["features/a.feature", "other"]

    def test_console_format(self) -> None:
        assert build_behave_args(console_format="progress")[:2] == ["--format", "progress"]


class TestRunBehave:
    @patch("cucumber_rp.runner.behave_main")
    def test_returns_behave_exit_code(self, mock_main: Mock) -> None:
        mock_main.return_value = 1

        assert run_behave(paths=[Path("features")]) == 1
        mock_main.assert_called_once_with(
            ["--format", "pretty", "--format", FORMATTER, "features"]
        )
