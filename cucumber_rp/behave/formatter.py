# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""behave formatter reporting test execution to ReportPortal.

Enable it on the command line:

    behave -f cucumber_rp.behave.formatter:ReportPortalFormatter \\
           -D rp_config=reportportal.yaml

Features become STORY items, scenarios SCENARIO items and steps STEP items.
behave announces all steps of a scenario up front and then reports the result
of each executed step; steps that never run are reported when their scenario
ends.
"""

import logging
from pathlib import Path
from typing import Any

from behave.formatter.base import Formatter

from cucumber_rp.behave.adapters import (
    describe,
    status_name,
    to_statement,
    to_step,
    to_tags,
)
from cucumber_rp.config import ReportPortalSettings
from cucumber_rp.core.constants import (
    FEATURE_NAME_INFIX,
    SCENARIO_NAME_INFIX,
    USERDATA_CONFIG_KEY,
)
from cucumber_rp.core.mapping import map_level, map_status
from cucumber_rp.core.types import ItemType
from cucumber_rp.reporting.items import (
    LogEmitter,
    finish_test_item,
    send_log,
    start_non_leaf_node,
    start_step,
)
from cucumber_rp.reporting.launch import ItemId, Launch, ReportPortalLaunch
from cucumber_rp.utils.strings import build_statement_name

logger = logging.getLogger(__name__)


class ReportPortalFormatter(Formatter):
    """Formatter forwarding behave callbacks to a ReportPortal launch.

    Attributes:
        launch: Launch receiving the items; None when reporting is disabled.
        emitter: Routes log entries to the open items.
    """

    name = "reportportal"
    description = "Reports features, scenarios and steps to ReportPortal"

    def __init__(self, stream_opener: Any, config: Any, launch: Launch | None = None):
        super().__init__(stream_opener, config)
        self._owns_launch = launch is None
        self.launch = launch if launch is not None else self._create_launch(config)
        self.emitter = LogEmitter(self.launch) if self.launch is not None else None

        self._feature: Any = None
        self._feature_id: ItemId | None = None
        self._scenario: Any = None
        self._scenario_id: ItemId | None = None
        self._pending_steps: list[Any] = []

    @staticmethod
    def _create_launch(config: Any) -> ReportPortalLaunch | None:
        userdata = getattr(config, "userdata", None) or {}
        config_path = userdata.get(USERDATA_CONFIG_KEY)
        settings = ReportPortalSettings.load(
            Path(config_path) if config_path else None
        ).validate()
        if not settings.enabled:
            logger.info("ReportPortal reporting is disabled")
            return None

        launch = ReportPortalLaunch(settings)
        launch.start()
        return launch

    def feature(self, feature: Any) -> None:
        if self.launch is None:
            return
        self._finish_feature()
        self._feature = feature
        self._feature_id = start_non_leaf_node(
            self.launch,
            None,
            build_statement_name(to_statement(feature), None, FEATURE_NAME_INFIX, None),
            describe(feature.description),
            to_tags(feature.tags),
            ItemType.STORY,
        )

    def scenario(self, scenario: Any) -> None:
        if self.launch is None:
            return
        self._finish_scenario()
        self._scenario = scenario
        self._scenario_id = start_non_leaf_node(
            self.launch,
            self._feature_id,
            build_statement_name(to_statement(scenario), None, SCENARIO_NAME_INFIX, None),
            describe(scenario.description),
            to_tags(scenario.tags),
            ItemType.SCENARIO,
        )
        self.emitter.push(self._scenario_id)

    def step(self, step: Any) -> None:
        if self.launch is None:
            return
        self._pending_steps.append(step)

    def result(self, step: Any) -> None:
        if self.launch is None:
            return
        self._pending_steps = [s for s in self._pending_steps if s is not step]
        self._report_step(step)

    def eof(self) -> None:
        if self.launch is None:
            return
        self._finish_feature()

    def close(self) -> None:
        try:
            if self.launch is not None:
                self._finish_feature()
                if self._owns_launch:
                    self.launch.finish()
        finally:
            super().close()

    def _report_step(self, step: Any) -> None:
        status = status_name(step.status)
        step_id = start_step(self.launch, self._scenario_id, to_step(step))
        self.emitter.push(step_id)
        try:
            error_message = getattr(step, "error_message", None)
            if error_message:
                send_log(self.emitter, error_message, map_level(status))
        finally:
            self.emitter.pop()
        finish_test_item(self.launch, step_id, map_status(status))

    def _finish_scenario(self) -> None:
        if self._scenario is None:
            return
        for step in self._pending_steps:
            self._report_step(step)
        self._pending_steps = []

        self.emitter.pop()
        finish_test_item(
            self.launch, self._scenario_id, map_status(status_name(self._scenario.status))
        )
        self._scenario = None
        self._scenario_id = None

    def _finish_feature(self) -> None:
        self._finish_scenario()
        if self._feature is None:
            return
        finish_test_item(
            self.launch, self._feature_id, map_status(status_name(self._feature.status))
        )
        self._feature = None
        self._feature_id = None
