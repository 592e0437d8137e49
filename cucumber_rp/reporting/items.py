# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Reporting calls used by the test-runner listeners.

Thin wrappers building request objects from the current time and the
supplied fields, then forwarding them to a ``Launch``.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from cucumber_rp.core.constants import STEP_NAME_INFIX
from cucumber_rp.core.models import (
    FinishTestItemRQ,
    LogFile,
    SaveLogRQ,
    StartTestItemRQ,
    Step,
    Tag,
)
from cucumber_rp.core.types import ItemStatus, ItemType, LogLevel
from cucumber_rp.reporting.launch import ItemId, Launch, when_resolved
from cucumber_rp.utils.strings import (
    build_multiline_argument,
    build_statement_name,
    extract_tags,
)

logger = logging.getLogger(__name__)

LogFactory = Callable[[str], SaveLogRQ]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def finish_test_item(
    launch: Launch, item_id: ItemId | None, status: ItemStatus | None = None
) -> None:
    """Finish a test item.

    Args:
        launch: Launch the item belongs to.
        item_id: Handle of the item. None is a caller bug: it is logged and
            nothing is sent.
        status: Final status; None lets the service compute it.
    """
    if item_id is None:
        logger.error("BUG: Trying to finish unspecified test item.")
        return

    rq = FinishTestItemRQ(end_time=_now(), status=status)
    launch.finish_test_item(item_id, rq)


def start_non_leaf_node(
    launch: Launch,
    root_item_id: ItemId | None,
    name: str,
    description: str | None,
    tags: Iterable[Tag],
    item_type: ItemType,
) -> ItemId:
    """Start an item that will have children (feature, scenario).

    Args:
        launch: Launch to report to.
        root_item_id: Parent item handle, None for a top-level item.
        name: Item name.
        description: Item description.
        tags: Cucumber tags of the element.
        item_type: ReportPortal item type.

    Returns:
        Handle of the started item.
    """
    rq = StartTestItemRQ(
        name=name,
        start_time=_now(),
        type=item_type,
        description=description,
        tags=frozenset(extract_tags(tags)),
    )
    return launch.start_test_item(root_item_id, rq)


def start_step(launch: Launch, scenario_id: ItemId | None, step: Step) -> ItemId:
    """Start a STEP item named after the step, described by its multiline argument."""
    rq = StartTestItemRQ(
        name=build_statement_name(step, None, STEP_NAME_INFIX, None),
        start_time=_now(),
        type=ItemType.STEP,
        description=build_multiline_argument(step) or None,
    )
    return launch.start_test_item(scenario_id, rq)


class LogEmitter:
    """Routes log requests to test items once their ids are known.

    The emitter tracks the items currently open, innermost last. A log without
    an explicit target goes to the innermost one.
    """

    def __init__(self, launch: Launch) -> None:
        self.launch = launch
        self._items: list[ItemId] = []

    @property
    def current(self) -> ItemId | None:
        return self._items[-1] if self._items else None

    def push(self, item_id: ItemId) -> None:
        self._items.append(item_id)

    def pop(self) -> ItemId | None:
        return self._items.pop() if self._items else None

    def emit(self, factory: LogFactory, item_id: ItemId | None = None) -> None:
        """Submit a log built by ``factory`` once the target item id resolves.

        Args:
            factory: Builds the request from the resolved item id.
            item_id: Target item; defaults to the innermost open item.
        """
        target = item_id if item_id is not None else self.current
        if target is None:
            logger.warning("No active test item, log entry dropped")
            return
        when_resolved(
            target, lambda uuid: self.launch.log(factory(uuid)), "send log entry"
        )


def send_log(
    emitter: LogEmitter,
    message: str,
    level: LogLevel,
    file: LogFile | None = None,
    item_id: ItemId | None = None,
) -> None:
    """Send a log entry to the current (or given) test item.

    The log time is taken now, not when the item id becomes available.

    Args:
        emitter: Log emitter of the launch.
        message: Log message.
        level: Log level.
        file: Optional attachment.
        item_id: Target item; defaults to the emitter's current item.
    """
    log_time = _now()

    def _build(uuid: str) -> SaveLogRQ:
        return SaveLogRQ(
            item_id=uuid,
            message=message,
            level=level,
            log_time=log_time,
            file=file,
        )

    emitter.emit(_build, item_id)
