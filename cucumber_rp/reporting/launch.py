# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Launch abstraction and its ReportPortal client binding.

Test items are identified by ``ItemId`` handles: futures that resolve to the
id assigned by the service. Every call that needs an id (finishing an item,
starting a child, sending a log) is deferred until the handle resolves. With
the synchronous ``RPClient`` handles are resolved as soon as they are
returned, but callers must not rely on that.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import Future
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Protocol

from reportportal_client import RPClient

from cucumber_rp.core.errors import ReportingError
from cucumber_rp.core.models import (
    FinishTestItemRQ,
    LogFile,
    SaveLogRQ,
    StartTestItemRQ,
)

if TYPE_CHECKING:
    from cucumber_rp.config import ReportPortalSettings

logger = logging.getLogger(__name__)

ItemId = Future[str]


class Launch(Protocol):
    """Operations of a reporting launch used by the reporting calls."""

    def start_test_item(self, parent_id: ItemId | None, rq: StartTestItemRQ) -> ItemId: ...

    def finish_test_item(self, item_id: ItemId, rq: FinishTestItemRQ) -> None: ...

    def log(self, rq: SaveLogRQ) -> None: ...


def resolved_item(item_id: str) -> ItemId:
    """Create an already resolved item handle."""
    handle: ItemId = Future()
    handle.set_result(item_id)
    return handle


def when_resolved(
    handle: ItemId,
    action: Callable[[str], Any],
    description: str,
    dependent: ItemId | None = None,
) -> None:
    """Run ``action`` with the id behind ``handle`` once it is available.

    If the handle fails, the failure is logged and forwarded to ``dependent``
    so that items started under a failed parent fail as well.

    Args:
        handle: Item handle to wait for.
        action: Callable receiving the resolved id.
        description: What the action does, used in log messages.
        dependent: Handle to fail if ``handle`` fails.
    """

    def _on_done(future: ItemId) -> None:
        if future.cancelled():
            logger.error(f"Cannot {description}: item handle was cancelled")
            if dependent is not None:
                dependent.cancel()
            return
        error = future.exception()
        if error is not None:
            logger.error(f"Cannot {description}: {error}")
            if dependent is not None:
                dependent.set_exception(error)
            return
        try:
            action(future.result())
        except Exception as e:
            logger.error(f"Cannot {description}: {e}")

    handle.add_done_callback(_on_done)


def timestamp(moment: datetime) -> str:
    """Convert a datetime to the epoch milliseconds string used by the client."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return str(int(moment.timestamp() * 1000))


def to_attributes(values: Iterable[str]) -> list[dict[str, str]]:
    """Convert tags and ``key:value`` strings into ReportPortal attributes.

    Examples:
        >>> to_attributes(["@smoke", "env:staging"])
        [{'value': '@smoke'}, {'key': 'env', 'value': 'staging'}]
    """
    attributes: list[dict[str, str]] = []
    for value in values:
        key, sep, rest = value.partition(":")
        if sep and key and rest:
            attributes.append({"key": key, "value": rest})
        else:
            attributes.append({"value": value})
    return attributes


def to_attachment(file: LogFile | None) -> dict[str, Any] | None:
    if file is None:
        return None
    return {"name": file.name, "data": file.content, "mime": file.content_type}


class ReportPortalLaunch:
    """Launch backed by ``reportportal_client.RPClient``.

    Example:
        launch = ReportPortalLaunch(ReportPortalSettings.load().validate())
        launch.start()
        root = launch.start_test_item(None, start_rq)
        launch.finish_test_item(root, finish_rq)
        launch.finish()
    """

    def __init__(
        self, settings: ReportPortalSettings, client: RPClient | None = None
    ) -> None:
        """Initialize the launch.

        Args:
            settings: Validated ReportPortal settings.
            client: Preconfigured client; created from the settings if omitted.
        """
        self.settings = settings
        self.client = client if client is not None else self._create_client(settings)
        self.launch_id: str | None = None

    @staticmethod
    def _create_client(settings: ReportPortalSettings) -> RPClient:
        return RPClient(
            endpoint=settings.endpoint,
            project=settings.project,
            api_key=settings.api_key,
            verify_ssl=settings.verify_ssl,
            mode=settings.mode,
        )

    def start(self) -> str | None:
        """Open the launch on the service.

        Returns:
            The launch id, or None if the service did not return one.
        """
        self.launch_id = self.client.start_launch(
            name=self.settings.launch,
            start_time=timestamp(datetime.now(timezone.utc)),
            description=self.settings.description,
            attributes=to_attributes(self.settings.attributes),
        )
        if self.launch_id is None:
            logger.error(f"Failed to start launch '{self.settings.launch}'")
        else:
            logger.info(f"Started launch '{self.settings.launch}' ({self.launch_id})")
        return self.launch_id

    def finish(self) -> None:
        """Close the launch and flush pending client requests."""
        try:
            if self.launch_id is not None:
                self.client.finish_launch(end_time=timestamp(datetime.now(timezone.utc)))
                logger.info(f"Finished launch '{self.settings.launch}'")
        finally:
            self.client.terminate()

    def start_test_item(self, parent_id: ItemId | None, rq: StartTestItemRQ) -> ItemId:
        item_id: ItemId = Future()

        def _start(parent: str | None) -> None:
            try:
                uuid = self.client.start_test_item(
                    name=rq.name,
                    start_time=timestamp(rq.start_time),
                    item_type=rq.type.value,
                    description=rq.description,
                    attributes=to_attributes(sorted(rq.tags)),
                    parent_item_id=parent,
                )
            except Exception as e:
                logger.error(f"Failed to start test item '{rq.name}': {e}")
                item_id.set_exception(ReportingError(str(e)))
                return
            if uuid is None:
                logger.error(f"Service returned no id for test item '{rq.name}'")
                item_id.set_exception(
                    ReportingError(f"No id returned for test item '{rq.name}'")
                )
                return
            logger.debug(f"Started {rq.type.value} '{rq.name}' ({uuid})")
            item_id.set_result(uuid)

        if parent_id is None:
            _start(None)
        else:
            when_resolved(parent_id, _start, f"start '{rq.name}'", dependent=item_id)
        return item_id

    def finish_test_item(self, item_id: ItemId, rq: FinishTestItemRQ) -> None:
        status = rq.status.value if rq.status is not None else None

        def _finish(uuid: str) -> None:
            self.client.finish_test_item(
                item_id=uuid,
                end_time=timestamp(rq.end_time),
                status=status,
            )
            logger.debug(f"Finished item {uuid} with status {status}")

        when_resolved(item_id, _finish, "finish test item")

    def log(self, rq: SaveLogRQ) -> None:
        self.client.log(
            time=timestamp(rq.log_time),
            message=rq.message,
            level=rq.level.value,
            attachment=to_attachment(rq.file),
            item_id=rq.item_id,
        )
