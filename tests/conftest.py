# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Global pytest fixtures shared across all test modules.

This module provides common fixtures used by unit and integration tests:
- Environment cleanup (ReportPortal settings from the caller's shell)
- A recording launch standing in for the ReportPortal service
"""

import os
import re
from collections.abc import Generator

import pytest
from _pytest.monkeypatch import MonkeyPatch

from cucumber_rp.core.models import FinishTestItemRQ, SaveLogRQ, StartTestItemRQ
from cucumber_rp.reporting.launch import ItemId, resolved_item


class RecordingLaunch:
    """In-memory launch recording every request it receives.

    Item ids are assigned sequentially: item-1, item-2, ...

    Attributes:
        started: (parent id, request, assigned id) per started item
        finished: (item id, request) per finished item
        logs: Submitted log requests
    """

    def __init__(self) -> None:
        self.started: list[tuple[str | None, StartTestItemRQ, str]] = []
        self.finished: list[tuple[str, FinishTestItemRQ]] = []
        self.logs: list[SaveLogRQ] = []
        self.finish_calls = 0

    def start_test_item(self, parent_id: ItemId | None, rq: StartTestItemRQ) -> ItemId:
        uuid = f"item-{len(self.started) + 1}"
        parent = parent_id.result() if parent_id is not None else None
        self.started.append((parent, rq, uuid))
        return resolved_item(uuid)

    def finish_test_item(self, item_id: ItemId, rq: FinishTestItemRQ) -> None:
        self.finished.append((item_id.result(), rq))

    def log(self, rq: SaveLogRQ) -> None:
        self.logs.append(rq)

    def start(self) -> str:
        return "launch-1"

    def finish(self) -> None:
        self.finish_calls += 1

    def names(self) -> list[str]:
        """Names of the started items, in start order."""
        return [rq.name for _, rq, _ in self.started]

    def status_of(self, name: str) -> str | None:
        """Final status of the item started with ``name``."""
        ids = [uuid for _, rq, uuid in self.started if rq.name == name]
        assert len(ids) == 1, f"expected one item named {name!r}, got {len(ids)}"
        for uuid, rq in self.finished:
            if uuid == ids[0]:
                return rq.status.value if rq.status is not None else None
        raise AssertionError(f"item {name!r} was never finished")


@pytest.fixture()
def launch() -> RecordingLaunch:
    """Provide a fresh recording launch."""
    return RecordingLaunch()


@pytest.fixture(autouse=True)
def clear_reportportal_env(monkeypatch: MonkeyPatch) -> Generator[None, None, None]:
    """Remove ReportPortal settings from the environment.

    cucumber-rp reads RP_* and CUCUMBER_RP_* variables, so values set in the
    developer's shell would leak into the tests.
    """
    pattern = re.compile(r"^(RP|CUCUMBER_RP)_[A-Z_]+$")
    for key in [key for key in os.environ if pattern.match(key)]:
        monkeypatch.delenv(key, raising=False)
    yield
