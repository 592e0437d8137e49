"""Data models shared across the cucumber-rp adapter.

Gherkin side: statements, steps, tags and their multiline arguments, as
supplied by the test runner for each callback.

Reporting side: the request objects handed to a ``Launch``. They are built
on demand and never mutated afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime

from cucumber_rp.core.types import ItemStatus, ItemType, LogLevel


@dataclass(frozen=True)
class Tag:
    """Scenario or feature tag, e.g. ``@smoke``."""

    name: str


@dataclass(frozen=True)
class DataTableRow:
    """One row of a Gherkin data table."""

    cells: tuple[str, ...]


@dataclass(frozen=True)
class DocString:
    """Free-text block attached to a step."""

    value: str
    content_type: str = ""


@dataclass(frozen=True)
class Statement:
    """Keyworded, named Gherkin element (feature, scenario or step).

    The keyword is kept verbatim, so it may or may not carry a trailing space
    depending on the runner that produced it.
    """

    keyword: str
    name: str


@dataclass(frozen=True)
class Step(Statement):
    """Test step with its optional multiline argument.

    Attributes:
        rows: Data table rows, header row first. None when the step has no table.
        doc_string: Attached doc-string, if any.
    """

    rows: tuple[DataTableRow, ...] | None = None
    doc_string: DocString | None = None


@dataclass(frozen=True)
class LogFile:
    """Binary attachment sent along with a log entry."""

    name: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class StartTestItemRQ:
    """Request to open a test item."""

    name: str
    start_time: datetime
    type: ItemType
    description: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class FinishTestItemRQ:
    """Request to close a test item.

    A None status lets the service derive the status from the item's children.
    """

    end_time: datetime
    status: ItemStatus | None = None


@dataclass(frozen=True)
class SaveLogRQ:
    """Log entry bound to a test item."""

    item_id: str
    message: str
    level: LogLevel
    log_time: datetime
    file: LogFile | None = None
