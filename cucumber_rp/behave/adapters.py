# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Conversion of behave model objects into cucumber-rp models."""

from collections.abc import Iterable, Sequence
from typing import Any

from cucumber_rp.core.models import DataTableRow, DocString, Statement, Step, Tag

# behave statuses without a Cucumber counterpart
_STATUS_ALIASES = {"untested": "skipped"}


def status_name(status: Any) -> str:
    """Return the plain status name of a behave element.

    behave >= 1.2.6 uses a ``Status`` enum, older releases plain strings.
    ``untested`` (everything in a dry run) is reported as ``skipped``.

    Examples:
        >>> status_name("passed")
        'passed'
        >>> status_name("untested")
        'skipped'
        >>> status_name(None)
        ''
    """
    if status is None:
        return ""
    name = str(getattr(status, "name", status))
    return _STATUS_ALIASES.get(name, name)


def to_statement(element: Any) -> Statement:
    """Build a statement from a behave feature, scenario or step."""
    return Statement(keyword=element.keyword, name=element.name)


def to_step(step: Any) -> Step:
    """Build a step with its multiline argument from a behave step.

    behave keeps the table header apart from the body rows; it becomes the
    first row here, as in Cucumber.
    """
    rows = None
    table = getattr(step, "table", None)
    if table is not None:
        rows = (DataTableRow(tuple(table.headings)),) + tuple(
            DataTableRow(tuple(row.cells)) for row in table.rows
        )

    doc_string = None
    text = getattr(step, "text", None)
    if text is not None:
        doc_string = DocString(str(text), getattr(text, "content_type", None) or "")

    return Step(keyword=step.keyword, name=step.name, rows=rows, doc_string=doc_string)


def to_tags(names: Iterable[str]) -> list[Tag]:
    """Convert behave tag names (without ``@``) to Cucumber tags.

    Examples:
        >>> to_tags(["smoke", "@wip"])
        [Tag(name='@smoke'), Tag(name='@wip')]
    """
    return [Tag(name if name.startswith("@") else f"@{name}") for name in names]


def describe(lines: Sequence[str] | None) -> str | None:
    """Join the description lines of a feature or scenario."""
    if not lines:
        return None
    return "\n".join(lines)
