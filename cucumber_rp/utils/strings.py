# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""String utility functions turning Gherkin elements into report text."""

from collections.abc import Iterable

from cucumber_rp.core.constants import (
    DOCSTRING_DECORATOR,
    TABLE_HEADER_SEPARATOR,
    TABLE_LINE_BREAK,
    TABLE_SEPARATOR,
)
from cucumber_rp.core.models import Statement, Step, Tag


def extract_tags(tags: Iterable[Tag]) -> set[str]:
    """Transform Cucumber tags into the set of names sent to ReportPortal.

    Args:
        tags: Cucumber tags, possibly with duplicates.

    Returns:
        Set of tag names.

    Examples:
        >>> sorted(extract_tags([Tag("@a"), Tag("@a"), Tag("@b")]))
        ['@a', '@b']
    """
    return {tag.name for tag in tags}


def build_statement_name(
    stmt: Statement, prefix: str | None, infix: str, suffix: str | None
) -> str:
    """Generate the display name of a statement.

    Args:
        stmt: Cucumber statement.
        prefix: Prepended at the beginning (optional).
        infix: Inserted between keyword and name.
        suffix: Appended at the end (optional).

    Returns:
        The concatenated name.

    Examples:
        >>> build_statement_name(Statement("Given ", "x"), None, " ", None)
        'Given  x'
    """
    return f"{prefix or ''}{stmt.keyword}{infix}{stmt.name}{suffix or ''}"


def build_multiline_argument(step: Step) -> str:
    """Render the data table and/or doc-string of a step as markdown-like text.

    Each table row becomes ``| cell | cell |``; a ``|-|`` line follows the
    first row so it renders as a header. The doc-string, if any, comes after
    the table wrapped in triple quotes.

    Args:
        step: Cucumber step.

    Returns:
        The rendered argument, or an empty string if the step has none.
    """
    parts: list[str] = []
    if step.rows:
        parts.append(TABLE_LINE_BREAK * 2)
        for index, row in enumerate(step.rows):
            cells = "".join(f" {cell} {TABLE_SEPARATOR}" for cell in row.cells)
            parts.append(f"{TABLE_SEPARATOR}{cells}{TABLE_LINE_BREAK}")
            if index == 0:
                parts.append(f"{TABLE_HEADER_SEPARATOR}{TABLE_LINE_BREAK}")

    if step.doc_string is not None:
        parts.append(
            f"{DOCSTRING_DECORATOR}{step.doc_string.value}{DOCSTRING_DECORATOR}"
        )
    return "".join(parts)
