# -*- coding: utf-8 -*-

"""Utility modules for cucumber-rp."""

from cucumber_rp.utils.strings import (
    build_multiline_argument,
    build_statement_name,
    extract_tags,
)

__all__ = [
    "build_multiline_argument",
    "build_statement_name",
    "extract_tags",
]
