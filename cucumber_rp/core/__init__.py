"""Core components shared across the cucumber-rp adapter."""

from cucumber_rp.core.mapping import STATUS_MAPPING, map_level, map_status
from cucumber_rp.core.models import (
    DataTableRow,
    DocString,
    FinishTestItemRQ,
    LogFile,
    SaveLogRQ,
    StartTestItemRQ,
    Statement,
    Step,
    Tag,
)
from cucumber_rp.core.types import ItemStatus, ItemType, LogLevel

__all__ = [
    # Enumerations
    "ItemStatus",
    "ItemType",
    "LogLevel",
    # Mapping
    "STATUS_MAPPING",
    "map_status",
    "map_level",
    # Models
    "Tag",
    "DataTableRow",
    "DocString",
    "Statement",
    "Step",
    "LogFile",
    "StartTestItemRQ",
    "FinishTestItemRQ",
    "SaveLogRQ",
]
