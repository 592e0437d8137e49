"""Reporting calls and the ReportPortal launch binding."""

from cucumber_rp.reporting.items import (
    LogEmitter,
    finish_test_item,
    send_log,
    start_non_leaf_node,
    start_step,
)
from cucumber_rp.reporting.launch import (
    ItemId,
    Launch,
    ReportPortalLaunch,
    resolved_item,
)

__all__ = [
    "ItemId",
    "Launch",
    "LogEmitter",
    "ReportPortalLaunch",
    "finish_test_item",
    "resolved_item",
    "send_log",
    "start_non_leaf_node",
    "start_step",
]
