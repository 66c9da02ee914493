"""Fault report lifecycle services."""

from faultflow.services.fault_report_details import FaultReportDetails
from faultflow.services.notifications import RefreshSignal
from faultflow.services.status_action_bar import BarState, Presenter, StatusActionBar
from faultflow.services.transitions import (
    allowed_next_statuses,
    allowed_transitions,
    resolve_transitions,
    supplemental_transitions,
)

__all__ = [
    "FaultReportDetails",
    "RefreshSignal",
    "BarState",
    "Presenter",
    "StatusActionBar",
    "allowed_next_statuses",
    "allowed_transitions",
    "resolve_transitions",
    "supplemental_transitions",
]
