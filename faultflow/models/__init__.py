"""Enumerations shared across faultflow."""

from faultflow.models.enums import (
    ActionMode,
    ActionTone,
    FaultReportStatus,
    UrgencyLevel,
    UserRole,
)

__all__ = [
    "ActionMode",
    "ActionTone",
    "FaultReportStatus",
    "UrgencyLevel",
    "UserRole",
]
