"""Enumeration types for the fault-report domain."""

from enum import Enum


class FaultReportStatus(str, Enum):
    """Lifecycle status of a fault report (record store values)."""
    CREATED = "created"
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    WAITING = "waiting"
    INCOMPLETE = "incomplete"
    COMPLETED = "completed"
    RESOLVED = "resolved"
    CLOSED = "closed"
    CANCELLED = "cancelled"
    NOT_POSSIBLE = "not_possible"


class UserRole(str, Enum):
    """Role of the acting user."""
    RESIDENT = "resident"
    SERVICE_COMPANY = "service_company"
    MAINTENANCE = "maintenance"
    HOUSING_COMPANY = "housing_company"
    ADMIN = "admin"
    PROPERTY_MANAGER = "property_manager"  # legacy profiles, no workflow edges


class UrgencyLevel(str, Enum):
    """Urgency chosen by the reporter."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ActionMode(str, Enum):
    """Visual emphasis of a status action."""
    CONTAINED = "contained"  # primary
    OUTLINED = "outlined"    # secondary


class ActionTone(str, Enum):
    """Optional accent for a non-destructive action."""
    WARNING = "warning"
