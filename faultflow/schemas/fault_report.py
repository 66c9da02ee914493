"""Fault report schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from faultflow.models.enums import (
    ActionMode,
    ActionTone,
    FaultReportStatus,
    UrgencyLevel,
    UserRole,
)
from faultflow.schemas.base import BaseSchema, FrozenSchema


class FaultReport(BaseSchema):
    """A fault report as held by the record store."""

    id: str
    title: str
    description: str
    location: str = ""
    urgency: UrgencyLevel = UrgencyLevel.MEDIUM
    status: FaultReportStatus
    created_by_user_id: Optional[str] = None
    building_id: Optional[str] = None
    apartment_number: Optional[str] = None
    image_urls: list[str] = Field(default_factory=list)
    assigned_to: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None


class ActorProfile(BaseSchema):
    """The signed-in user acting on a report."""

    id: str
    role: Optional[UserRole] = None


class TransitionAction(FrozenSchema):
    """One candidate status transition with its display metadata."""

    status: FaultReportStatus
    label_key: str
    mode: ActionMode = ActionMode.OUTLINED
    destructive: bool = False
    tone: Optional[ActionTone] = None
    confirm_title_key: Optional[str] = None
    confirm_body_key: Optional[str] = None

    @property
    def requires_confirmation(self) -> bool:
        return self.confirm_body_key is not None


class ActionButton(FrozenSchema):
    """A rendered status action."""

    status: FaultReportStatus
    title: str
    mode: ActionMode
    tone: Optional[ActionTone] = None
    destructive: bool = False
    loading: bool = False
    disabled: bool = False
