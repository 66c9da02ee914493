"""Pydantic schemas for faultflow."""

from faultflow.schemas.base import BaseSchema, FrozenSchema
from faultflow.schemas.fault_report import (
    ActionButton,
    ActorProfile,
    FaultReport,
    TransitionAction,
)

__all__ = [
    "BaseSchema",
    "FrozenSchema",
    "ActionButton",
    "ActorProfile",
    "FaultReport",
    "TransitionAction",
]
