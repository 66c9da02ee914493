"""Test fixtures for faultflow."""

import asyncio
from typing import Optional

import pytest

from faultflow.core.errors import GatewayError, TransitionErrorCode
from faultflow.models.enums import FaultReportStatus, UserRole
from faultflow.schemas.fault_report import ActorProfile, FaultReport

REPORT_ID = "report-1"
RESIDENT_ID = "resident-1"


def make_report(status: FaultReportStatus, created_by: str = RESIDENT_ID) -> FaultReport:
    return FaultReport(
        id=REPORT_ID,
        title="Leaking tap",
        description="Kitchen tap drips constantly",
        location="Kitchen",
        status=status,
        created_by_user_id=created_by,
    )


class FakeGateway:
    """In-memory authority. Accepted mutations change the stored status."""

    def __init__(
        self,
        status: FaultReportStatus = FaultReportStatus.OPEN,
        role: Optional[UserRole] = UserRole.SERVICE_COMPANY,
        actor_id: str = "actor-1",
    ):
        self.report: Optional[FaultReport] = make_report(status)
        self.actor = ActorProfile(id=actor_id, role=role)
        self.mutate_error: Optional[GatewayError] = None
        self.fetch_error: Optional[Exception] = None
        self.fail_fetch_after_mutation = False
        self.gate: Optional[asyncio.Event] = None
        self.mutations: list[tuple[str, FaultReportStatus]] = []
        self.fetches = 0

    async def fetch_actor_profile(self) -> ActorProfile:
        if self.fetch_error:
            raise self.fetch_error
        return self.actor

    async def fetch_report(self, report_id: str) -> Optional[FaultReport]:
        self.fetches += 1
        if self.fetch_error:
            raise self.fetch_error
        return self.report

    async def mutate_status(self, report_id: str, status: FaultReportStatus) -> None:
        self.mutations.append((report_id, status))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_fetch_after_mutation:
            self.fetch_error = GatewayError(TransitionErrorCode.OTHER, "offline")
        if self.mutate_error:
            raise self.mutate_error
        self.report = self.report.model_copy(update={"status": status})


class FakePresenter:
    """Records dialogs; answers confirmations with `answer`."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.confirmations: list[tuple[str, str]] = []
        self.alerts: list[tuple[str, str]] = []

    async def confirm(self, title: str, body: str, confirm_label: str, cancel_label: str) -> bool:
        self.confirmations.append((title, body))
        return self.answer

    def alert(self, title: str, message: str) -> None:
        self.alerts.append((title, message))


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def presenter() -> FakePresenter:
    return FakePresenter()
