"""
Fault report detail orchestrator.

Owns the single writable copy of one fault report while its detail screen is
active, keeps the offered status actions in sync with (status, role, owner)
and performs status transitions against the remote authority.

Status is never changed locally. After every mutation attempt the report is
reloaded, so what the screen shows is always the authority's view.
"""

import logging
from typing import Callable, Optional

from faultflow.core.errors import (
    GatewayError,
    TransitionErrorCode,
    as_gateway_error,
    error_message_key,
)
from faultflow.core.gateway import ReportGateway
from faultflow.core.i18n import Translator, translate as default_translate
from faultflow.models.enums import FaultReportStatus, UserRole
from faultflow.schemas.fault_report import ActorProfile, FaultReport, TransitionAction
from faultflow.services.status_action_bar import Presenter, StatusActionBar
from faultflow.services.transitions import resolve_transitions

logger = logging.getLogger(__name__)


class FaultReportDetails:
    """Detail state for one fault report."""

    def __init__(self, gateway: ReportGateway):
        self.gateway = gateway
        self.report: Optional[FaultReport] = None
        self.actor: Optional[ActorProfile] = None
        self.loading = False
        self.updating = False
        self.error: Optional[str] = None
        self.error_code: Optional[TransitionErrorCode] = None
        self.not_found = False
        self._status_actions: list[TransitionAction] = []

    @property
    def role(self) -> Optional[UserRole]:
        return self.actor.role if self.actor else None

    @property
    def is_owner(self) -> bool:
        """The acting resident created this report."""
        return bool(
            self.report
            and self.actor
            and self.actor.role == UserRole.RESIDENT
            and self.report.created_by_user_id
            and self.report.created_by_user_id == self.actor.id
        )

    @property
    def status_actions(self) -> list[TransitionAction]:
        return list(self._status_actions)

    def _recompute_actions(self) -> None:
        if self.report is None:
            self._status_actions = []
            return
        self._status_actions = resolve_transitions(self.report.status, self.role, self.is_owner)

    def _set_error(self, error: GatewayError) -> None:
        self.error = error_message_key(error.code)
        self.error_code = error.code

    def clear_error(self) -> None:
        self.error = None
        self.error_code = None

    async def load(self, report_id: str) -> None:
        """Fetch the actor and the report. Failures leave no actions offered."""
        self.loading = True
        self.clear_error()
        try:
            actor = await self.gateway.fetch_actor_profile()
            report = await self.gateway.fetch_report(report_id)
        except Exception as e:
            error = as_gateway_error(e)
            if isinstance(e, GatewayError):
                logger.warning(f"[DETAILS] Loading report {report_id} failed: {error.code.value}")
            else:
                logger.exception(f"[DETAILS] Loading report {report_id} failed")
            self._set_error(error)
            self._status_actions = []
            return
        finally:
            self.loading = False

        self.actor = actor
        if report is None:
            logger.warning(f"[DETAILS] Report {report_id} not found")
            self.report = None
            self.not_found = True
            self._set_error(GatewayError(TransitionErrorCode.NOT_FOUND))
            self._status_actions = []
            return

        self.report = report
        self.not_found = False
        self._recompute_actions()

    async def request_transition(self, report_id: str, status: FaultReportStatus) -> bool:
        """
        Ask the authority to move the report to `status`.

        Returns False without doing anything while another request is
        outstanding. Otherwise the report is reloaded once whatever the
        outcome; a rejected mutation is re-raised after that reload.
        """
        if self.updating:
            logger.debug(f"[DETAILS] Transition to {status.value} ignored, update in flight")
            return False

        self.updating = True
        self.clear_error()
        try:
            failure: Optional[Exception] = None
            try:
                await self.gateway.mutate_status(report_id, status)
            except Exception as e:
                failure = e

            await self.load(report_id)

            if failure is not None:
                failure = as_gateway_error(failure)
                logger.warning(
                    f"[DETAILS] Transition {report_id} -> {status.value} rejected: "
                    f"{failure.code.value}"
                )
                self._set_error(failure)
                raise failure

            logger.info(f"[DETAILS] Transition {report_id} -> {status.value} done")
            return True
        finally:
            self.updating = False

    def action_bar(
        self,
        presenter: Presenter,
        on_status_changed: Optional[Callable[[], object]] = None,
        translate: Optional[Translator] = None,
    ) -> StatusActionBar:
        """A fresh action bar for the currently loaded report."""

        async def on_action(status: FaultReportStatus) -> bool:
            if self.report is None:
                return False
            return await self.request_transition(self.report.id, status)

        return StatusActionBar(
            actions=lambda: self.status_actions,
            on_action=on_action,
            presenter=presenter,
            on_status_changed=on_status_changed,
            translate=translate or default_translate,
        )
