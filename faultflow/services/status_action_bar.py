"""
Status action bar.

Drives the buttons that change a fault report's status:

- only one transition runs at a time, every button is disabled meanwhile
- destructive transitions need an explicit confirmation first
- a transition the authority rejected as forbidden or stale is hidden for
  the rest of this bar's lifetime

The bar never changes status itself; it hands the target to `on_action`
and renders whatever actions the owner provides afterwards.
"""

import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol, Sequence

from faultflow.core.errors import (
    GatewayError,
    as_gateway_error,
    error_message_key,
    is_suppressing,
)
from faultflow.core.i18n import Translator, translate as default_translate
from faultflow.models.enums import FaultReportStatus
from faultflow.schemas.fault_report import ActionButton, TransitionAction
from faultflow.services.transitions import CONFIRM_TITLE_KEY

logger = logging.getLogger(__name__)

ActionHandler = Callable[[FaultReportStatus], Awaitable[Optional[bool]]]


class Presenter(Protocol):
    """User-facing dialogs the bar needs."""

    async def confirm(self, title: str, body: str, confirm_label: str, cancel_label: str) -> bool:
        ...

    def alert(self, title: str, message: str) -> None:
        ...


class BarState(str, Enum):
    IDLE = "idle"
    CONFIRM_PENDING = "confirm_pending"
    EXECUTING = "executing"


class StatusActionBar:
    """One mounted action bar. Create a new instance on every remount."""

    def __init__(
        self,
        actions: Callable[[], Sequence[TransitionAction]],
        on_action: ActionHandler,
        presenter: Presenter,
        on_status_changed: Optional[Callable[[], object]] = None,
        translate: Translator = default_translate,
    ):
        self._actions = actions
        self._on_action = on_action
        self._presenter = presenter
        self._on_status_changed = on_status_changed
        self._t = translate
        self.state = BarState.IDLE
        self.pending_status: Optional[FaultReportStatus] = None
        self._suppressed: set[FaultReportStatus] = set()

    @property
    def suppressed(self) -> frozenset[FaultReportStatus]:
        return frozenset(self._suppressed)

    def visible_actions(self) -> list[TransitionAction]:
        return [a for a in self._actions() if a.status not in self._suppressed]

    def render(self) -> list[ActionButton]:
        busy = self.state != BarState.IDLE
        executing = self.pending_status if self.state == BarState.EXECUTING else None
        return [
            ActionButton(
                status=action.status,
                title=self._t(action.label_key),
                mode=action.mode,
                tone=action.tone,
                destructive=action.destructive,
                loading=action.status == executing,
                disabled=busy,
            )
            for action in self.visible_actions()
        ]

    async def press(self, status: FaultReportStatus) -> bool:
        """
        Handle a tap on the action targeting `status`.

        Returns True when the transition was carried out.
        """
        if self.state != BarState.IDLE:
            return False
        action = next((a for a in self.visible_actions() if a.status == status), None)
        if action is None:
            return False

        if action.destructive or action.requires_confirmation:
            self.state = BarState.CONFIRM_PENDING
            self.pending_status = status
            try:
                confirmed = await self._presenter.confirm(
                    self._t(action.confirm_title_key or CONFIRM_TITLE_KEY),
                    self._t(action.confirm_body_key or ""),
                    self._t("common.confirm"),
                    self._t("common.cancel"),
                )
            except Exception:
                self._reset()
                raise
            if not confirmed:
                self._reset()
                return False

        return await self._execute(action)

    async def _execute(self, action: TransitionAction) -> bool:
        self.state = BarState.EXECUTING
        self.pending_status = action.status
        try:
            result = await self._on_action(action.status)
        except Exception as e:
            code = as_gateway_error(e).code
            if is_suppressing(code):
                self._suppressed.add(action.status)
            if isinstance(e, GatewayError):
                logger.warning(
                    f"[STATUS BAR] Transition to {action.status.value} failed: {code.value}"
                )
            else:
                logger.exception(f"[STATUS BAR] Transition to {action.status.value} failed")
            self._presenter.alert(self._t("common.error"), self._t(error_message_key(code)))
            return False
        finally:
            self._reset()

        if result is False:
            return False
        if self._on_status_changed is not None:
            try:
                self._on_status_changed()
            except Exception:
                logger.exception("[STATUS BAR] Status change callback failed")
        return True

    def _reset(self) -> None:
        self.state = BarState.IDLE
        self.pending_status = None

