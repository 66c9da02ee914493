"""
Transition authorization table.

Maps (current status, role, owner flag) to the ordered status actions the
client may offer. Pure lookups only: no I/O, never raises. The remote
authority still has the final word on every transition.
"""

from typing import Iterable, Optional

from faultflow.models.enums import ActionMode, ActionTone, FaultReportStatus, UserRole
from faultflow.schemas.fault_report import TransitionAction

S = FaultReportStatus

WORKFLOW_ROLES = frozenset({
    UserRole.HOUSING_COMPANY,
    UserRole.SERVICE_COMPANY,
    UserRole.MAINTENANCE,
    UserRole.ADMIN,
})

TERMINAL_STATUSES = frozenset({S.CLOSED, S.CANCELLED, S.NOT_POSSIBLE})

OPEN_STATUSES = frozenset({S.CREATED, S.OPEN, S.IN_PROGRESS, S.WAITING})

CLOSED_STATUSES = frozenset({
    S.COMPLETED,
    S.INCOMPLETE,
    S.NOT_POSSIBLE,
    S.CANCELLED,
    S.RESOLVED,
    S.CLOSED,
})

CONFIRM_TITLE_KEY = "faults.statusConfirm.title"

_CANCEL = TransitionAction(
    status=S.CANCELLED,
    label_key="faults.statusActions.cancel",
    mode=ActionMode.OUTLINED,
    destructive=True,
    confirm_title_key=CONFIRM_TITLE_KEY,
    confirm_body_key="faults.statusConfirm.cancelBody",
)
_MOVE_TO_QUEUE = TransitionAction(
    status=S.WAITING,
    label_key="faults.statusActions.moveToQueue",
    mode=ActionMode.OUTLINED,
)
_MARK_COMPLETED = TransitionAction(
    status=S.COMPLETED,
    label_key="faults.statusActions.markCompleted",
    mode=ActionMode.CONTAINED,
)

# Base graph, keyed by normalized source status. Order is display order.
TRANSITION_TABLE: dict[FaultReportStatus, tuple[TransitionAction, ...]] = {
    S.CREATED: (
        TransitionAction(
            status=S.OPEN,
            label_key="faults.statusActions.open",
            mode=ActionMode.CONTAINED,
        ),
        _CANCEL,
    ),
    S.OPEN: (
        TransitionAction(
            status=S.IN_PROGRESS,
            label_key="faults.statusActions.startWork",
            mode=ActionMode.CONTAINED,
        ),
        _MOVE_TO_QUEUE,
        _CANCEL,
    ),
    S.WAITING: (
        TransitionAction(
            status=S.IN_PROGRESS,
            label_key="faults.statusActions.resumeWork",
            mode=ActionMode.CONTAINED,
        ),
        _CANCEL,
    ),
    S.IN_PROGRESS: (
        _MOVE_TO_QUEUE,
        _MARK_COMPLETED,
        TransitionAction(
            status=S.INCOMPLETE,
            label_key="faults.statusActions.markIncomplete",
            mode=ActionMode.OUTLINED,
            tone=ActionTone.WARNING,
        ),
        TransitionAction(
            status=S.NOT_POSSIBLE,
            label_key="faults.statusActions.markNotPossible",
            mode=ActionMode.OUTLINED,
            destructive=True,
            confirm_title_key=CONFIRM_TITLE_KEY,
            confirm_body_key="faults.statusConfirm.notPossibleBody",
        ),
    ),
}

# Extra actions a service company gets while work is ongoing or unfinished.
SUPPLEMENTAL_TABLE: dict[tuple[UserRole, FaultReportStatus], tuple[TransitionAction, ...]] = {
    (UserRole.SERVICE_COMPANY, S.IN_PROGRESS): (_MARK_COMPLETED, _MOVE_TO_QUEUE, _CANCEL),
    (UserRole.SERVICE_COMPANY, S.INCOMPLETE): (_MARK_COMPLETED, _MOVE_TO_QUEUE, _CANCEL),
}

RESIDENT_OWNER_STATUSES = frozenset({S.CANCELLED})

STATUS_LABEL_KEYS = {
    S.CREATED: "faults.status.created",
    S.OPEN: "faults.status.open",
    S.IN_PROGRESS: "faults.status.inProgress",
    S.WAITING: "faults.status.waiting",
    S.COMPLETED: "faults.status.completed",
    S.INCOMPLETE: "faults.status.incomplete",
    S.NOT_POSSIBLE: "faults.status.notPossible",
    S.CANCELLED: "faults.status.cancelled",
    S.RESOLVED: "faults.status.resolved",
    S.CLOSED: "faults.status.closed",
}


def is_workflow_role(role: Optional[UserRole]) -> bool:
    return role in WORKFLOW_ROLES


def normalize_for_transition(status: FaultReportStatus) -> FaultReportStatus:
    """Resolved and closed reports share the (edgeless) completed row."""
    if status in (S.RESOLVED, S.CLOSED):
        return S.COMPLETED
    return status


def allowed_transitions(
    status: FaultReportStatus,
    role: Optional[UserRole],
    is_owner: bool,
) -> list[TransitionAction]:
    """Base actions for a report, ordered for display."""
    if status in TERMINAL_STATUSES:
        return []
    actions = TRANSITION_TABLE.get(normalize_for_transition(status), ())

    if is_workflow_role(role):
        return list(actions)
    if role == UserRole.RESIDENT and is_owner:
        return [a for a in actions if a.status in RESIDENT_OWNER_STATUSES]
    return []


def allowed_next_statuses(
    status: FaultReportStatus,
    role: Optional[UserRole],
    is_owner: bool,
) -> list[FaultReportStatus]:
    return [a.status for a in allowed_transitions(status, role, is_owner)]


def supplemental_transitions(
    status: FaultReportStatus,
    role: Optional[UserRole],
    existing: Iterable[TransitionAction] = (),
) -> list[TransitionAction]:
    """Role-specific extras, skipping targets already offered in `existing`."""
    if role is None:
        return []
    extra = SUPPLEMENTAL_TABLE.get((role, status), ())
    taken = {a.status for a in existing}
    return [a for a in extra if a.status not in taken]


def resolve_transitions(
    status: FaultReportStatus,
    role: Optional[UserRole],
    is_owner: bool,
) -> list[TransitionAction]:
    """Everything a detail screen offers: base table plus supplemental extras."""
    base = allowed_transitions(status, role, is_owner)
    return base + supplemental_transitions(status, role, base)


def reachable_statuses(status: FaultReportStatus) -> frozenset[FaultReportStatus]:
    """Direct successors of `status` over the base and supplemental graph."""
    targets = {a.status for a in TRANSITION_TABLE.get(normalize_for_transition(status), ())}
    for (_, source), extra in SUPPLEMENTAL_TABLE.items():
        if source == status:
            targets.update(a.status for a in extra)
    return frozenset(targets)


def status_label_key(status: FaultReportStatus) -> str:
    return STATUS_LABEL_KEYS.get(status, "faults.status.open")


def is_open_status(status: FaultReportStatus) -> bool:
    return status in OPEN_STATUSES


def is_closed_status(status: FaultReportStatus) -> bool:
    return status in CLOSED_STATUSES
