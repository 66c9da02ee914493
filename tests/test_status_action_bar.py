"""Tests for the status action bar."""

import asyncio

import pytest

from faultflow.core.errors import GatewayError, TransitionErrorCode
from faultflow.models.enums import FaultReportStatus, UserRole
from faultflow.services.fault_report_details import FaultReportDetails
from faultflow.services.notifications import RefreshSignal
from faultflow.services.status_action_bar import BarState, StatusActionBar
from faultflow.services.transitions import resolve_transitions
from tests.conftest import REPORT_ID, FakeGateway, FakePresenter

S = FaultReportStatus


async def mounted(gateway, presenter, on_status_changed=None):
    details = FaultReportDetails(gateway)
    await details.load(REPORT_ID)
    return details, details.action_bar(presenter, on_status_changed)


def rendered_statuses(bar: StatusActionBar) -> list[FaultReportStatus]:
    return [button.status for button in bar.render()]


@pytest.mark.asyncio
async def test_render_translates_labels(gateway: FakeGateway, presenter: FakePresenter):
    _, bar = await mounted(gateway, presenter)

    buttons = bar.render()

    assert [b.title for b in buttons] == ["Start work", "Move to queue", "Cancel report"]
    assert all(not b.disabled and not b.loading for b in buttons)
    assert buttons[2].destructive is True


@pytest.mark.asyncio
async def test_non_destructive_action_executes_and_notifies(
    gateway: FakeGateway, presenter: FakePresenter
):
    calls = []
    details, bar = await mounted(gateway, presenter, lambda: calls.append(1))

    done = await bar.press(S.IN_PROGRESS)

    assert done is True
    assert presenter.confirmations == []
    assert gateway.mutations == [(REPORT_ID, S.IN_PROGRESS)]
    assert calls == [1]
    assert bar.state == BarState.IDLE
    assert details.report.status == S.IN_PROGRESS
    assert S.COMPLETED in rendered_statuses(bar)


@pytest.mark.asyncio
async def test_declined_confirmation_never_mutates(gateway: FakeGateway):
    presenter = FakePresenter(answer=False)
    _, bar = await mounted(gateway, presenter)

    done = await bar.press(S.CANCELLED)

    assert done is False
    assert len(presenter.confirmations) == 1
    assert presenter.confirmations[0] == (
        "Change status?",
        "The fault report will be cancelled. This cannot be undone.",
    )
    assert gateway.mutations == []
    assert bar.state == BarState.IDLE


@pytest.mark.asyncio
async def test_confirmed_destructive_action_mutates_once(
    gateway: FakeGateway, presenter: FakePresenter
):
    _, bar = await mounted(gateway, presenter)

    done = await bar.press(S.CANCELLED)

    assert done is True
    assert gateway.mutations == [(REPORT_ID, S.CANCELLED)]
    assert rendered_statuses(bar) == []


@pytest.mark.asyncio
async def test_permission_denied_hides_only_that_action(
    gateway: FakeGateway, presenter: FakePresenter
):
    gateway.mutate_error = GatewayError(TransitionErrorCode.PERMISSION_DENIED)
    calls = []
    _, bar = await mounted(gateway, presenter, lambda: calls.append(1))

    done = await bar.press(S.WAITING)

    assert done is False
    assert S.WAITING not in rendered_statuses(bar)
    assert S.IN_PROGRESS in rendered_statuses(bar)
    assert presenter.alerts == [("Error", "You do not have permission to change this status.")]
    assert calls == []


@pytest.mark.asyncio
async def test_failed_precondition_on_cancel_keeps_status(
    gateway: FakeGateway, presenter: FakePresenter
):
    gateway.mutate_error = GatewayError(TransitionErrorCode.FAILED_PRECONDITION)
    details, bar = await mounted(gateway, presenter)
    fetches_before = gateway.fetches

    await bar.press(S.CANCELLED)

    assert S.CANCELLED not in rendered_statuses(bar)
    assert details.report.status == S.OPEN
    assert gateway.fetches == fetches_before + 1
    assert presenter.alerts == [("Error", "This status change is no longer possible.")]
    assert bar.suppressed == frozenset({S.CANCELLED})


@pytest.mark.asyncio
async def test_transient_failure_keeps_action(gateway: FakeGateway, presenter: FakePresenter):
    gateway.mutate_error = GatewayError(TransitionErrorCode.OTHER, "timeout")
    _, bar = await mounted(gateway, presenter)

    await bar.press(S.IN_PROGRESS)

    assert S.IN_PROGRESS in rendered_statuses(bar)
    assert bar.suppressed == frozenset()
    assert presenter.alerts == [("Error", "Updating the status failed. Please try again.")]


@pytest.mark.asyncio
async def test_not_found_is_reported_without_suppression(
    gateway: FakeGateway, presenter: FakePresenter
):
    gateway.mutate_error = GatewayError(TransitionErrorCode.NOT_FOUND)
    _, bar = await mounted(gateway, presenter)

    await bar.press(S.WAITING)

    assert bar.suppressed == frozenset()
    assert presenter.alerts == [("Error", "The fault report was not found.")]


@pytest.mark.asyncio
async def test_buttons_disabled_while_executing(gateway: FakeGateway, presenter: FakePresenter):
    gateway.gate = asyncio.Event()
    _, bar = await mounted(gateway, presenter)

    task = asyncio.create_task(bar.press(S.IN_PROGRESS))
    await asyncio.sleep(0)

    assert bar.state == BarState.EXECUTING
    buttons = bar.render()
    assert all(b.disabled for b in buttons)
    assert [b.status for b in buttons if b.loading] == [S.IN_PROGRESS]
    assert await bar.press(S.WAITING) is False

    gateway.gate.set()
    assert await task is True
    assert gateway.mutations == [(REPORT_ID, S.IN_PROGRESS)]


@pytest.mark.asyncio
async def test_unknown_status_press_is_ignored(gateway: FakeGateway, presenter: FakePresenter):
    _, bar = await mounted(gateway, presenter)

    assert await bar.press(S.COMPLETED) is False
    assert gateway.mutations == []


@pytest.mark.asyncio
async def test_remount_forgets_suppression(gateway: FakeGateway, presenter: FakePresenter):
    gateway.mutate_error = GatewayError(TransitionErrorCode.PERMISSION_DENIED)
    details, bar = await mounted(gateway, presenter)
    await bar.press(S.WAITING)

    fresh = details.action_bar(presenter)

    assert S.WAITING not in rendered_statuses(bar)
    assert S.WAITING in rendered_statuses(fresh)


@pytest.mark.asyncio
async def test_orchestrator_noop_does_not_notify(presenter: FakePresenter):
    calls = []
    outcomes = iter([False])

    async def on_action(status):
        return next(outcomes)

    actions = resolve_transitions(S.OPEN, UserRole.ADMIN, False)
    bar = StatusActionBar(lambda: actions, on_action, presenter, lambda: calls.append(1))

    assert await bar.press(S.IN_PROGRESS) is False
    assert calls == []


@pytest.mark.asyncio
async def test_unexpected_error_is_alerted(presenter: FakePresenter):
    async def on_action(status):
        raise RuntimeError("boom")

    actions = resolve_transitions(S.OPEN, UserRole.ADMIN, False)
    bar = StatusActionBar(lambda: actions, on_action, presenter)

    assert await bar.press(S.WAITING) is False
    assert bar.state == BarState.IDLE
    assert bar.suppressed == frozenset()
    assert presenter.alerts == [("Error", "Updating the status failed. Please try again.")]


@pytest.mark.asyncio
async def test_refresh_signal_as_notification_sink(gateway: FakeGateway, presenter: FakePresenter):
    signal = RefreshSignal()
    refreshed = []

    async def refresh_list():
        refreshed.append("list")

    signal.subscribe(refresh_list)
    signal.subscribe(lambda: refreshed.append("dashboard"))
    _, bar = await mounted(gateway, presenter, signal)

    await bar.press(S.IN_PROGRESS)
    await signal.drain()

    assert sorted(refreshed) == ["dashboard", "list"]


@pytest.mark.asyncio
async def test_sdk_style_error_code_suppresses(presenter: FakePresenter):
    class FunctionsError(Exception):
        code = "functions/permission-denied"

    async def on_action(status):
        raise FunctionsError("Insufficient role.")

    actions = resolve_transitions(S.OPEN, UserRole.ADMIN, False)
    bar = StatusActionBar(lambda: actions, on_action, presenter)

    await bar.press(S.WAITING)

    assert bar.suppressed == frozenset({S.WAITING})
    assert S.IN_PROGRESS in rendered_statuses(bar)


@pytest.mark.asyncio
async def test_failing_status_change_callback_does_not_escape(
    gateway: FakeGateway, presenter: FakePresenter
):
    def refresh_lists():
        raise RuntimeError("list refresh failed")

    details, bar = await mounted(gateway, presenter, refresh_lists)

    assert await bar.press(S.IN_PROGRESS) is True
    assert bar.state == BarState.IDLE
    assert details.report.status == S.IN_PROGRESS
    assert presenter.alerts == []
