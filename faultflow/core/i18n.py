"""Default English strings for the keys emitted by faultflow.

Screens normally pass their own translate function; this catalog keeps the
package usable without one.
"""

from typing import Callable

Translator = Callable[[str], str]

MESSAGES: dict[str, str] = {
    # Common
    "common.error": "Error",
    "common.cancel": "Cancel",
    "common.confirm": "Confirm",
    # Status labels
    "faults.status.created": "Created",
    "faults.status.open": "Open",
    "faults.status.inProgress": "In progress",
    "faults.status.waiting": "Waiting",
    "faults.status.completed": "Completed",
    "faults.status.incomplete": "Incomplete",
    "faults.status.notPossible": "Not possible",
    "faults.status.cancelled": "Cancelled",
    "faults.status.resolved": "Resolved",
    "faults.status.closed": "Closed",
    # Status actions
    "faults.statusActions.open": "Open report",
    "faults.statusActions.startWork": "Start work",
    "faults.statusActions.resumeWork": "Resume work",
    "faults.statusActions.moveToQueue": "Move to queue",
    "faults.statusActions.markCompleted": "Mark completed",
    "faults.statusActions.markIncomplete": "Mark incomplete",
    "faults.statusActions.markNotPossible": "Mark not possible",
    "faults.statusActions.cancel": "Cancel report",
    # Confirmations
    "faults.statusConfirm.title": "Change status?",
    "faults.statusConfirm.cancelBody": "The fault report will be cancelled. This cannot be undone.",
    "faults.statusConfirm.notPossibleBody": "The repair will be marked as not possible. This cannot be undone.",
    # Errors
    "faults.statusError.permission": "You do not have permission to change this status.",
    "faults.statusError.transition": "This status change is no longer possible.",
    "faults.statusError.notFound": "The fault report was not found.",
    "faults.statusError.generic": "Updating the status failed. Please try again.",
    "faults.loadError.generic": "Loading the fault report failed.",
}


def translate(key: str) -> str:
    """Look up a message, returning the key itself when it is unknown."""
    return MESSAGES.get(key, key)
