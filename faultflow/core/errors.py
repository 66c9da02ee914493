"""
Error taxonomy for remote status transitions.

The remote authority reports failures with Firebase / Google RPC codes.
They are collapsed into four classes that decide how the client reacts:

- permission-denied: the actor may not perform this transition now
- failed-precondition: the server-side status already diverged
- not-found: the report is gone or not visible to the actor
- unknown: transport or unexpected failure, retryable
"""

from enum import Enum
from typing import Optional


class TransitionErrorCode(str, Enum):
    """Coarse result code of a remote call."""
    PERMISSION_DENIED = "permission-denied"
    FAILED_PRECONDITION = "failed-precondition"
    NOT_FOUND = "not-found"
    OTHER = "unknown"


# Google RPC status names as sent by Firestore REST and callable functions
_RPC_STATUS_CODES = {
    "PERMISSION_DENIED": TransitionErrorCode.PERMISSION_DENIED,
    "UNAUTHENTICATED": TransitionErrorCode.PERMISSION_DENIED,
    "FAILED_PRECONDITION": TransitionErrorCode.FAILED_PRECONDITION,
    "NOT_FOUND": TransitionErrorCode.NOT_FOUND,
}

_HTTP_STATUS_CODES = {
    401: TransitionErrorCode.PERMISSION_DENIED,
    403: TransitionErrorCode.PERMISSION_DENIED,
    404: TransitionErrorCode.NOT_FOUND,
    412: TransitionErrorCode.FAILED_PRECONDITION,
}

_SUPPRESSING_CODES = frozenset({
    TransitionErrorCode.PERMISSION_DENIED,
    TransitionErrorCode.FAILED_PRECONDITION,
})

_MESSAGE_KEYS = {
    TransitionErrorCode.PERMISSION_DENIED: "faults.statusError.permission",
    TransitionErrorCode.FAILED_PRECONDITION: "faults.statusError.transition",
    TransitionErrorCode.NOT_FOUND: "faults.statusError.notFound",
    TransitionErrorCode.OTHER: "faults.statusError.generic",
}


class GatewayError(Exception):
    """A remote call failed with a classified code."""

    def __init__(
        self,
        code: TransitionErrorCode,
        message: str = "",
        http_status: Optional[int] = None,
    ):
        super().__init__(message or code.value)
        self.code = code
        self.message = message
        self.http_status = http_status

    def __repr__(self) -> str:
        return f"GatewayError(code={self.code.value!r}, message={self.message!r})"


def normalize_error_code(code: Optional[str]) -> TransitionErrorCode:
    """Normalize a Firebase error code string such as 'functions/permission-denied'."""
    if not code:
        return TransitionErrorCode.OTHER
    tail = code.rsplit("/", 1)[-1].strip().lower().replace("_", "-")
    for known in TransitionErrorCode:
        if known.value == tail:
            return known
    return TransitionErrorCode.OTHER


def error_code_from_status(
    rpc_status: Optional[str] = None,
    http_status: Optional[int] = None,
) -> TransitionErrorCode:
    """Map an RPC status name, falling back to the HTTP status code."""
    if rpc_status and rpc_status.upper() in _RPC_STATUS_CODES:
        return _RPC_STATUS_CODES[rpc_status.upper()]
    if http_status is not None:
        return _HTTP_STATUS_CODES.get(http_status, TransitionErrorCode.OTHER)
    return TransitionErrorCode.OTHER


def is_suppressing(code: TransitionErrorCode) -> bool:
    """Whether a rejection proves the attempted transition invalid right now."""
    return code in _SUPPRESSING_CODES


def error_message_key(code: TransitionErrorCode) -> str:
    """Message key shown to the user for a failed transition."""
    return _MESSAGE_KEYS.get(code, _MESSAGE_KEYS[TransitionErrorCode.OTHER])


def as_gateway_error(error: Exception) -> GatewayError:
    """Wrap any failure as a GatewayError; SDK-style errors expose a string `code`."""
    if isinstance(error, GatewayError):
        return error
    code = getattr(error, "code", None)
    wrapped = GatewayError(normalize_error_code(code if isinstance(code, str) else None), str(error))
    wrapped.__cause__ = error
    return wrapped
