"""
Report read/mutate gateway.

Reads go straight to the Firestore REST API (access is enforced by security
rules), status mutations go through the privileged callable function.
The remote side decides whether a transition is valid; this module only
reports its verdict as a GatewayError code.
"""

import logging
from typing import Any, Optional, Protocol

import httpx

from faultflow.core.config import Settings, get_settings
from faultflow.core.errors import (
    GatewayError,
    TransitionErrorCode,
    error_code_from_status,
)
from faultflow.models.enums import FaultReportStatus, UserRole
from faultflow.schemas.fault_report import ActorProfile, FaultReport

logger = logging.getLogger(__name__)

FAULT_REPORTS_COLLECTION = "faultReports"
USERS_COLLECTION = "users"


class ReportGateway(Protocol):
    """What the detail orchestrator needs from the remote authority."""

    async def fetch_report(self, report_id: str) -> Optional[FaultReport]:
        ...

    async def fetch_actor_profile(self) -> ActorProfile:
        ...

    async def mutate_status(self, report_id: str, status: FaultReportStatus) -> None:
        ...


def decode_value(value: dict[str, Any]) -> Any:
    """Decode one typed Firestore REST value."""
    if "nullValue" in value:
        return None
    if "stringValue" in value:
        return value["stringValue"]
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "timestampValue" in value:
        return value["timestampValue"]
    if "referenceValue" in value:
        return value["referenceValue"]
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    return None


def decode_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Decode a Firestore document's field map into plain Python values."""
    return {name: decode_value(value) for name, value in fields.items()}


def map_fault_report(document: dict[str, Any]) -> FaultReport:
    """Map a Firestore document to a FaultReport."""
    report_id = document["name"].rsplit("/", 1)[-1]
    data = decode_fields(document.get("fields", {}))
    return FaultReport(
        id=report_id,
        title=data.get("title") or "",
        description=data.get("description") or "",
        location=data.get("location") or "",
        urgency=data.get("urgency") or "medium",
        status=data["status"],
        created_by_user_id=data.get("createdBy") or data.get("userId"),
        building_id=data.get("buildingId"),
        apartment_number=data.get("apartmentNumber"),
        image_urls=data.get("images") or data.get("imageUrls") or [],
        assigned_to=data.get("assignedTo"),
        created_at=data.get("createdAt"),
        updated_at=data.get("updatedAt"),
        resolved_at=data.get("resolvedAt"),
    )


def _parse_role(value: Any) -> Optional[UserRole]:
    if value is None:
        return None
    try:
        return UserRole(value)
    except ValueError:
        logger.warning(f"[GATEWAY] Unknown user role: {value!r}")
        return None


def _error_from_response(response: httpx.Response) -> GatewayError:
    """Build a GatewayError from a Firestore or callable error body."""
    rpc_status = None
    message = ""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        rpc_status = body["error"].get("status")
        message = body["error"].get("message") or ""
    code = error_code_from_status(rpc_status, response.status_code)
    return GatewayError(code, message, http_status=response.status_code)


class FirebaseGateway:
    """
    Gateway to the Firebase backend for one signed-in user.

    Every call opens its own HTTP client; the timeout comes from settings.
    """

    def __init__(
        self,
        uid: str,
        id_token: str,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.uid = uid
        self.id_token = id_token
        self.settings = settings or get_settings()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=self.settings.request_timeout_seconds,
            headers={"Authorization": f"Bearer {self.id_token}"},
        )

    async def _get_document(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        url = f"{self.settings.documents_url}/{collection}/{doc_id}"
        try:
            async with self._client() as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"[GATEWAY] Read {collection}/{doc_id} failed: {e}")
            raise GatewayError(TransitionErrorCode.OTHER, str(e)) from e

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            error = _error_from_response(response)
            logger.warning(
                f"[GATEWAY] Read {collection}/{doc_id} rejected: "
                f"{response.status_code} {error.code.value}"
            )
            raise error
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"[GATEWAY] Read {collection}/{doc_id} returned a non-JSON body")
            raise GatewayError(TransitionErrorCode.OTHER, "Unreadable response body") from e

    async def fetch_report(self, report_id: str) -> Optional[FaultReport]:
        """Fetch a fault report, None when it does not exist."""
        document = await self._get_document(FAULT_REPORTS_COLLECTION, report_id)
        if document is None:
            return None
        try:
            return map_fault_report(document)
        except (KeyError, ValueError) as e:
            logger.error(f"[GATEWAY] Malformed fault report {report_id}: {e}")
            raise GatewayError(TransitionErrorCode.OTHER, "Malformed fault report") from e

    async def fetch_actor_profile(self) -> ActorProfile:
        """Fetch the signed-in user's profile. A missing profile has no role."""
        document = await self._get_document(USERS_COLLECTION, self.uid)
        if document is None:
            logger.warning(f"[GATEWAY] No profile for user {self.uid}")
            return ActorProfile(id=self.uid)
        data = decode_fields(document.get("fields", {}))
        return ActorProfile(id=self.uid, role=_parse_role(data.get("role")))

    async def fetch_actor_role(self) -> Optional[UserRole]:
        """Fetch only the signed-in user's role."""
        profile = await self.fetch_actor_profile()
        return profile.role

    async def mutate_status(
        self,
        report_id: str,
        status: FaultReportStatus,
        comment: Optional[str] = None,
    ) -> None:
        """Ask the authority to move a report to a new status."""
        payload: dict[str, Any] = {"faultReportId": report_id, "status": status.value}
        if comment is not None:
            payload["comment"] = comment
        url = self.settings.callable_url(self.settings.update_status_function)

        try:
            async with self._client() as client:
                response = await client.post(url, json={"data": payload})
        except httpx.HTTPError as e:
            logger.error(f"[GATEWAY] Status update for {report_id} failed: {e}")
            raise GatewayError(TransitionErrorCode.OTHER, str(e)) from e

        if response.status_code != 200:
            error = _error_from_response(response)
            logger.warning(
                f"[GATEWAY] Status update {report_id} -> {status.value} rejected: "
                f"{error.code.value} {error.message}"
            )
            raise error

        logger.info(f"[GATEWAY] Status update {report_id} -> {status.value} accepted")
