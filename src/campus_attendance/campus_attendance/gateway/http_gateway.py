from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Optional

import httpx

from ..attendance.model import AudioRecording, CapturedPhoto
from ..auth.service import SessionManager
from ..core.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from ..core.exceptions import SessionExpired, TransientNetworkFailure, ValidationError
from .model import GatewayResponse
from .repository import AttendanceGateway

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."


def _read_media(uri: str) -> bytes:
    path = Path(uri[len("file://"):] if uri.startswith("file://") else uri)
    try:
        return path.read_bytes()
    except OSError as e:
        raise ValidationError(f"Cannot read captured file {uri}") from e


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {"data": body}


class HttpAttendanceGateway(AttendanceGateway):
    """REST implementation of the attendance backend.

    Each call opens a short-lived client carrying the current bearer token.
    Calls are bounded by ``timeout`` and never retried here.
    """

    def __init__(
        self,
        base_url: str,
        session: SessionManager,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._timeout = float(timeout)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            headers=self._session.auth_headers(),
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> GatewayResponse:
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out after %ss", method, path, self._timeout)
            raise TransientNetworkFailure("Request timeout. Server took too long to respond.") from e
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransientNetworkFailure("Network error. Please check your connection and try again.") from e

        if response.status_code in (401, 403):
            logger.warning("%s %s rejected with %s", method, path, response.status_code)
            raise SessionExpired(SESSION_EXPIRED_MESSAGE)

        body = _json_body(response)
        if response.is_success:
            return GatewayResponse(
                success=bool(body.get("success", True)),
                data=body.get("data"),
                error=body.get("error"),
                status_code=response.status_code,
            )

        error = body.get("error") or body.get("message") or f"Request failed with status {response.status_code}"
        logger.warning("%s %s returned %s: %s", method, path, response.status_code, error)
        return GatewayResponse(success=False, error=str(error), status_code=response.status_code)

    async def submit_attendance(
        self,
        *,
        employee_id: str,
        photo: CapturedPhoto,
        audio: AudioRecording,
        location_label: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> GatewayResponse:
        upload_timestamp = int(time.time() * 1000)

        form: dict[str, str] = {
            "employeeNumber": str(employee_id),
            "locationType": "CAMPUS",
            "timestamp": str(upload_timestamp),
        }
        if self._session.current and self._session.current.username:
            form["username"] = self._session.current.username
        if location_label and location_label.strip():
            form["location"] = location_label
        if latitude is not None:
            form["latitude"] = str(latitude)
        if longitude is not None:
            form["longitude"] = str(longitude)
        if audio.duration:
            form["audioDuration"] = str(audio.duration)

        files = {
            "photo": (f"photo_{upload_timestamp}.jpg", await asyncio.to_thread(_read_media, photo.uri), "image/jpeg"),
            "audio": (f"audio_{upload_timestamp}.m4a", await asyncio.to_thread(_read_media, audio.uri), "audio/m4a"),
        }
        return await self._request("POST", "/attendance", data=form, files=files)

    async def checkout(self, *, employee_id: str) -> GatewayResponse:
        return await self._request("POST", "/attendance/checkout", json={"employeeNumber": employee_id})

    async def get_today(self, *, employee_id: str) -> GatewayResponse:
        return await self._request(
            "GET", f"/attendance/today/{employee_id}", headers={"Cache-Control": "no-cache"}
        )

    async def get_calendar(self, *, employee_id: str, year: int, month: int) -> GatewayResponse:
        return await self._request(
            "GET", f"/attendance/calendar/{employee_id}", params={"year": year, "month": month}
        )

    async def get_field_trips(self, *, employee_id: str) -> GatewayResponse:
        return await self._request(
            "GET", f"/user-field-trips/employee/{employee_id}", headers={"Cache-Control": "no-cache"}
        )

    async def get_holidays(self, *, year: int, month: int) -> GatewayResponse:
        return await self._request("GET", "/calendar", params={"year": year, "month": month})
