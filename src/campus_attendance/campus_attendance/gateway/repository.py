from __future__ import annotations

from typing import Optional, Protocol

from ..attendance.model import AudioRecording, CapturedPhoto
from .model import GatewayResponse


class AttendanceGateway(Protocol):
    """Boundary to the attendance backend.

    Implementations raise SessionExpired on 401/403 and
    TransientNetworkFailure on timeouts or connectivity errors; every other
    outcome comes back as a GatewayResponse.
    """

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
        raise NotImplementedError

    async def checkout(self, *, employee_id: str) -> GatewayResponse:
        raise NotImplementedError

    async def get_today(self, *, employee_id: str) -> GatewayResponse:
        raise NotImplementedError

    async def get_calendar(self, *, employee_id: str, year: int, month: int) -> GatewayResponse:
        raise NotImplementedError

    async def get_field_trips(self, *, employee_id: str) -> GatewayResponse:
        raise NotImplementedError

    async def get_holidays(self, *, year: int, month: int) -> GatewayResponse:
        raise NotImplementedError
