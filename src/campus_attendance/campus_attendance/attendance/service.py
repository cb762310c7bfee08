from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from ..auth.service import SessionManager
from ..common.datetime_utils import date_key, now_local
from ..core.constants import (
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_REFRESH_DELAY_SECONDS,
    STATE_STORAGE_KEY,
)
from ..core.enums import AttendanceDayStatus, LocationMode, RecordState, ViewMode
from ..core.exceptions import (
    CaptureIncomplete,
    DomainError,
    NotAuthenticated,
    SessionExpired,
    StorageError,
    SubmissionRejected,
    TransientNetworkFailure,
)
from ..gateway.repository import AttendanceGateway
from ..sessions.clock import SessionClock
from .capture import CaptureFlow
from .model import AttendanceRecord, FieldTrip, PersistedState, TrackedRecord
from .repository import StateRepository
from .status import can_checkout, day_status, status_label

logger = logging.getLogger(__name__)


class AttendanceSessionStore:
    """Single writer for the day's attendance records and the capture flow.

    Records are keyed by date. ``mark_attendance`` writes an UNCONFIRMED
    record; ``fetch_today_attendance`` is the only place a CONFIRMED record
    (or its absence) comes from. Every change to the record slice is
    written through to durable storage; capture state stays in memory.

    ``mark_attendance`` raises on failure; ``checkout_attendance`` logs and
    returns False.
    """

    def __init__(
        self,
        gateway: AttendanceGateway,
        session: SessionManager,
        storage: StateRepository,
        *,
        session_clock: Optional[SessionClock] = None,
        clock: Callable[[], datetime] = now_local,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        refresh_delay_seconds: float = DEFAULT_REFRESH_DELAY_SECONDS,
        on_session_expired: Optional[Callable[[], None]] = None,
    ):
        self._gateway = gateway
        self._session = session
        self._storage = storage
        self._session_clock = session_clock or SessionClock()
        self._clock = clock
        self._poll_interval = float(poll_interval_seconds)
        self._refresh_delay = float(refresh_delay_seconds)
        self._on_session_expired = on_session_expired

        self._state = PersistedState()
        self._capture = CaptureFlow()
        self._department: Optional[str] = None
        self._poll_task: Optional[asyncio.Task] = None
        self._refresh_task: Optional[asyncio.Task] = None

        session.on_sign_out(self.reset)

    # ----- read side -----

    @property
    def capture(self) -> CaptureFlow:
        return self._capture

    @property
    def current_view(self) -> ViewMode:
        return self._capture.current_view

    @property
    def uploading(self) -> bool:
        return self._capture.session.uploading

    @property
    def records(self) -> dict[str, TrackedRecord]:
        return dict(self._state.attendance_records)

    @property
    def today_attendance_marked(self) -> bool:
        return self._state.today_attendance_marked

    @property
    def location_mode(self) -> Optional[LocationMode]:
        return self._state.user_location_type

    @property
    def is_field_trip(self) -> bool:
        return self._state.is_field_trip

    @property
    def field_trip_dates(self) -> list[FieldTrip]:
        return list(self._state.field_trip_dates)

    @property
    def department(self) -> Optional[str]:
        return self._department

    def set_department(self, department: Optional[str]) -> None:
        self._department = department

    def fetch_user_department(self) -> Optional[str]:
        credentials = self._session.current
        self._department = credentials.department if credentials else None
        if self._department is None:
            logger.warning("Signed-in employee has no project department")
        return self._department

    def _today_key(self) -> str:
        return date_key(self._clock().date())

    @property
    def today_tracked(self) -> Optional[TrackedRecord]:
        return self._state.attendance_records.get(self._today_key())

    @property
    def today_record(self) -> Optional[AttendanceRecord]:
        tracked = self.today_tracked
        return tracked.record if tracked else None

    def day_status(self) -> AttendanceDayStatus:
        return day_status(self.today_record)

    def status_label(self, now: Optional[datetime] = None) -> str:
        return status_label(self.today_record, now or self._clock())

    @property
    def can_checkout(self) -> bool:
        return can_checkout(self.today_record)

    # ----- record collection -----

    def upsert_record(self, record: AttendanceRecord, state: RecordState = RecordState.CONFIRMED) -> None:
        """Insert or replace the record for ``record.date``."""
        self._state.attendance_records[record.date] = TrackedRecord(record=record, state=state)
        self._persist()

    def remove_record(self, day: str) -> None:
        self._state.attendance_records.pop(day, None)
        self._persist()

    def _persist(self) -> None:
        self._storage.save(STATE_STORAGE_KEY, self._state.to_dict())

    def restore(self) -> None:
        try:
            data = self._storage.load(STATE_STORAGE_KEY)
            if not data:
                return
            self._state = PersistedState.from_dict(data)
        except (StorageError, KeyError, TypeError, ValueError):
            logger.exception("Discarding unreadable persisted attendance state")
            self._state = PersistedState()
            self._storage.delete(STATE_STORAGE_KEY)

    def _sync_today_flag(self) -> bool:
        has_record = self._today_key() in self._state.attendance_records
        if self._state.today_attendance_marked != has_record:
            self._state.today_attendance_marked = has_record
            self._persist()
        return has_record

    # ----- actions -----

    async def mark_attendance(self, location: str, lat: Optional[float] = None, lng: Optional[float] = None) -> None:
        employee_id = self._session.employee_id
        if not employee_id:
            raise NotAuthenticated("Please login to mark attendance")

        capture = self._capture.session
        if not capture.is_complete:
            raise CaptureIncomplete("A photo and an audio recording are required to mark attendance")

        capture.uploading = True
        try:
            response = await self._gateway.submit_attendance(
                employee_id=employee_id,
                photo=capture.photo,
                audio=capture.audio_recording,
                location_label=location,
                latitude=lat,
                longitude=lng,
            )
            if not response.success:
                raise SubmissionRejected(response.error or "Upload failed")

            now = self._clock()
            record = AttendanceRecord(
                date=date_key(now.date()),
                check_in_time=now.isoformat(),
                session_type=self._session_clock.current_session_type(now),
                taken_location=location,
                latitude=lat,
                longitude=lng,
            )
            self._state.today_attendance_marked = True
            self.upsert_record(record, RecordState.UNCONFIRMED)
            self._capture.retake_all()
            logger.info("Attendance submitted for %s at %s", record.date, location)

            self._schedule_refresh()
        finally:
            self._capture.session.uploading = False

    async def checkout_attendance(self) -> bool:
        employee_id = self._session.employee_id
        if not employee_id:
            logger.warning("Checkout attempted without a signed-in employee")
            return False

        if not self.can_checkout:
            logger.info("Nothing to check out for %s", self._today_key())
            return False

        try:
            response = await self._gateway.checkout(employee_id=employee_id)
            if not response.success:
                logger.error("Checkout rejected: %s", response.error)
                return False
            await self.fetch_today_attendance()
            return True
        except SessionExpired:
            logger.error("Checkout failed: session expired")
            self._notify_session_expired()
            return False
        except DomainError:
            logger.exception("Checkout failed")
            return False

    async def fetch_today_attendance(self) -> bool:
        """Reconcile today's record with the backend.

        Returns whether today is marked. Overlapping calls converge because
        each one replaces the whole record for the date.
        """
        employee_id = self._session.employee_id
        if not employee_id:
            return False

        today = self._clock().date()
        try:
            response = await self._gateway.get_today(employee_id=employee_id)
        except TransientNetworkFailure:
            logger.warning("Could not refresh today's attendance, keeping local state")
            return self._sync_today_flag()

        if response.success and response.data:
            record = AttendanceRecord.from_payload(response.data, day=today)
            self._state.today_attendance_marked = True
            self.upsert_record(record, RecordState.CONFIRMED)
            return True

        self._state.today_attendance_marked = False
        self.remove_record(date_key(today))
        return False

    async def fetch_location_settings(self) -> LocationMode:
        """Resolve today's location mode from the employee's field trips.

        Falls back to CAMPUS, the stricter mode, on any failure.
        """
        employee_id = self._session.employee_id
        if not employee_id:
            return self._state.user_location_type or LocationMode.CAMPUS

        try:
            response = await self._gateway.get_field_trips(employee_id=employee_id)
            if response.success and isinstance(response.data, dict):
                trips = [FieldTrip.from_payload(t) for t in response.data.get("fieldTrips") or []]
                today = self._clock().date()
                on_trip = any(t.covers(today) for t in trips)

                self._state.user_location_type = LocationMode.FIELDTRIP if on_trip else LocationMode.CAMPUS
                self._state.is_field_trip = on_trip
                self._state.field_trip_dates = trips
                self._persist()
                logger.debug("Location mode %s (%d field trips)", self._state.user_location_type.value, len(trips))
                return self._state.user_location_type

            logger.warning("Failed to fetch location settings: %s", response.error)
        except (DomainError, KeyError, TypeError, ValueError):
            logger.exception("Error fetching location settings")

        self._state.user_location_type = LocationMode.CAMPUS
        self._state.is_field_trip = False
        self._persist()
        return LocationMode.CAMPUS

    async def initialize(self) -> None:
        """Restore persisted state and, when signed in, sync and start polling."""
        self.restore()
        if not self._session.is_authenticated:
            self._state.today_attendance_marked = False
            return

        self.fetch_user_department()
        await self.fetch_location_settings()
        try:
            await self.fetch_today_attendance()
        except SessionExpired:
            self._notify_session_expired()
            return
        self.start_polling()

    async def refresh(self) -> None:
        if not self._session.is_authenticated:
            return
        self.fetch_user_department()
        await self.fetch_location_settings()
        await self.fetch_today_attendance()

    async def on_foreground(self) -> None:
        try:
            await self.refresh()
        except SessionExpired:
            self._notify_session_expired()

    # ----- background work -----

    def _schedule_refresh(self) -> None:
        if self._refresh_task and not self._refresh_task.done():
            self._refresh_task.cancel()
        self._refresh_task = asyncio.get_running_loop().create_task(self._deferred_refresh())

    async def _deferred_refresh(self) -> None:
        await asyncio.sleep(self._refresh_delay)
        try:
            await self.fetch_today_attendance()
        except SessionExpired:
            self._notify_session_expired()
        except DomainError:
            logger.exception("Deferred attendance refresh failed")

    async def wait_for_pending_refresh(self) -> None:
        if self._refresh_task is not None:
            await asyncio.gather(self._refresh_task, return_exceptions=True)

    def start_polling(self) -> None:
        if self._poll_task and not self._poll_task.done():
            return
        self._poll_task = asyncio.get_running_loop().create_task(self._poll())

    def stop_polling(self) -> None:
        if self._poll_task and not self._poll_task.done():
            self._poll_task.cancel()
        self._poll_task = None

    @property
    def is_polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    async def _poll(self) -> None:
        while self._session.is_authenticated:
            await asyncio.sleep(self._poll_interval)
            try:
                await self.fetch_today_attendance()
            except SessionExpired:
                self._notify_session_expired()
                break
            except DomainError:
                logger.exception("Attendance poll failed")

    def _notify_session_expired(self) -> None:
        logger.warning("Backend reported an expired session")
        if self._on_session_expired is not None:
            self._on_session_expired()

    def sign_out(self) -> None:
        if self._session.is_authenticated:
            self._session.sign_out()
        else:
            self.reset()

    def reset(self) -> None:
        """Drop everything on sign-out, including durable storage."""
        self.stop_polling()
        if self._refresh_task and not self._refresh_task.done():
            self._refresh_task.cancel()
        self._refresh_task = None
        self._state = PersistedState()
        self._capture = CaptureFlow()
        self._department = None
        self._storage.delete(STATE_STORAGE_KEY)
        logger.info("Attendance state cleared")
