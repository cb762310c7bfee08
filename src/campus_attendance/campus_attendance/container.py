from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Callable, Optional

import httpx

from .attendance.repository import StateRepository
from .attendance.service import AttendanceSessionStore
from .attendance.sql_state_repository import SqlStateRepository
from .auth.model import Credentials
from .auth.service import SessionManager
from .calendar.service import CalendarService
from .core.constants import (
    DEFAULT_LAST_KNOWN_MAX_AGE_SECONDS,
    DEFAULT_LOCATION_TIMEOUT_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_REFRESH_DELAY_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_VALIDATION_CACHE_TTL_SECONDS,
)
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection
from .gateway.http_gateway import HttpAttendanceGateway
from .geo.zones import ZoneRegistry
from .location.repository import PositionProvider
from .location.service import LocationService
from .sessions.clock import SessionClock
from .validation.cache import ValidationCache
from .validation.factory import ValidationStrategyFactory
from .validation.service import ValidationEngine


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    state_repo: StateRepository

    session: SessionManager
    gateway: HttpAttendanceGateway
    zones: ZoneRegistry
    session_clock: SessionClock

    validation_engine: ValidationEngine
    attendance_store: AttendanceSessionStore
    calendar_service: CalendarService
    location_service: Optional[LocationService]


def build_container(
    settings: ModuleType,
    *,
    credentials: Optional[Credentials] = None,
    position_provider: Optional[PositionProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    on_session_expired: Optional[Callable[[], None]] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig(uri=str(getattr(settings, "STATE_DATABASE_URI"))))
    apply_schema(conn)
    state_repo = SqlStateRepository(conn)

    session = SessionManager(credentials)
    gateway = HttpAttendanceGateway(
        str(getattr(settings, "API_BASE_URL")),
        session,
        timeout=float(getattr(settings, "REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS)),
        transport=transport,
    )

    geofence_file = getattr(settings, "GEOFENCE_FILE", None)
    zones = ZoneRegistry.from_file(geofence_file) if geofence_file else ZoneRegistry.default()
    session_clock = SessionClock()

    validation_engine = ValidationEngine(
        zones,
        session_clock=session_clock,
        cache=ValidationCache(
            ttl_seconds=float(getattr(settings, "VALIDATION_CACHE_TTL_SECONDS", DEFAULT_VALIDATION_CACHE_TTL_SECONDS))
        ),
        strategy_factory=ValidationStrategyFactory(),
    )
    attendance_store = AttendanceSessionStore(
        gateway,
        session,
        state_repo,
        session_clock=session_clock,
        poll_interval_seconds=float(getattr(settings, "POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS)),
        refresh_delay_seconds=float(getattr(settings, "REFRESH_DELAY_SECONDS", DEFAULT_REFRESH_DELAY_SECONDS)),
        on_session_expired=on_session_expired,
    )
    calendar_service = CalendarService(gateway, session, state_repo)

    location_service = None
    if position_provider is not None:
        location_service = LocationService(
            position_provider,
            timeout_seconds=float(getattr(settings, "LOCATION_TIMEOUT_SECONDS", DEFAULT_LOCATION_TIMEOUT_SECONDS)),
            last_known_max_age_seconds=float(
                getattr(settings, "LAST_KNOWN_MAX_AGE_SECONDS", DEFAULT_LAST_KNOWN_MAX_AGE_SECONDS)
            ),
        )

    return Container(
        conn=conn,
        state_repo=state_repo,
        session=session,
        gateway=gateway,
        zones=zones,
        session_clock=session_clock,
        validation_engine=validation_engine,
        attendance_store=attendance_store,
        calendar_service=calendar_service,
        location_service=location_service,
    )
