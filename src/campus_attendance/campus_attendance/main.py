from __future__ import annotations

import logging
from typing import Callable, Optional

import httpx
from dotenv import load_dotenv

from config import get_settings_module, load_settings

from .auth.model import Credentials
from .container import Container, build_container
from .database.bootstrap import list_tables
from .location.repository import PositionProvider

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_client(
    *,
    credentials: Optional[Credentials] = None,
    position_provider: Optional[PositionProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    on_session_expired: Optional[Callable[[], None]] = None,
) -> Container:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        settings,
        credentials=credentials,
        position_provider=position_provider,
        transport=transport,
        on_session_expired=on_session_expired,
    )

    if getattr(settings, "DEBUG", False):
        logger.debug(
            "settings=%s api=%s state=%s tables=%s",
            settings_module,
            getattr(settings, "API_BASE_URL"),
            container.conn.uri,
            list_tables(container.conn),
        )
    return container
