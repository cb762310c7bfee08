from __future__ import annotations

import logging
from typing import Callable, Optional

from ..common.validators import require_non_empty
from .model import Credentials

logger = logging.getLogger(__name__)


class SessionManager:
    """Holds the signed-in employee and hands out auth headers.

    Token refresh and the login screens live outside this package.
    """

    def __init__(self, credentials: Optional[Credentials] = None):
        self._credentials = credentials
        self._sign_out_listeners: list[Callable[[], None]] = []

    @property
    def current(self) -> Optional[Credentials]:
        return self._credentials

    @property
    def employee_id(self) -> Optional[str]:
        return self._credentials.employee_id if self._credentials else None

    @property
    def is_authenticated(self) -> bool:
        return self._credentials is not None

    def sign_in(self, credentials: Credentials) -> None:
        require_non_empty(credentials.employee_id, "Employee number")
        require_non_empty(credentials.token, "Token")
        self._credentials = credentials
        logger.info("Signed in employee %s", credentials.employee_id)

    def sign_out(self) -> None:
        if self._credentials is None:
            return
        logger.info("Signing out employee %s", self._credentials.employee_id)
        self._credentials = None
        for listener in list(self._sign_out_listeners):
            listener()

    def on_sign_out(self, listener: Callable[[], None]) -> None:
        self._sign_out_listeners.append(listener)

    def auth_headers(self) -> dict[str, str]:
        if not self._credentials:
            return {}
        return {"Authorization": f"Bearer {self._credentials.token}"}
