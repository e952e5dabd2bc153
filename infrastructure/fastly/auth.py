# infrastructure/fastly/auth.py
from __future__ import annotations

import logging
import time
from typing import Optional

import requests

from domain.models import ApiKeyCredentials, Credentials, Session, UserPasswordCredentials
from shared.errors import AuthError, ConfigError

logger = logging.getLogger(__name__)

LOGIN_PATH = "login"


def credentials_from_options(
    *,
    key: Optional[str] = None,
    user: Optional[str] = None,
    password: Optional[str] = None,
) -> Credentials:
    """Pick the credential variant once at startup.

    User and password take precedence over an API key when both are given.
    """

    if user and password:
        return UserPasswordCredentials(user=user, password=password)
    if key:
        return ApiKeyCredentials(key=key)
    raise ConfigError("A Fastly API Key or username and password are required")


def _extract_session_cookie(header: Optional[str]) -> Optional[str]:
    """Return the ``name=value`` pair of a ``Set-Cookie`` header."""

    if not header:
        return None
    pair = header.split(";", 1)[0].strip()
    if "=" not in pair:
        return None
    name, _, value = pair.partition("=")
    if not name.strip() or not value.strip():
        return None
    return pair


class FastlyAuth:
    """Builds the credential context used by every Fastly request."""

    def __init__(
        self,
        *,
        session: requests.Session,
        base_url: str = "https://api.fastly.com",
    ) -> None:
        self._session = session
        self._base_url = base_url.rstrip("/")

    def authenticate(self, credentials: Optional[Credentials]) -> Session:
        if isinstance(credentials, ApiKeyCredentials):
            if not credentials.key:
                raise ConfigError("Empty Fastly API Key")
            return Session(api_key=credentials.key)
        if isinstance(credentials, UserPasswordCredentials):
            if not credentials.user or not credentials.password:
                raise ConfigError("Both username and password are required")
            return Session(cookie=self.login(credentials))
        raise ConfigError("A Fastly API Key or username and password are required")

    def login(self, credentials: UserPasswordCredentials) -> str:
        """POST ``/login`` and return the session cookie."""

        url = f"{self._base_url}/{LOGIN_PATH}"
        payload = {"user": credentials.user, "password": credentials.password}
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        start = time.time()
        try:
            r = self._session.post(url, data=payload, headers=headers)
        except requests.RequestException as e:
            logger.warning("Fastly login failed: %s", e, extra={"result": "error"})
            raise AuthError(f"Login request failed: {e}") from e

        if not 200 <= r.status_code < 300:
            logger.warning(
                f"Auth failed (code={r.status_code})",
                extra={"result": "error"},
            )
            raise AuthError(f"Login rejected with status {r.status_code}")

        cookie = _extract_session_cookie(r.headers.get("Set-Cookie"))
        if not cookie:
            logger.warning("Login response carried no session cookie", extra={"result": "error"})
            raise AuthError("Login did not return a session cookie")

        logger.info(
            "Fastly login ok",
            extra={"result": "ok", "elapsed_ms": int((time.time() - start) * 1000)},
        )
        return cookie


__all__ = ["FastlyAuth", "credentials_from_options"]
