"""Shared application error hierarchy."""

from __future__ import annotations


class AppError(Exception):
    """Base exception for collector specific failures."""


class ConfigError(AppError):
    """Raised when no usable credentials or options were supplied."""


class AuthError(AppError):
    """Raised when the login exchange does not yield a session."""


class NetworkError(AppError):
    """Represents failures talking with the remote API."""


class HttpError(NetworkError):
    """Raised on transport failures or non-2xx responses."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TimeoutError(HttpError):
    """Raised when a request exceeds the transport timeout."""


class ParseError(AppError):
    """Raised when a response body is not valid JSON."""


__all__ = [
    "AppError",
    "ConfigError",
    "AuthError",
    "NetworkError",
    "HttpError",
    "TimeoutError",
    "ParseError",
]
