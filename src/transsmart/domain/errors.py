"""Errors raised by the Transsmart client."""

from __future__ import annotations


class TranssmartError(Exception):
    """Base error; ``message`` is the server body text or the transport error."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class LoginFailed(TranssmartError):
    """The basic-auth token exchange failed."""


class RequestFailed(TranssmartError):
    """An authenticated call failed at the transport or HTTP layer."""
