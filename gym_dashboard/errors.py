# gym_dashboard/errors.py
"""Exception types raised by the API layer and the message extraction used for toasts."""

from __future__ import annotations

from typing import Any, Optional


DEFAULT_ERROR_MESSAGE = "An error occurred"


class GymDashboardError(Exception):
    """Base class for all dashboard errors."""
    pass


class ApiError(GymDashboardError):
    """A request to the gym API did not succeed."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload
        self.method = method
        self.path = path

    @property
    def server_message(self) -> Optional[str]:
        """The message the server put in its error payload, if any."""
        payload = self.payload
        if isinstance(payload, dict):
            message = payload.get("message")
            if isinstance(message, str) and message.strip():
                return message
            return None
        if isinstance(payload, str) and payload.strip():
            return payload.strip()
        return None


class NetworkError(ApiError):
    """Transport failure: the server never answered."""
    pass


class ServerError(ApiError):
    """The server answered with an error status."""
    pass


class ValidationError(GymDashboardError):
    """Form input rejected before any request was made."""
    pass


def describe_error(exc: BaseException, fallback: str = DEFAULT_ERROR_MESSAGE) -> str:
    """
    Pick the text shown to the user for a failed call.

    Server-provided message first, then the exception text, then `fallback`.
    """
    if isinstance(exc, ApiError):
        server_message = exc.server_message
        if server_message:
            return server_message
    text = str(exc).strip()
    return text or fallback
