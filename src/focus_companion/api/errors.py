"""Exceptions raised by the Focus Companion API layer."""

from typing import Optional

import httpx


class FocusCompanionError(Exception):
    """Base class for Focus Companion errors."""


class MissingCredentialsError(FocusCompanionError):
    """Raised when a request needs a bearer token and none is stored."""

    def __init__(self, message: str = "No authentication token available"):
        super().__init__(message)


class APIError(FocusCompanionError):
    """Raised for non-2xx responses from the API."""

    def __init__(self, status_code: int, server_message: Optional[str] = None):
        self.status_code = status_code
        self.server_message = server_message
        super().__init__(server_message or f"Request failed (Status: {status_code})")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_auth_error(self) -> bool:
        return self.status_code in (401, 403)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "APIError":
        """Build an error from a response, using the body's ``message`` field."""
        message = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            message = str(body["message"])
        return cls(response.status_code, message)
