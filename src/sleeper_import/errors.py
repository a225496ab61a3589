"""Errors raised while talking to the Sleeper API."""

from typing import Optional


class SleeperAPIError(Exception):
    """Raised on a non-2xx response or a transport failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UserNotFoundError(SleeperAPIError):
    """Raised when a Sleeper username does not resolve to a user."""
