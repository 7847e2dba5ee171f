"""Exceptions raised inside platform publishers.

Publishers convert all of these into failed PublishResults at their
boundary. Auxiliary operations (YouTube metadata, TikTok video info) let
them propagate to the caller.
"""

from __future__ import annotations

from typing import Any


class PublishError(Exception):
    """Base exception for publishing failures."""

    def __init__(self, message: str, platform: str | None = None):
        super().__init__(message)
        self.platform = platform


class PreconditionError(PublishError):
    """Request cannot be published as given; raised before any network call."""


class PlatformAPIError(PublishError):
    """A platform returned an error response."""

    def __init__(
        self,
        message: str,
        platform: str | None = None,
        status_code: int | None = None,
        payload: Any = None,
    ):
        super().__init__(message, platform)
        self.status_code = status_code
        self.payload = payload


class TokenRefreshError(PublishError):
    """The access token was expired and could not be refreshed."""
