"""Abstract base class for platform publishers.

This module defines the interface that all platform implementations must follow,
plus the shared request/logging plumbing they use to talk to remote APIs.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Iterable, Optional

import httpx

from ..auth.token_guard import TokenGuard
from ..config import PublishingSettings, load_settings
from ..http import client_session, read_json
from .errors import PlatformAPIError, PublishError
from .models import Account, MediaItem, PublishResult

# Remote API calls (console output is configured by the CLI)
_api_logger = logging.getLogger("publishing_api")
_logger = logging.getLogger("publishing")

TIMEOUT_ERROR = "timeout"


def coerce_media(media: Optional[Iterable[Any]]) -> list[MediaItem]:
    """Accept MediaItems or caller dicts, preserving order."""
    if not media:
        return []
    return [item if isinstance(item, MediaItem) else MediaItem.from_dict(item) for item in media]


class PlatformPublisher(ABC):
    """Abstract base class for platform publishers.

    Each platform implements `_publish` with its own upload choreography.
    `publish` is the boundary: it never raises, every failure (precondition,
    remote API, transport, deadline) comes back as a failed PublishResult.
    """

    def __init__(
        self,
        settings: PublishingSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
        token_guard: TokenGuard | None = None,
    ):
        """Initialize the publisher.

        Args:
            settings: Publishing configuration (endpoints, timeouts, defaults).
            http_client: Optional shared client. When omitted, a short-lived
                client is opened per request.
            token_guard: Token expiry check and refresh.
        """
        self.settings = settings or load_settings()
        self._http_client = http_client
        self._token_guard = token_guard or TokenGuard()

        # API call counter for logging
        self._api_call_count = 0

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """Return the platform identifier (e.g., 'instagram', 'tiktok')."""
        ...

    async def publish(
        self,
        account: Account,
        content: str,
        media: Optional[Iterable[Any]] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> PublishResult:
        """Publish one post to this platform.

        Args:
            account: Connected account for this platform.
            content: Caption/body text.
            media: Ordered media items (MediaItem or {"url", "type"} dicts).
            metadata: Platform-specific options; ignored by most platforms.

        Returns:
            PublishResult with success status and details.
        """
        return await self._guard(self._run_publish(account, content, media, metadata))

    async def _run_publish(
        self,
        account: Account,
        content: str,
        media: Optional[Iterable[Any]],
        metadata: Optional[dict[str, Any]],
    ) -> PublishResult:
        media_items = coerce_media(media)
        return await self._publish(account, content or "", media_items, metadata or {})

    async def _guard(self, operation: Awaitable[PublishResult]) -> PublishResult:
        """Run an operation under the publish deadline, converting every error to a result."""
        try:
            return await asyncio.wait_for(operation, timeout=self.settings.timeouts.publish_seconds)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            _logger.warning(f"{self.platform_name} publish timed out")
            return self._make_result(success=False, error=TIMEOUT_ERROR)
        except PublishError as e:
            _logger.warning(f"{self.platform_name} publish failed: {e}")
            return self._make_result(success=False, error=str(e))
        except Exception as e:
            _logger.error(f"{self.platform_name} publishing error: {e}", exc_info=True)
            return self._make_result(success=False, error=str(e) or type(e).__name__)

    @abstractmethod
    async def _publish(
        self,
        account: Account,
        content: str,
        media: list[MediaItem],
        metadata: dict[str, Any],
    ) -> PublishResult:
        """Run the platform choreography. May raise; `publish` converts errors."""
        ...

    async def _access_token(self, account: Account) -> str:
        """Valid token for the account, refreshed first if it expired."""
        return await self._token_guard.ensure_valid_token(account)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        error_message: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a request to the platform API.

        Args:
            method: HTTP method.
            url: Absolute URL.
            error_message: Fallback message when the error envelope has none.
            **kwargs: Passed to httpx (params, data, json, content, headers).

        Returns:
            The successful response.

        Raises:
            PlatformAPIError: If the platform reports an error.
        """
        self._api_call_count += 1
        call_no = self._api_call_count
        endpoint = url.split("?", 1)[0]

        # Log the API call (never the token)
        _api_logger.info(f"API CALL #{call_no} | {self.platform_name} | {method.upper()} {endpoint}")

        async with client_session(self._http_client, self.settings.timeouts.request_seconds) as client:
            response = await client.request(method, url, **kwargs)

        if self._is_error_response(response):
            payload = read_json(response)
            message = self._extract_error(payload) or error_message
            _api_logger.error(
                f"API CALL #{call_no} | {self.platform_name} | HTTP {response.status_code} | ERROR: {message}"
            )
            raise PlatformAPIError(
                message,
                platform=self.platform_name,
                status_code=response.status_code,
                payload=payload,
            )

        _api_logger.info(f"API CALL #{call_no} | {self.platform_name} | SUCCESS: HTTP {response.status_code}")
        return response

    async def _request_json(
        self,
        method: str,
        url: str,
        *,
        error_message: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Same as `_request`, returning the decoded JSON body."""
        response = await self._request(method, url, error_message=error_message, **kwargs)
        return read_json(response)

    def _is_error_response(self, response: httpx.Response) -> bool:
        return not response.is_success

    def _extract_error(self, payload: dict[str, Any]) -> Optional[str]:
        """Pull the message out of the platform's error envelope.

        Default handles the `{"error": {"message": ...}}` shape used by the
        Graph API and Google APIs.
        """
        error = payload.get("error")
        if isinstance(error, dict):
            return error.get("message")
        if isinstance(error, str):
            return error
        return None

    async def _fetch_media(self, url: str) -> bytes:
        """Download source media bytes from its hosted URL."""
        _api_logger.info(f"FETCH | {self.platform_name} | GET {url.split('?', 1)[0]}")

        async with client_session(self._http_client, self.settings.timeouts.request_seconds) as client:
            response = await client.get(url)

        if not response.is_success:
            raise PublishError(
                f"Failed to fetch media from {url} (HTTP {response.status_code})",
                platform=self.platform_name,
            )
        return response.content

    def _make_result(
        self,
        success: bool,
        platform_post_id: Optional[str] = None,
        error: Optional[str] = None,
        **extra: Any,
    ) -> PublishResult:
        """Create a PublishResult for this platform."""
        if success:
            return PublishResult.succeeded(self.platform_name, platform_post_id, **extra)
        return PublishResult.failed(self.platform_name, error or "Unknown error")
