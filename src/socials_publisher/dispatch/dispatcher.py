"""Routes one publish call to the adapter for its platform."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

import httpx

from ..auth.token_guard import TokenGuard
from ..config import PublishingSettings, load_settings
from ..platforms.base import PlatformPublisher
from ..platforms.models import Account, PublishResult
from ..platforms.registry import PlatformRegistry

_logger = logging.getLogger("publishing")


class Dispatcher:
    """Looks up the publisher for a platform name and runs it.

    Unknown platforms fail without touching the network. A publisher that
    raises despite its own boundary still yields a failed result.
    """

    def __init__(
        self,
        settings: PublishingSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
        token_guard: TokenGuard | None = None,
        publishers: Optional[Mapping[str, PlatformPublisher]] = None,
    ):
        """Initialize the dispatcher.

        Args:
            settings: Shared publishing configuration.
            http_client: Optional client handed to every publisher.
            token_guard: Shared token guard.
            publishers: Prebuilt publishers keyed by platform name; replaces
                the registry lookup when given.
        """
        self.settings = settings or load_settings()
        self._http_client = http_client
        self._token_guard = token_guard or TokenGuard()
        self._publishers = (
            {name.lower(): publisher for name, publisher in publishers.items()}
            if publishers is not None
            else None
        )

    def get_publisher(self, platform_name: str) -> Optional[PlatformPublisher]:
        """Publisher for a platform name (case-insensitive), or None if unsupported."""
        name = platform_name.lower()
        if self._publishers is not None:
            return self._publishers.get(name)

        if not PlatformRegistry.is_registered(name):
            return None

        return PlatformRegistry.get_publisher(
            name,
            settings=self.settings,
            http_client=self._http_client,
            token_guard=self._token_guard,
        )

    async def dispatch(
        self,
        platform_name: str,
        account: Account,
        content: str,
        media: Optional[Iterable[Any]] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> PublishResult:
        """Publish to a single platform.

        Returns:
            The publisher's result, or a failed result for unsupported
            platforms and unexpected publisher errors.
        """
        try:
            publisher = self.get_publisher(platform_name)
            if publisher is None:
                _logger.warning(f"Unsupported platform requested: {platform_name}")
                return PublishResult.failed(platform_name, f"Unsupported platform: {platform_name}")

            return await publisher.publish(account, content, media, metadata)
        except Exception as e:
            _logger.error(f"Publishing to {platform_name} failed: {e}", exc_info=True)
            return PublishResult.failed(platform_name, str(e) or type(e).__name__)
