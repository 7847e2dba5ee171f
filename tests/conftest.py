"""Shared test fixtures and configuration.

Publishers are exercised against an httpx.MockTransport that records every
request, so tests can assert on the exact calls each platform makes
without touching the network.
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest
from mock_http import IMAGE_URL, VIDEO_URL, RecordingTransport

from socials_publisher.auth import TokenGuard
from socials_publisher.config import PublishingSettings
from socials_publisher.platforms import Account, MediaItem

# =============================================================================
# HTTP fixtures
# =============================================================================


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def http_client(transport: RecordingTransport) -> httpx.AsyncClient:
    """AsyncClient whose requests are served by the recording transport."""
    return httpx.AsyncClient(transport=httpx.MockTransport(transport.handler))


@pytest.fixture
def settings() -> PublishingSettings:
    return PublishingSettings()


@pytest.fixture
def token_guard() -> TokenGuard:
    """Guard whose refresher fails loudly if a test did not expect a refresh."""

    async def _unexpected_refresh(platform: str, refresh_token: str) -> dict[str, Any]:
        raise AssertionError(f"Unexpected token refresh for {platform}")

    return TokenGuard(refresher=_unexpected_refresh)


@pytest.fixture
def make_publisher(settings, http_client, token_guard):
    """Build any publisher wired to the mock transport.

    Usage:
        publisher = make_publisher(FacebookPublisher)
    """

    def _make(publisher_cls, **overrides):
        kwargs = {"settings": settings, "http_client": http_client, "token_guard": token_guard}
        kwargs.update(overrides)
        return publisher_cls(**kwargs)

    return _make


# =============================================================================
# Account and media fixtures
# =============================================================================


@pytest.fixture
def make_account():
    def _make(platform: str, **overrides) -> Account:
        fields = {
            "platform": platform,
            "access_token": f"{platform}-token",
            "platform_user_id": f"{platform}-user",
        }
        fields.update(overrides)
        return Account(**fields)

    return _make


@pytest.fixture
def all_accounts(make_account) -> list[Account]:
    """One connected account for every supported platform."""
    return [
        make_account(platform)
        for platform in ("facebook", "instagram", "linkedin", "twitter", "tiktok", "youtube")
    ]


@pytest.fixture
def images() -> list[MediaItem]:
    return [MediaItem(IMAGE_URL.format(n=n), "image") for n in range(1, 4)]


@pytest.fixture
def video() -> MediaItem:
    return MediaItem(VIDEO_URL, "video")
