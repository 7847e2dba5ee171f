"""Tests for the shared publisher boundary and the platform registry."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from socials_publisher.config import PublishingSettings, TimeoutSettings
from socials_publisher.platforms import MediaItem, PlatformRegistry, PublishResult
from socials_publisher.platforms.base import PlatformPublisher
from socials_publisher.platforms.facebook import FacebookPublisher
from socials_publisher.platforms.twitter import TwitterPublisher

TWEETS = "https://api.twitter.com/2/tweets"


class StubPublisher(PlatformPublisher):
    """Publisher whose choreography is supplied by the test."""

    def __init__(self, behaviour, **kwargs: Any):
        super().__init__(**kwargs)
        self._behaviour = behaviour

    @property
    def platform_name(self) -> str:
        return "stub"

    async def _publish(self, account, content, media, metadata) -> PublishResult:
        return await self._behaviour(content, media, metadata)


# =============================================================================
# Publish boundary
# =============================================================================


class TestPublishBoundary:
    """Every failure mode becomes a failed PublishResult."""

    @pytest.mark.asyncio
    async def test_deadline_expiry_is_timeout(self, make_account):
        async def slow(content, media, metadata):
            await asyncio.sleep(5)

        fast_settings = PublishingSettings(timeouts=TimeoutSettings(publish_seconds=0.01))
        publisher = StubPublisher(slow, settings=fast_settings)

        result = await publisher.publish(make_account("stub"), "Hi")

        assert result.success is False
        assert result.error == "timeout"
        assert result.platform == "stub"

    @pytest.mark.asyncio
    async def test_http_timeout_is_timeout(self, make_publisher, make_account, transport):
        def read_timeout(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        transport.add("POST", TWEETS, read_timeout)
        publisher = make_publisher(TwitterPublisher)

        result = await publisher.publish(make_account("twitter"), "Hi", [])

        assert result.success is False
        assert result.error == "timeout"

    @pytest.mark.asyncio
    async def test_transport_error_message(self, make_publisher, make_account, transport):
        def refused(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        transport.add("POST", TWEETS, refused)
        publisher = make_publisher(TwitterPublisher)

        result = await publisher.publish(make_account("twitter"), "Hi", [])

        assert result.success is False
        assert result.error == "Connection refused"

    @pytest.mark.asyncio
    async def test_unexpected_exception(self, settings, make_account):
        async def broken(content, media, metadata):
            raise KeyError("data")

        publisher = StubPublisher(broken, settings=settings)

        result = await publisher.publish(make_account("stub"), "Hi")

        assert result.success is False
        assert result.error == "'data'"

    @pytest.mark.asyncio
    async def test_content_media_and_metadata_are_normalised(self, settings, make_account):
        seen = {}

        async def capture(content, media, metadata):
            seen.update(content=content, media=media, metadata=metadata)
            return PublishResult.succeeded("stub", "1")

        publisher = StubPublisher(capture, settings=settings)

        await publisher.publish(
            make_account("stub"), None, [{"url": "https://cdn.example.com/v.mp4", "type": "VIDEO"}]
        )

        assert seen["content"] == ""
        assert seen["metadata"] == {}
        assert seen["media"] == [MediaItem("https://cdn.example.com/v.mp4", "video")]

    @pytest.mark.asyncio
    async def test_invalid_media_becomes_failed_result(self, settings, make_account):
        async def never(content, media, metadata):
            raise AssertionError("should not run")

        publisher = StubPublisher(never, settings=settings)

        result = await publisher.publish(make_account("stub"), "Hi", [{"type": "image"}])

        assert result.success is False
        assert "requires a url" in result.error


# =============================================================================
# Registry
# =============================================================================


class TestPlatformRegistry:
    """Tests for the fixed platform lookup."""

    def test_all_six_platforms_registered(self):
        assert sorted(PlatformRegistry.available_platforms()) == [
            "facebook",
            "instagram",
            "linkedin",
            "tiktok",
            "twitter",
            "youtube",
        ]

    def test_lookup_is_case_insensitive(self):
        assert PlatformRegistry.is_registered("Facebook")
        assert PlatformRegistry.get_publisher_class("FACEBOOK") is FacebookPublisher

    def test_unknown_platform(self):
        assert PlatformRegistry.get_publisher_class("myspace") is None
        with pytest.raises(ValueError, match="Unknown platform: myspace"):
            PlatformRegistry.get_publisher("myspace")

    def test_get_publisher_passes_dependencies(self, settings, http_client):
        publisher = PlatformRegistry.get_publisher("twitter", settings=settings, http_client=http_client)

        assert isinstance(publisher, TwitterPublisher)
        assert publisher.settings is settings
