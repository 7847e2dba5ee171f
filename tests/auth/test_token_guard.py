"""Tests for TokenGuard refresh-before-use."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import httpx
import pytest
from mock_http import IMAGE_URL, form_body, ok

from socials_publisher.auth import TokenGuard
from socials_publisher.platforms import Account, MediaItem, TokenRefreshError
from socials_publisher.platforms.facebook import FacebookPublisher
from socials_publisher.platforms.linkedin import LinkedInPublisher

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
API = "https://api.linkedin.com/v2"
GRAPH = "https://graph.facebook.com/v18.0"


def clock() -> datetime:
    return NOW


@pytest.fixture
def expired_account() -> Account:
    return Account(
        platform="LinkedIn",
        access_token="old-token",
        refresh_token="refresh-1",
        token_expires_at=NOW - timedelta(minutes=5),
    )


class TestEnsureValidToken:
    """Tests for the expiry check and refresh path."""

    @pytest.mark.asyncio
    async def test_unexpired_token_returned_without_refresh(self):
        refresher = AsyncMock()
        guard = TokenGuard(refresher=refresher, clock=clock)
        account = Account("linkedin", "live-token", token_expires_at=NOW + timedelta(hours=1))

        assert await guard.ensure_valid_token(account) == "live-token"
        refresher.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_expiry_means_never_expires(self):
        refresher = AsyncMock()
        guard = TokenGuard(refresher=refresher, clock=clock)

        assert await guard.ensure_valid_token(Account("twitter", "forever")) == "forever"
        refresher.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_expired_token_refreshed_once(self, expired_account):
        refresher = AsyncMock(return_value={"access_token": "new-token", "expires_in": 3600})
        guard = TokenGuard(refresher=refresher, clock=clock)

        token = await guard.ensure_valid_token(expired_account)

        assert token == "new-token"
        refresher.assert_awaited_once_with("linkedin", "refresh-1")
        assert expired_account.access_token == "new-token"
        assert expired_account.token_expires_at == NOW + timedelta(seconds=3600)
        assert expired_account.refresh_token == "refresh-1"

    @pytest.mark.asyncio
    async def test_expires_at_and_rotated_refresh_token(self, expired_account):
        refresher = AsyncMock(return_value={
            "access_token": "new-token",
            "expires_at": "2024-08-01T00:00:00Z",
            "refresh_token": "refresh-2",
        })
        guard = TokenGuard(refresher=refresher, clock=clock)

        await guard.ensure_valid_token(expired_account)

        assert expired_account.token_expires_at == datetime(2024, 8, 1, tzinfo=timezone.utc)
        assert expired_account.refresh_token == "refresh-2"

    @pytest.mark.asyncio
    async def test_expired_without_refresh_token(self):
        refresher = AsyncMock()
        guard = TokenGuard(refresher=refresher, clock=clock)
        account = Account("facebook", "old", token_expires_at=NOW - timedelta(days=1))

        with pytest.raises(TokenRefreshError, match="no refresh token"):
            await guard.ensure_valid_token(account)
        refresher.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_refresh_response_without_access_token(self, expired_account):
        guard = TokenGuard(refresher=AsyncMock(return_value={"error": "invalid_grant"}), clock=clock)

        with pytest.raises(TokenRefreshError, match="No access_token in refresh response"):
            await guard.ensure_valid_token(expired_account)
        assert expired_account.access_token == "old-token"

    @pytest.mark.asyncio
    async def test_fractional_expires_in_string(self, expired_account):
        guard = TokenGuard(
            refresher=AsyncMock(return_value={"access_token": "new-token", "expires_in": "3600.0"}),
            clock=clock,
        )

        await guard.ensure_valid_token(expired_account)

        assert expired_account.token_expires_at == NOW + timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_malformed_expiry_leaves_account_untouched(self, expired_account):
        guard = TokenGuard(
            refresher=AsyncMock(return_value={"access_token": "new-token", "expires_in": "soon"}),
            clock=clock,
        )

        with pytest.raises(TokenRefreshError, match="Invalid expiry in refresh response"):
            await guard.ensure_valid_token(expired_account)
        assert expired_account.access_token == "old-token"
        assert expired_account.token_expires_at == NOW - timedelta(minutes=5)


class TestRefreshDuringPublish:
    """The refreshed token is used for every call of the same publish."""

    @pytest.mark.asyncio
    async def test_publisher_uses_refreshed_token(self, make_publisher, transport, expired_account):
        refresher = AsyncMock(return_value={"access_token": "fresh-token", "expires_in": 60})
        publisher = make_publisher(LinkedInPublisher, token_guard=TokenGuard(refresher=refresher, clock=clock))
        transport.add("GET", f"{API}/me", ok({"id": "abc"}))
        transport.add("POST", f"{API}/ugcPosts", httpx.Response(201, headers={"x-restli-id": "urn:li:share:9"}))

        result = await publisher.publish(expired_account, "Hello", [])

        assert result.success is True
        refresher.assert_awaited_once()
        assert [r.headers["Authorization"] for r in transport.requests] == [
            "Bearer fresh-token",
            "Bearer fresh-token",
        ]

    @pytest.mark.asyncio
    async def test_graph_publisher_sends_refreshed_token_on_every_call(self, make_publisher, transport):
        refresher = AsyncMock(return_value={"access_token": "fresh-page-token", "expires_in": 5184000})
        publisher = make_publisher(FacebookPublisher, token_guard=TokenGuard(refresher=refresher, clock=clock))
        account = Account(
            platform="facebook",
            access_token="stale-page-token",
            platform_user_id="page_1",
            refresh_token="long-lived",
            token_expires_at=NOW - timedelta(days=1),
        )
        transport.add("POST", f"{GRAPH}/page_1/photos", ok({"id": "p1"}), ok({"id": "p2"}))
        transport.add("POST", f"{GRAPH}/page_1/feed", ok({"id": "album_post"}))
        photos = [MediaItem(IMAGE_URL.format(n=n), "image") for n in (1, 2)]

        result = await publisher.publish(account, "Album", photos)

        assert result.success is True
        refresher.assert_awaited_once_with("facebook", "long-lived")
        assert len(transport.requests) == 3
        assert {form_body(r)["access_token"] for r in transport.requests} == {"fresh-page-token"}

    @pytest.mark.asyncio
    async def test_refresh_failure_fails_publish_before_network(self, make_publisher, transport, expired_account):
        refresher = AsyncMock(side_effect=TokenRefreshError("Token refresh failed: invalid_grant"))
        publisher = make_publisher(LinkedInPublisher, token_guard=TokenGuard(refresher=refresher, clock=clock))

        result = await publisher.publish(expired_account, "Hello", [])

        assert result.success is False
        assert result.error == "Token refresh failed: invalid_grant"
        assert transport.requests == []
