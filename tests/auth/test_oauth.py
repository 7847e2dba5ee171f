"""Tests for the default OAuth refresh capability."""

from __future__ import annotations

import re

import httpx
import pytest
from mock_http import form_body, ok

from socials_publisher.auth import OAuthTokenRefresher
from socials_publisher.config import OAuthClientConfig, PublishingSettings
from socials_publisher.platforms import TokenRefreshError

LINKEDIN_TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"
GRAPH_TOKEN_URL = "https://graph.facebook.com/v18.0/oauth/access_token"


@pytest.fixture
def refresher(settings, http_client) -> OAuthTokenRefresher:
    return OAuthTokenRefresher(settings=settings, http_client=http_client)


class TestOAuthTokenRefresher:
    """Tests for refresh requests per platform."""

    @pytest.mark.asyncio
    async def test_refresh_token_grant(self, refresher, transport, monkeypatch):
        monkeypatch.setenv("LINKEDIN_CLIENT_ID", "li-client")
        monkeypatch.setenv("LINKEDIN_CLIENT_SECRET", "li-secret")
        transport.add("POST", LINKEDIN_TOKEN_URL, ok({"access_token": "new", "expires_in": 5184000}))

        data = await refresher("LinkedIn", "refresh-1")

        assert data == {"access_token": "new", "expires_in": 5184000}
        [request] = transport.requests
        assert form_body(request) == {
            "client_id": "li-client",
            "client_secret": "li-secret",
            "refresh_token": "refresh-1",
            "grant_type": "refresh_token",
        }

    @pytest.mark.asyncio
    async def test_graph_platforms_exchange_token(self, refresher, transport, monkeypatch):
        monkeypatch.setenv("FACEBOOK_APP_ID", "fb-app")
        monkeypatch.setenv("FACEBOOK_APP_SECRET", "fb-secret")
        transport.add("GET", GRAPH_TOKEN_URL, ok({"access_token": "long-lived", "expires_in": 5183944}))

        data = await refresher.refresh_access_token("instagram", "short-lived")

        assert data["access_token"] == "long-lived"
        params = transport.requests[0].url.params
        assert params["grant_type"] == "fb_exchange_token"
        assert params["fb_exchange_token"] == "short-lived"
        assert params["client_id"] == "fb-app"

    @pytest.mark.asyncio
    async def test_rejected_refresh(self, refresher, transport):
        transport.add("POST", "https://oauth2.googleapis.com/token", httpx.Response(400, text='{"error": "invalid_grant"}'))

        with pytest.raises(TokenRefreshError, match=re.escape('Token refresh failed: {"error": "invalid_grant"}')):
            await refresher("youtube", "refresh-1")

    @pytest.mark.asyncio
    async def test_unknown_platform(self, refresher, transport):
        with pytest.raises(TokenRefreshError, match="OAuth config not found for platform: myspace"):
            await refresher("myspace", "refresh-1")
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_configured_credentials_override_environment(self, http_client, transport, monkeypatch):
        monkeypatch.setenv("TWITTER_CLIENT_ID", "from-env")
        settings = PublishingSettings()
        settings.oauth_clients["twitter"] = OAuthClientConfig(
            token_url="https://api.twitter.com/2/oauth2/token",
            client_id="from-config",
            client_secret="secret",
        )
        transport.add("POST", "https://api.twitter.com/2/oauth2/token", ok({"access_token": "t"}))

        await OAuthTokenRefresher(settings=settings, http_client=http_client)("twitter", "r")

        assert form_body(transport.requests[0])["client_id"] == "from-config"
