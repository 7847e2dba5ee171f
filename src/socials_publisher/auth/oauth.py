"""Default OAuth refresh capability for every supported platform."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import PublishingSettings, load_settings
from ..constants import Platform
from ..http import client_session, read_json
from ..platforms.errors import TokenRefreshError

_logger = logging.getLogger("publishing_api")

# Graph API long-lived tokens are renewed by exchange, not refresh_token grant
_EXCHANGE_PLATFORMS = (Platform.FACEBOOK.value, Platform.INSTAGRAM.value)


class OAuthTokenRefresher:
    """Refreshes access tokens against each platform's OAuth token endpoint.

    Usable anywhere a TokenRefresher is expected:

        refresher = OAuthTokenRefresher()
        token_data = await refresher("linkedin", refresh_token)
    """

    def __init__(
        self,
        settings: PublishingSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings or load_settings()
        self._http_client = http_client

    async def __call__(self, platform: str, refresh_token: str) -> dict[str, Any]:
        return await self.refresh_access_token(platform, refresh_token)

    async def refresh_access_token(self, platform: str, refresh_token: str) -> dict[str, Any]:
        """Exchange a refresh token for a new access token.

        Returns:
            Token response with access_token and expires_in/expires_at.

        Raises:
            TokenRefreshError: If the platform is unknown or the endpoint rejects the request.
        """
        platform = platform.lower()
        client_config = self.settings.get_oauth_client(platform)
        if client_config is None:
            raise TokenRefreshError(f"OAuth config not found for platform: {platform}", platform=platform)

        client_id = client_config.get_client_id()
        client_secret = client_config.get_client_secret()

        timeout = self.settings.timeouts.token_refresh_seconds
        async with client_session(self._http_client, timeout) as client:
            if platform in _EXCHANGE_PLATFORMS:
                response = await client.get(
                    client_config.token_url,
                    params={
                        "grant_type": "fb_exchange_token",
                        "client_id": client_id,
                        "client_secret": client_secret,
                        "fb_exchange_token": refresh_token,
                    },
                )
            else:
                response = await client.post(
                    client_config.token_url,
                    data={
                        "client_id": client_id,
                        "client_secret": client_secret,
                        "refresh_token": refresh_token,
                        "grant_type": "refresh_token",
                    },
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )

        if not response.is_success:
            _logger.error(f"TOKEN | {platform} refresh failed with HTTP {response.status_code}")
            raise TokenRefreshError(f"Token refresh failed: {response.text}", platform=platform)

        return read_json(response)


async def refresh_access_token(platform: str, refresh_token: str) -> dict[str, Any]:
    """Convenience function using default settings."""
    return await OAuthTokenRefresher().refresh_access_token(platform, refresh_token)
