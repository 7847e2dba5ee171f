"""Access token expiry check with refresh-before-use."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable, Optional

from ..platforms.errors import TokenRefreshError
from ..platforms.models import Account, parse_timestamp, utcnow

_logger = logging.getLogger("publishing_api")

# refresh(platform, refresh_token) -> {"access_token": ..., "expires_at" | "expires_in": ...}
TokenRefresher = Callable[[str, str], Awaitable[dict[str, Any]]]


class TokenGuard:
    """Returns a usable access token for an account, refreshing it first if expired.

    The refreshed token and expiry are written back onto the Account so the
    rest of the publish call uses them. Nothing is persisted here.
    """

    def __init__(
        self,
        refresher: Optional[TokenRefresher] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        """Initialize the guard.

        Args:
            refresher: Async refresh capability. Defaults to OAuthTokenRefresher.
            clock: Returns the current aware UTC time.
        """
        self._refresher = refresher
        self._clock = clock

    def _get_refresher(self) -> TokenRefresher:
        if self._refresher is None:
            from .oauth import OAuthTokenRefresher

            self._refresher = OAuthTokenRefresher()
        return self._refresher

    async def ensure_valid_token(self, account: Account) -> str:
        """Return a valid access token for the account.

        Raises:
            TokenRefreshError: If the token is expired and cannot be refreshed.
        """
        now = self._clock()
        if not account.is_token_expired(now):
            return account.access_token

        platform = account.platform.lower()
        if not account.refresh_token:
            raise TokenRefreshError(
                "Access token expired and no refresh token is available",
                platform=platform,
            )

        _logger.info(f"TOKEN | {platform} token expired at {account.token_expires_at}, refreshing")
        token_data = await self._get_refresher()(platform, account.refresh_token)

        new_token = (token_data or {}).get("access_token")
        if not new_token:
            raise TokenRefreshError("No access_token in refresh response", platform=platform)

        try:
            expires_at = _expiry_from(token_data, now)
        except (TypeError, ValueError) as e:
            raise TokenRefreshError(f"Invalid expiry in refresh response: {e}", platform=platform) from e

        account.access_token = new_token
        account.token_expires_at = expires_at
        if token_data.get("refresh_token"):
            account.refresh_token = token_data["refresh_token"]

        _logger.info(f"TOKEN | {platform} token refreshed, expires at {account.token_expires_at}")
        return new_token


def _expiry_from(token_data: dict[str, Any], now: datetime) -> Optional[datetime]:
    if token_data.get("expires_at"):
        return parse_timestamp(token_data["expires_at"])
    expires_in = token_data.get("expires_in")
    if expires_in:
        return now + timedelta(seconds=float(expires_in))
    return None
