"""Access token handling for publishers."""

from .oauth import OAuthTokenRefresher, refresh_access_token
from .token_guard import TokenGuard, TokenRefresher

__all__ = [
    "OAuthTokenRefresher",
    "TokenGuard",
    "TokenRefresher",
    "refresh_access_token",
]
