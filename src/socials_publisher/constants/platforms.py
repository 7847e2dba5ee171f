"""Platform identifiers and remote API endpoints.

This module contains:
- The fixed set of supported platforms
- Base URLs and API versions for each platform's REST surface
- OAuth token endpoints used for access token refresh

MODIFICATION GUIDE:
------------------
- Graph API version is shared by Facebook and Instagram
- Endpoints are plain strings; adapters format ids into them
"""

from enum import Enum
from typing import Final


# =============================================================================
# PLATFORMS
# =============================================================================

class Platform(str, Enum):
    """Platforms the dispatcher can publish to."""

    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    LINKEDIN = "linkedin"
    TWITTER = "twitter"
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"


SUPPORTED_PLATFORMS: Final[tuple[str, ...]] = tuple(p.value for p in Platform)
"""Lower-cased names of every supported platform, in registry order."""


class MediaType(str, Enum):
    """Kinds of media a post can carry."""

    IMAGE = "image"
    VIDEO = "video"


# =============================================================================
# FACEBOOK / INSTAGRAM (Graph API)
# =============================================================================

GRAPH_API_VERSION: Final[str] = "v18.0"
GRAPH_API_BASE: Final[str] = "https://graph.facebook.com"


# =============================================================================
# LINKEDIN
# =============================================================================

LINKEDIN_API_BASE: Final[str] = "https://api.linkedin.com/v2"
LINKEDIN_RESTLI_PROTOCOL_VERSION: Final[str] = "2.0.0"


# =============================================================================
# TWITTER / X
# =============================================================================

TWITTER_API_BASE: Final[str] = "https://api.twitter.com/2"
TWITTER_MEDIA_UPLOAD_URL: Final[str] = "https://upload.twitter.com/1.1/media/upload.json"


# =============================================================================
# TIKTOK
# =============================================================================

TIKTOK_API_BASE: Final[str] = "https://open-api.tiktok.com"


# =============================================================================
# YOUTUBE
# =============================================================================

YOUTUBE_API_BASE: Final[str] = "https://www.googleapis.com/youtube/v3"
YOUTUBE_UPLOAD_BASE: Final[str] = "https://www.googleapis.com/upload/youtube/v3"
YOUTUBE_WATCH_URL: Final[str] = "https://www.youtube.com/watch?v={video_id}"
YOUTUBE_DEFAULT_CATEGORY_ID: Final[str] = "22"
"""People & Blogs."""

YOUTUBE_TITLE_MAX_LENGTH: Final[int] = 100


# =============================================================================
# OAUTH TOKEN ENDPOINTS
# =============================================================================

OAUTH_TOKEN_URLS: Final[dict[str, str]] = {
    Platform.FACEBOOK.value: f"{GRAPH_API_BASE}/{GRAPH_API_VERSION}/oauth/access_token",
    Platform.INSTAGRAM.value: f"{GRAPH_API_BASE}/{GRAPH_API_VERSION}/oauth/access_token",
    Platform.LINKEDIN.value: "https://www.linkedin.com/oauth/v2/accessToken",
    Platform.TWITTER.value: "https://api.twitter.com/2/oauth2/token",
    Platform.TIKTOK.value: f"{TIKTOK_API_BASE}/oauth/access_token/",
    Platform.YOUTUBE.value: "https://oauth2.googleapis.com/token",
}

OAUTH_CLIENT_ENV: Final[dict[str, tuple[str, str]]] = {
    Platform.FACEBOOK.value: ("FACEBOOK_APP_ID", "FACEBOOK_APP_SECRET"),
    Platform.INSTAGRAM.value: ("FACEBOOK_APP_ID", "FACEBOOK_APP_SECRET"),
    Platform.LINKEDIN.value: ("LINKEDIN_CLIENT_ID", "LINKEDIN_CLIENT_SECRET"),
    Platform.TWITTER.value: ("TWITTER_CLIENT_ID", "TWITTER_CLIENT_SECRET"),
    Platform.TIKTOK.value: ("TIKTOK_CLIENT_KEY", "TIKTOK_CLIENT_SECRET"),
    Platform.YOUTUBE.value: ("YOUTUBE_CLIENT_ID", "YOUTUBE_CLIENT_SECRET"),
}
"""Environment variables holding (client_id, client_secret) per platform."""
