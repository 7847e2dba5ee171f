"""Global constants package for socials_publisher.

PACKAGE STRUCTURE:
-----------------
- platforms.py : Platform enum, media types, API endpoints, OAuth endpoints
- limits.py    : Content limits per platform, timeouts

USAGE EXAMPLES:
--------------
    from socials_publisher.constants import Platform, SUPPORTED_PLATFORMS
    from socials_publisher.constants import PLATFORM_LIMITS
"""

from .limits import (
    PLATFORM_LIMITS,
    PUBLISH_TIMEOUT_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
    TOKEN_REFRESH_TIMEOUT_SECONDS,
    PlatformLimits,
)
from .platforms import (
    GRAPH_API_BASE,
    GRAPH_API_VERSION,
    LINKEDIN_API_BASE,
    LINKEDIN_RESTLI_PROTOCOL_VERSION,
    OAUTH_CLIENT_ENV,
    OAUTH_TOKEN_URLS,
    SUPPORTED_PLATFORMS,
    TIKTOK_API_BASE,
    TWITTER_API_BASE,
    TWITTER_MEDIA_UPLOAD_URL,
    YOUTUBE_API_BASE,
    YOUTUBE_DEFAULT_CATEGORY_ID,
    YOUTUBE_TITLE_MAX_LENGTH,
    YOUTUBE_UPLOAD_BASE,
    YOUTUBE_WATCH_URL,
    MediaType,
    Platform,
)

__all__ = [
    # Platforms
    "Platform",
    "MediaType",
    "SUPPORTED_PLATFORMS",
    "GRAPH_API_BASE",
    "GRAPH_API_VERSION",
    "LINKEDIN_API_BASE",
    "LINKEDIN_RESTLI_PROTOCOL_VERSION",
    "TWITTER_API_BASE",
    "TWITTER_MEDIA_UPLOAD_URL",
    "TIKTOK_API_BASE",
    "YOUTUBE_API_BASE",
    "YOUTUBE_UPLOAD_BASE",
    "YOUTUBE_WATCH_URL",
    "YOUTUBE_DEFAULT_CATEGORY_ID",
    "YOUTUBE_TITLE_MAX_LENGTH",
    "OAUTH_TOKEN_URLS",
    "OAUTH_CLIENT_ENV",
    # Limits
    "PlatformLimits",
    "PLATFORM_LIMITS",
    "REQUEST_TIMEOUT_SECONDS",
    "PUBLISH_TIMEOUT_SECONDS",
    "TOKEN_REFRESH_TIMEOUT_SECONDS",
]
