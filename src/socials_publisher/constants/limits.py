"""Content limits and timeouts for publishing.

This module contains:
- Per-platform content constraints (length, media count, hashtags)
- Default network timeouts

MODIFICATION GUIDE:
------------------
- PLATFORM_LIMITS values come from each platform's publishing documentation
- Timeouts are defaults; PublishingSettings can override them
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class PlatformLimits:
    """Content constraints for one platform."""

    name: str
    max_length: int
    requires_media: bool
    max_media: int
    hashtag_limit: int


PLATFORM_LIMITS: Final[dict[str, PlatformLimits]] = {
    "instagram": PlatformLimits("Instagram", 2200, True, 10, 30),
    "facebook": PlatformLimits("Facebook", 63206, False, 10, 30),
    "linkedin": PlatformLimits("LinkedIn", 3000, False, 9, 5),
    "twitter": PlatformLimits("Twitter", 280, False, 4, 10),
    "tiktok": PlatformLimits("TikTok", 2200, True, 1, 30),
    "youtube": PlatformLimits("YouTube", 5000, True, 1, 15),
}


# =============================================================================
# TIMEOUTS
# =============================================================================

REQUEST_TIMEOUT_SECONDS: Final[float] = 60.0
"""Timeout for a single HTTP request to a platform."""

PUBLISH_TIMEOUT_SECONDS: Final[float] = 600.0
"""Deadline for one adapter's whole publish choreography."""

TOKEN_REFRESH_TIMEOUT_SECONDS: Final[float] = 30.0
"""Timeout for the OAuth refresh call."""
