"""Multi-platform publishing abstraction layer.

This module provides a unified interface for publishing content to
Facebook, Instagram, LinkedIn, Twitter/X, TikTok and YouTube.

Usage:
    from socials_publisher.platforms import PlatformRegistry, Account, MediaItem

    publisher = PlatformRegistry.get_publisher("instagram")
    result = await publisher.publish(account, caption, [MediaItem(url, "image")])
"""

from .base import PlatformPublisher
from .errors import PlatformAPIError, PreconditionError, PublishError, TokenRefreshError
from .models import Account, MediaItem, PublishResult
from .registry import PlatformRegistry

__all__ = [
    "Account",
    "MediaItem",
    "PlatformAPIError",
    "PlatformPublisher",
    "PlatformRegistry",
    "PreconditionError",
    "PublishError",
    "PublishResult",
    "TokenRefreshError",
]
