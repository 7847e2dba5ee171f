"""Multi-platform social media publishing.

Usage:
    from socials_publisher import Account, PublishOrchestrator, summarize

    orchestrator = PublishOrchestrator()
    results = await orchestrator.dispatch_all(["facebook", "twitter"], accounts, "Hello!")
    print(summarize(results))
"""

from .auth import OAuthTokenRefresher, TokenGuard
from .config import PublishingSettings, load_settings
from .dispatch import Dispatcher, PublishOrchestrator, PublishRequest, PublishSummary, summarize
from .platforms import (
    Account,
    MediaItem,
    PlatformAPIError,
    PlatformPublisher,
    PlatformRegistry,
    PreconditionError,
    PublishError,
    PublishResult,
    TokenRefreshError,
)
from .validation import validate_content, validate_multiple_platforms

__version__ = "0.1.0"

__all__ = [
    "Account",
    "Dispatcher",
    "MediaItem",
    "OAuthTokenRefresher",
    "PlatformAPIError",
    "PlatformPublisher",
    "PlatformRegistry",
    "PreconditionError",
    "PublishError",
    "PublishOrchestrator",
    "PublishRequest",
    "PublishResult",
    "PublishSummary",
    "PublishingSettings",
    "TokenGuard",
    "TokenRefreshError",
    "load_settings",
    "summarize",
    "validate_content",
    "validate_multiple_platforms",
]
