"""Platform registry for looking up and instantiating platform publishers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Type

if TYPE_CHECKING:
    from .base import PlatformPublisher


class PlatformRegistry:
    """Registry and factory for platform publishers.

    The six supported platforms are registered at import time and retrieved
    by lower-cased name.

    Usage:
        # Get available platforms
        platforms = PlatformRegistry.available_platforms()

        # Create a publisher
        publisher = PlatformRegistry.get_publisher("instagram", settings=settings)
    """

    _platforms: dict[str, Type["PlatformPublisher"]] = {}

    @classmethod
    def register(cls, name: str, publisher_cls: Type["PlatformPublisher"]) -> None:
        """Register a platform adapter.

        Args:
            name: Platform identifier (e.g., 'instagram', 'tiktok').
            publisher_cls: Publisher class implementing PlatformPublisher.
        """
        cls._platforms[name.lower()] = publisher_cls

    @classmethod
    def get_publisher_class(cls, name: str) -> Optional[Type["PlatformPublisher"]]:
        """Get the publisher class for a platform, or None if unsupported."""
        return cls._platforms.get(name.lower())

    @classmethod
    def get_publisher(cls, name: str, **kwargs: Any) -> "PlatformPublisher":
        """Get a publisher instance for a platform.

        Args:
            name: Platform identifier.
            **kwargs: Passed to the publisher (settings, http_client, token_guard).

        Returns:
            Configured publisher instance.

        Raises:
            ValueError: If platform is not registered.
        """
        publisher_cls = cls.get_publisher_class(name)
        if publisher_cls is None:
            available = ", ".join(cls._platforms.keys())
            raise ValueError(f"Unknown platform: {name}. Available: {available}")

        return publisher_cls(**kwargs)

    @classmethod
    def available_platforms(cls) -> list[str]:
        """Get list of all registered platform names."""
        return list(cls._platforms.keys())

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a platform is registered."""
        return name.lower() in cls._platforms


def _register_platforms() -> None:
    """Register all platform adapters.

    Called automatically on module import.
    """
    from ..constants import Platform
    from .facebook import FacebookPublisher
    from .instagram import InstagramPublisher
    from .linkedin import LinkedInPublisher
    from .tiktok import TikTokPublisher
    from .twitter import TwitterPublisher
    from .youtube import YouTubePublisher

    PlatformRegistry.register(Platform.INSTAGRAM.value, InstagramPublisher)
    PlatformRegistry.register(Platform.FACEBOOK.value, FacebookPublisher)
    PlatformRegistry.register(Platform.TWITTER.value, TwitterPublisher)
    PlatformRegistry.register(Platform.LINKEDIN.value, LinkedInPublisher)
    PlatformRegistry.register(Platform.TIKTOK.value, TikTokPublisher)
    PlatformRegistry.register(Platform.YOUTUBE.value, YouTubePublisher)


# Auto-register platforms on import
_register_platforms()
