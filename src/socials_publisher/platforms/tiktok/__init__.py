"""TikTok platform adapter."""

from .publisher import TikTokPublisher

__all__ = ["TikTokPublisher"]
