"""Twitter/X platform adapter."""

from .publisher import ThreadPost, TwitterPublisher

__all__ = ["ThreadPost", "TwitterPublisher"]
