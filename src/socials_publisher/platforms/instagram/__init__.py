"""Instagram platform adapter."""

from .publisher import InstagramPublisher

__all__ = ["InstagramPublisher"]
