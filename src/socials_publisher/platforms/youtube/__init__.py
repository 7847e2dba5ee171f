"""YouTube platform adapter."""

from .publisher import YouTubePublisher, build_video_metadata

__all__ = ["YouTubePublisher", "build_video_metadata"]
