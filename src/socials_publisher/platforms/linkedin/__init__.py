"""LinkedIn platform adapter."""

from .publisher import LinkedInPublisher, RegisteredUpload, build_share

__all__ = ["LinkedInPublisher", "RegisteredUpload", "build_share"]
