"""Pre-flight content validation."""

from .content import (
    MultiPlatformReport,
    ValidationReport,
    extract_hashtags,
    truncate_for_platform,
    validate_content,
    validate_multiple_platforms,
)

__all__ = [
    "MultiPlatformReport",
    "ValidationReport",
    "extract_hashtags",
    "truncate_for_platform",
    "validate_content",
    "validate_multiple_platforms",
]
