"""Pre-flight content validation against per-platform limits.

Validation is advisory: the CLI runs it before publishing, but dispatch
never depends on it. Adapters still enforce their own preconditions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from ..constants import PLATFORM_LIMITS
from ..platforms.base import coerce_media
from ..platforms.models import MediaItem

HASHTAG_PATTERN = re.compile(r"#\w+")
HTML_TAG_MARKERS = ("</", "/>")

TWITTER_ENGAGEMENT_LENGTH = 250
LINKEDIN_FEED_CUTOFF = 1300


@dataclass
class ValidationReport:
    """Validation outcome for one platform."""

    platform: str
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class MultiPlatformReport:
    """Validation outcome across several platforms."""

    reports: dict[str, ValidationReport]

    @property
    def is_valid(self) -> bool:
        return all(report.is_valid for report in self.reports.values())

    @property
    def all_errors(self) -> dict[str, list[str]]:
        """Errors keyed by platform, only for platforms that failed."""
        return {
            platform: report.errors
            for platform, report in self.reports.items()
            if not report.is_valid
        }


def extract_hashtags(content: str) -> list[str]:
    return HASHTAG_PATTERN.findall(content)


def validate_content(
    platform: str,
    content: str,
    media: Optional[Iterable[Any]] = None,
) -> ValidationReport:
    """Validate a post for one platform.

    Args:
        platform: Platform name (case-insensitive).
        content: Post text.
        media: MediaItem instances or media dicts.

    Returns:
        ValidationReport with errors (blocking) and warnings (advice).
    """
    name = platform.lower()
    report = ValidationReport(platform=name)
    limits = PLATFORM_LIMITS.get(name)
    if limits is None:
        report.errors.append(f"Unknown platform: {platform}")
        return report

    content = content or ""
    items = coerce_media(media)
    hashtags = extract_hashtags(content)

    if len(content) > limits.max_length:
        report.errors.append(
            f"Content exceeds {limits.max_length} character limit for {limits.name} "
            f"(current: {len(content)})"
        )
    if limits.requires_media and not items:
        report.errors.append(f"{limits.name} requires at least one media item")
    if len(items) > limits.max_media:
        report.errors.append(
            f"{limits.name} allows maximum {limits.max_media} media items (current: {len(items)})"
        )
    if len(hashtags) > limits.hashtag_limit:
        report.errors.append(
            f"{limits.name} allows maximum {limits.hashtag_limit} hashtags (current: {len(hashtags)})"
        )

    rules = _PLATFORM_RULES.get(name)
    if rules:
        rules(content, items, report)

    _add_warnings(name, content, items, hashtags, report)
    return report


def validate_multiple_platforms(
    platforms: Iterable[str],
    content: str,
    media: Optional[Iterable[Any]] = None,
) -> MultiPlatformReport:
    """Validate the same post for several platforms."""
    items = coerce_media(media)
    return MultiPlatformReport(
        reports={platform: validate_content(platform, content, items) for platform in platforms}
    )


def truncate_for_platform(platform: str, content: str) -> str:
    """Shorten content to a platform's limit, ending with an ellipsis."""
    limits = PLATFORM_LIMITS.get(platform.lower())
    if limits is None:
        raise ValueError(f"Unknown platform: {platform}")
    if len(content) <= limits.max_length:
        return content
    return content[: limits.max_length - 3] + "..."


# =============================================================================
# Platform rules
# =============================================================================


def _check_twitter(content: str, media: list[MediaItem], report: ValidationReport) -> None:
    if len(media) > 1 and any(item.is_video for item in media):
        report.errors.append("Twitter allows only one video per tweet")


def _check_instagram(content: str, media: list[MediaItem], report: ValidationReport) -> None:
    if not media:
        report.errors.append("Instagram posts require at least one image or video")
    if len(media) > 10:
        report.errors.append("Instagram carousels support maximum 10 items")
    if len(content) > 2200:
        report.errors.append("Instagram caption limit is 2,200 characters")


def _check_linkedin(content: str, media: list[MediaItem], report: ValidationReport) -> None:
    if any(marker in content for marker in HTML_TAG_MARKERS):
        report.errors.append("LinkedIn does not support HTML tags in posts")


def _single_video_rule(label: str, noun: str):
    def check(content: str, media: list[MediaItem], report: ValidationReport) -> None:
        if not media:
            report.errors.append(f"{label} requires a video")
        if len(media) > 1:
            report.errors.append(f"{label} supports only one video per {noun}")
        if media and not media[0].is_video:
            report.errors.append(f"{label} only accepts video content")

    return check


_PLATFORM_RULES = {
    "twitter": _check_twitter,
    "instagram": _check_instagram,
    "linkedin": _check_linkedin,
    "tiktok": _single_video_rule("TikTok", "post"),
    "youtube": _single_video_rule("YouTube", "upload"),
}


def _add_warnings(
    platform: str,
    content: str,
    media: list[MediaItem],
    hashtags: list[str],
    report: ValidationReport,
) -> None:
    if not content:
        report.warnings.append("Empty content may not perform well")

    if platform == "twitter":
        if len(content) > TWITTER_ENGAGEMENT_LENGTH:
            report.warnings.append("Tweets under 250 characters tend to get more engagement")
        if len(hashtags) > 2:
            report.warnings.append("Twitter recommends using 1-2 hashtags maximum")
    elif platform == "instagram":
        if len(hashtags) < 5:
            report.warnings.append("Instagram posts with 5-10 hashtags tend to perform better")
    elif platform == "linkedin":
        if len(content) > LINKEDIN_FEED_CUTOFF:
            report.warnings.append("Content over 1,300 characters will be truncated in feed")
        if len(hashtags) > 5:
            report.warnings.append("LinkedIn recommends 3-5 hashtags for optimal reach")
    elif platform == "facebook":
        if not media:
            report.warnings.append("Posts with images get 2.3x more engagement on Facebook")
