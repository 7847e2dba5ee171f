"""Data models shared by every platform publisher."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from ..constants import MediaType


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string, epoch seconds or datetime into aware UTC.

    Naive values are assumed to be UTC. Empty values return None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = datetime.fromtimestamp(value, tz=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValueError(f"Invalid timestamp: {value!r}") from e
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class MediaItem:
    """A media file that is already hosted at a public URL."""

    url: str
    type: str = MediaType.IMAGE.value

    def __post_init__(self) -> None:
        media_type = str(getattr(self.type, "value", self.type)).lower()
        if media_type not in (MediaType.IMAGE.value, MediaType.VIDEO.value):
            raise ValueError(f"Unsupported media type: {self.type}")
        self.type = media_type

    @property
    def is_video(self) -> bool:
        return self.type == MediaType.VIDEO.value

    @property
    def is_image(self) -> bool:
        return self.type == MediaType.IMAGE.value

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MediaItem":
        """Build from a caller payload like ``{"url": ..., "type": "image"}``."""
        if not isinstance(data, dict) or not data.get("url"):
            raise ValueError(f"Media item requires a url: {data!r}")
        return cls(url=data["url"], type=data.get("type") or MediaType.IMAGE.value)

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "type": self.type}


@dataclass
class Account:
    """A connected social account.

    Token fields are updated in place when the access token is refreshed
    during a publish call. Persisting them is the caller's responsibility.
    """

    platform: str
    access_token: str
    platform_user_id: Optional[str] = None
    refresh_token: Optional[str] = None
    token_expires_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.token_expires_at = parse_timestamp(self.token_expires_at)

    def is_token_expired(self, now: Optional[datetime] = None) -> bool:
        """Check whether the access token expiry lies in the past."""
        if self.token_expires_at is None:
            return False
        return self.token_expires_at < (now or utcnow())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Account":
        """Build from an account record.

        Accepts ``platform_account_id`` as an alias of ``platform_user_id``.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Account must be a mapping: {data!r}")
        if not data.get("platform"):
            raise ValueError("Account requires a platform")

        return cls(
            platform=str(data["platform"]),
            access_token=data.get("access_token") or "",
            platform_user_id=data.get("platform_user_id") or data.get("platform_account_id"),
            refresh_token=data.get("refresh_token"),
            token_expires_at=data.get("token_expires_at"),
        )

    def __repr__(self) -> str:
        # Never leak tokens into logs
        return (
            f"Account(platform={self.platform!r}, platform_user_id={self.platform_user_id!r}, "
            f"token_expires_at={self.token_expires_at!r})"
        )


@dataclass(frozen=True)
class PublishResult:
    """Unified result from publishing to any platform."""

    success: bool
    platform: str
    platform_post_id: Optional[str] = None
    published_at: Optional[datetime] = None
    error: Optional[str] = None
    video_url: Optional[str] = None
    thread_ids: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def succeeded(
        cls,
        platform: str,
        platform_post_id: Optional[str],
        **extra: Any,
    ) -> "PublishResult":
        return cls(
            success=True,
            platform=platform,
            platform_post_id=platform_post_id,
            published_at=utcnow(),
            **extra,
        )

    @classmethod
    def failed(cls, platform: str, error: str) -> "PublishResult":
        return cls(success=False, platform=platform, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase contract returned to HTTP callers."""
        data: dict[str, Any] = {"success": self.success, "platform": self.platform}
        if self.platform_post_id is not None:
            data["platformPostId"] = self.platform_post_id
        if self.published_at is not None:
            data["publishedAt"] = self.published_at.isoformat()
        if self.error is not None:
            data["error"] = self.error
        if self.video_url is not None:
            data["videoUrl"] = self.video_url
        if self.thread_ids:
            data["threadIds"] = list(self.thread_ids)
        return data

    def __str__(self) -> str:
        if self.success:
            return f"[{self.platform}] Success: {self.video_url or self.platform_post_id}"
        return f"[{self.platform}] Failed: {self.error}"
