"""Publishing configuration loading and validation."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .constants import (
    GRAPH_API_BASE,
    GRAPH_API_VERSION,
    LINKEDIN_API_BASE,
    OAUTH_CLIENT_ENV,
    OAUTH_TOKEN_URLS,
    PUBLISH_TIMEOUT_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
    TIKTOK_API_BASE,
    TOKEN_REFRESH_TIMEOUT_SECONDS,
    TWITTER_API_BASE,
    TWITTER_MEDIA_UPLOAD_URL,
    YOUTUBE_API_BASE,
    YOUTUBE_DEFAULT_CATEGORY_ID,
    YOUTUBE_UPLOAD_BASE,
)

# Load .env file
load_dotenv()


class TimeoutSettings(BaseModel):
    """Network deadlines."""

    request_seconds: float = REQUEST_TIMEOUT_SECONDS
    publish_seconds: float = PUBLISH_TIMEOUT_SECONDS
    token_refresh_seconds: float = TOKEN_REFRESH_TIMEOUT_SECONDS


class EndpointSettings(BaseModel):
    """Base URLs for every remote API surface."""

    graph_api_base: str = GRAPH_API_BASE
    graph_api_version: str = GRAPH_API_VERSION
    linkedin_api_base: str = LINKEDIN_API_BASE
    twitter_api_base: str = TWITTER_API_BASE
    twitter_media_upload_url: str = TWITTER_MEDIA_UPLOAD_URL
    tiktok_api_base: str = TIKTOK_API_BASE
    youtube_api_base: str = YOUTUBE_API_BASE
    youtube_upload_base: str = YOUTUBE_UPLOAD_BASE

    @property
    def graph_url(self) -> str:
        return f"{self.graph_api_base}/{self.graph_api_version}"


class TikTokPostSettings(BaseModel):
    """Post settings sent with every TikTok publish call."""

    privacy_level: str = "PUBLIC_TO_EVERYONE"
    disable_duet: bool = False
    disable_comment: bool = False
    disable_stitch: bool = False
    video_cover_timestamp_ms: int = 1000


class YouTubeDefaults(BaseModel):
    """Fallbacks used when metadata does not specify a value."""

    category_id: str = YOUTUBE_DEFAULT_CATEGORY_ID
    privacy_status: str = "public"
    untitled_title: str = "Untitled Video"


class OAuthClientConfig(BaseModel):
    """OAuth client credentials for one platform."""

    token_url: str
    client_id: str | None = None
    client_id_env: str | None = None
    client_secret: str | None = None
    client_secret_env: str | None = None

    def get_client_id(self) -> str | None:
        """Get client id from config or environment."""
        if self.client_id:
            return self.client_id
        if self.client_id_env:
            return os.getenv(self.client_id_env)
        return None

    def get_client_secret(self) -> str | None:
        """Get client secret from config or environment."""
        if self.client_secret:
            return self.client_secret
        if self.client_secret_env:
            return os.getenv(self.client_secret_env)
        return None


def _default_oauth_clients() -> dict[str, OAuthClientConfig]:
    return {
        platform: OAuthClientConfig(
            token_url=token_url,
            client_id_env=OAUTH_CLIENT_ENV[platform][0],
            client_secret_env=OAUTH_CLIENT_ENV[platform][1],
        )
        for platform, token_url in OAUTH_TOKEN_URLS.items()
    }


class PublishingSettings(BaseModel):
    """Full publishing configuration."""

    timeouts: TimeoutSettings = Field(default_factory=TimeoutSettings)
    endpoints: EndpointSettings = Field(default_factory=EndpointSettings)
    tiktok: TikTokPostSettings = Field(default_factory=TikTokPostSettings)
    youtube: YouTubeDefaults = Field(default_factory=YouTubeDefaults)
    oauth_clients: dict[str, OAuthClientConfig] = Field(default_factory=_default_oauth_clients)

    def get_oauth_client(self, platform: str) -> OAuthClientConfig | None:
        """Get OAuth client config for a platform (case-insensitive)."""
        return self.oauth_clients.get(platform.lower())


def load_settings(config_path: Path | None = None) -> PublishingSettings:
    """Load publishing configuration from YAML file."""
    if config_path is None:
        # Default to config/publishing.yaml relative to project root
        config_path = Path(__file__).parent.parent.parent / "config" / "publishing.yaml"

    if not config_path.exists():
        # Return default config if file doesn't exist
        return PublishingSettings()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    # Keep env-based credentials for platforms the file does not mention
    oauth_overrides = data.pop("oauth_clients", None) or {}
    settings = PublishingSettings(**data)
    for platform, override in oauth_overrides.items():
        base = settings.oauth_clients.get(platform.lower())
        merged = {**(base.model_dump() if base else {}), **override}
        settings.oauth_clients[platform.lower()] = OAuthClientConfig(**merged)

    return settings
