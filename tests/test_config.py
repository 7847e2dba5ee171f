"""Tests for publishing configuration loading."""

from __future__ import annotations

from pathlib import Path

import yaml

from socials_publisher.config import PublishingSettings, load_settings


class TestLoadSettings:
    """Tests for YAML loading and defaults."""

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        settings = load_settings(tmp_path / "missing.yaml")

        assert settings == PublishingSettings()
        assert settings.endpoints.graph_url == "https://graph.facebook.com/v18.0"
        assert settings.timeouts.publish_seconds == 600
        assert settings.youtube.category_id == "22"

    def test_yaml_overrides(self, tmp_path: Path):
        config_path = tmp_path / "publishing.yaml"
        config_path.write_text(yaml.safe_dump({
            "timeouts": {"publish_seconds": 120},
            "endpoints": {"graph_api_version": "v19.0"},
            "tiktok": {"privacy_level": "SELF_ONLY"},
        }))

        settings = load_settings(config_path)

        assert settings.timeouts.publish_seconds == 120
        assert settings.timeouts.request_seconds == 60
        assert settings.endpoints.graph_url == "https://graph.facebook.com/v19.0"
        assert settings.tiktok.privacy_level == "SELF_ONLY"

    def test_empty_file(self, tmp_path: Path):
        config_path = tmp_path / "publishing.yaml"
        config_path.write_text("")

        assert load_settings(config_path) == PublishingSettings()

    def test_oauth_override_merges_with_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("MY_LINKEDIN_ID", "custom-id")
        monkeypatch.setenv("LINKEDIN_CLIENT_SECRET", "env-secret")
        config_path = tmp_path / "publishing.yaml"
        config_path.write_text(yaml.safe_dump({
            "oauth_clients": {"LinkedIn": {"client_id_env": "MY_LINKEDIN_ID"}},
        }))

        settings = load_settings(config_path)
        linkedin = settings.get_oauth_client("linkedin")

        assert linkedin.token_url == "https://www.linkedin.com/oauth/v2/accessToken"
        assert linkedin.get_client_id() == "custom-id"
        assert linkedin.get_client_secret() == "env-secret"
        assert settings.get_oauth_client("twitter") is not None

    def test_all_platforms_have_oauth_clients(self):
        settings = PublishingSettings()

        assert set(settings.oauth_clients) == {
            "facebook", "instagram", "linkedin", "twitter", "tiktok", "youtube",
        }
        assert settings.get_oauth_client("MySpace") is None
