"""Tests for the shared data model."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from socials_publisher.platforms import Account, MediaItem, PublishResult
from socials_publisher.platforms.models import parse_timestamp


class TestParseTimestamp:
    """Tests for timestamp normalisation."""

    def test_iso_with_z_suffix(self):
        assert parse_timestamp("2024-03-01T10:00:00Z") == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)

    def test_naive_values_are_utc(self):
        assert parse_timestamp("2024-03-01T10:00:00").tzinfo == timezone.utc
        assert parse_timestamp(datetime(2024, 3, 1)).tzinfo == timezone.utc

    def test_epoch_seconds(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_empty(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid timestamp"):
            parse_timestamp("next tuesday")


class TestMediaItem:
    """Tests for media item parsing."""

    def test_type_normalised(self):
        assert MediaItem("https://cdn.example.com/v.mp4", "VIDEO").is_video

    def test_default_type_is_image(self):
        item = MediaItem.from_dict({"url": "https://cdn.example.com/a.jpg"})

        assert item.is_image
        assert item.to_dict() == {"url": "https://cdn.example.com/a.jpg", "type": "image"}

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unsupported media type"):
            MediaItem("https://cdn.example.com/a.gif", "gif")


class TestAccount:
    """Tests for account parsing and expiry."""

    def test_expiry(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        account = Account("linkedin", "tok", token_expires_at=now - timedelta(seconds=1))

        assert account.is_token_expired(now)
        assert not Account("linkedin", "tok").is_token_expired(now)

    def test_from_dict_alias(self):
        account = Account.from_dict({
            "platform": "facebook",
            "access_token": "tok",
            "platform_account_id": "page_9",
            "token_expires_at": "2030-01-01T00:00:00Z",
        })

        assert account.platform_user_id == "page_9"
        assert account.token_expires_at == datetime(2030, 1, 1, tzinfo=timezone.utc)

    def test_repr_hides_tokens(self):
        account = Account("twitter", "secret-access", refresh_token="secret-refresh")

        assert "secret" not in repr(account)


class TestPublishResult:
    """Tests for result construction and serialisation."""

    def test_succeeded_sets_timestamp(self):
        result = PublishResult.succeeded("twitter", "t1")

        assert result.success
        assert result.published_at.tzinfo is not None
        assert result.error is None

    def test_failed_to_dict_omits_unset_fields(self):
        assert PublishResult.failed("tiktok", "timeout").to_dict() == {
            "success": False,
            "platform": "tiktok",
            "error": "timeout",
        }

    def test_to_dict_camel_case(self):
        published = datetime(2024, 5, 1, tzinfo=timezone.utc)
        result = PublishResult(
            success=True,
            platform="youtube",
            platform_post_id="yt1",
            published_at=published,
            video_url="https://www.youtube.com/watch?v=yt1",
        )

        assert result.to_dict() == {
            "success": True,
            "platform": "youtube",
            "platformPostId": "yt1",
            "publishedAt": "2024-05-01T00:00:00+00:00",
            "videoUrl": "https://www.youtube.com/watch?v=yt1",
        }

    def test_thread_ids_serialised(self):
        result = PublishResult.succeeded("twitter", "t1", thread_ids=("t1", "t2"))

        assert result.to_dict()["threadIds"] == ["t1", "t2"]

    def test_str(self):
        assert str(PublishResult.failed("instagram", "No media")) == "[instagram] Failed: No media"
