"""TikTok publisher: init upload, PUT video bytes, publish.

The three phases are strictly sequential; publish references the
publish_id handed out by the init call.
"""

from __future__ import annotations

from typing import Any

import httpx

from ...constants import Platform
from ...http import read_json
from ..base import PlatformPublisher
from ..errors import PlatformAPIError, PreconditionError
from ..models import Account, MediaItem, PublishResult

# TikTok reports success as {"error": {"code": "ok"}} on newer endpoints
_OK_CODES = (None, "", 0, "0", "ok")


class TikTokPublisher(PlatformPublisher):
    """Publishes a single video to TikTok."""

    @property
    def platform_name(self) -> str:
        return Platform.TIKTOK.value

    def _api_url(self, path: str) -> str:
        return f"{self.settings.endpoints.tiktok_api_base}/{path}"

    def _is_error_response(self, response: httpx.Response) -> bool:
        if not response.is_success:
            return True
        error = read_json(response).get("error")
        return isinstance(error, dict) and error.get("code") not in _OK_CODES

    async def _publish(
        self,
        account: Account,
        content: str,
        media: list[MediaItem],
        metadata: dict[str, Any],
    ) -> PublishResult:
        if not media or not media[0].is_video:
            raise PreconditionError("TikTok requires a video to publish", platform=self.platform_name)

        access_token = await self._access_token(account)

        upload = await self.initialize_upload(access_token)
        await self.upload_video(upload["upload_url"], media[0].url)
        published = await self.publish_video(access_token, upload["publish_id"], content)

        return self._make_result(
            success=True,
            platform_post_id=published.get("share_id") or upload["publish_id"],
        )

    async def initialize_upload(self, access_token: str) -> dict[str, Any]:
        """Phase 1: obtain an upload URL and a publish id."""
        data = await self._request_json(
            "POST",
            self._api_url("share/video/upload/"),
            headers={"Authorization": f"Bearer {access_token}"},
            json={},
            error_message="Failed to initialize TikTok upload",
        )
        upload = data.get("data") or {}
        if not upload.get("upload_url") or not upload.get("publish_id"):
            raise PlatformAPIError(
                "TikTok upload init returned no upload_url/publish_id",
                platform=self.platform_name,
                payload=data,
            )
        return upload

    async def upload_video(self, upload_url: str, video_url: str) -> None:
        """Phase 2: PUT the raw video bytes to the upload URL."""
        video_bytes = await self._fetch_media(video_url)
        await self._request(
            "PUT",
            upload_url,
            headers={"Content-Type": "video/mp4"},
            content=video_bytes,
            error_message="Failed to upload video to TikTok",
        )

    async def publish_video(self, access_token: str, publish_id: str, caption: str) -> dict[str, Any]:
        """Phase 3: publish the uploaded video with the configured post settings."""
        post_settings = self.settings.tiktok
        data = await self._request_json(
            "POST",
            self._api_url("share/video/publish/"),
            headers={"Authorization": f"Bearer {access_token}"},
            json={
                "publish_id": publish_id,
                "post_info": {
                    "title": caption,
                    "privacy_level": post_settings.privacy_level,
                    "disable_duet": post_settings.disable_duet,
                    "disable_comment": post_settings.disable_comment,
                    "disable_stitch": post_settings.disable_stitch,
                    "video_cover_timestamp_ms": post_settings.video_cover_timestamp_ms,
                },
            },
            error_message="Failed to publish TikTok video",
        )
        return data.get("data") or {}

    async def get_video_info(self, account: Account, video_id: str) -> dict[str, Any]:
        """Query the status of a published video.

        Raises:
            PlatformAPIError: If TikTok reports an error.
        """
        access_token = await self._access_token(account)
        data = await self._request_json(
            "GET",
            self._api_url("video/query/"),
            headers={"Authorization": f"Bearer {access_token}"},
            params={"video_id": video_id},
            error_message="Failed to get video info",
        )
        return data.get("data") or {}
