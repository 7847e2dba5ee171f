"""YouTube publisher using the Data API v3 resumable upload protocol.

Upload is two-phase:
1. POST the video metadata with uploadType=resumable; the session URL
   comes back in the Location header
2. PUT the whole video buffer to that session URL in one request

Metadata update, custom thumbnails and category listing live here too but
are never part of `publish`.
"""

from __future__ import annotations

from typing import Any

from ...config import YouTubeDefaults
from ...constants import YOUTUBE_TITLE_MAX_LENGTH, YOUTUBE_WATCH_URL, Platform
from ..base import PlatformPublisher
from ..errors import PlatformAPIError, PreconditionError
from ..models import Account, MediaItem, PublishResult


def build_video_metadata(
    content: str,
    metadata: dict[str, Any],
    defaults: YouTubeDefaults,
) -> dict[str, Any]:
    """Build the snippet/status body for a video upload.

    Title falls back to the first 100 characters of the content; the
    description is always the full content.
    """
    title = metadata.get("title") or content[:YOUTUBE_TITLE_MAX_LENGTH] or defaults.untitled_title
    return {
        "snippet": {
            "title": title,
            "description": content,
            "tags": list(metadata.get("tags") or []),
            "categoryId": str(metadata.get("categoryId") or defaults.category_id),
        },
        "status": {
            "privacyStatus": metadata.get("privacyStatus") or defaults.privacy_status,
            "selfDeclaredMadeForKids": bool(metadata.get("madeForKids", False)),
        },
    }


class YouTubePublisher(PlatformPublisher):
    """Uploads a single video to the account's YouTube channel."""

    @property
    def platform_name(self) -> str:
        return Platform.YOUTUBE.value

    def _api_url(self, path: str) -> str:
        return f"{self.settings.endpoints.youtube_api_base}/{path}"

    def _upload_url(self, path: str) -> str:
        return f"{self.settings.endpoints.youtube_upload_base}/{path}"

    async def _publish(
        self,
        account: Account,
        content: str,
        media: list[MediaItem],
        metadata: dict[str, Any],
    ) -> PublishResult:
        if not media or not media[0].is_video:
            raise PreconditionError("YouTube requires a video to upload", platform=self.platform_name)

        access_token = await self._access_token(account)
        video_metadata = build_video_metadata(content, metadata, self.settings.youtube)

        video_bytes = await self._fetch_media(media[0].url)
        session_url = await self.initiate_upload(access_token, video_metadata, len(video_bytes))
        video = await self.upload_video(access_token, session_url, video_bytes)

        video_id = video.get("id")
        if not video_id:
            raise PlatformAPIError("YouTube upload returned no video id", platform=self.platform_name, payload=video)

        return self._make_result(
            success=True,
            platform_post_id=video_id,
            video_url=YOUTUBE_WATCH_URL.format(video_id=video_id),
        )

    async def initiate_upload(
        self,
        access_token: str,
        video_metadata: dict[str, Any],
        content_length: int,
    ) -> str:
        """Open a resumable upload session and return its URL."""
        response = await self._request(
            "POST",
            self._upload_url("videos"),
            params={"uploadType": "resumable", "part": "snippet,status"},
            headers={
                "Authorization": f"Bearer {access_token}",
                "X-Upload-Content-Type": "video/*",
                "X-Upload-Content-Length": str(content_length),
            },
            json=video_metadata,
            error_message="Failed to initialize YouTube upload",
        )

        session_url = response.headers.get("Location")
        if not session_url:
            raise PlatformAPIError("No upload URL received from YouTube", platform=self.platform_name)
        return session_url

    async def upload_video(self, access_token: str, session_url: str, video_bytes: bytes) -> dict[str, Any]:
        """PUT the full video buffer to the session URL."""
        return await self._request_json(
            "PUT",
            session_url,
            headers={"Authorization": f"Bearer {access_token}", "Content-Type": "video/*"},
            content=video_bytes,
            error_message="Failed to upload video to YouTube",
        )

    async def update_video(self, account: Account, video_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        """Update snippet/status of an existing video.

        Raises:
            PlatformAPIError: If YouTube rejects the update.
        """
        access_token = await self._access_token(account)
        return await self._request_json(
            "PUT",
            self._api_url("videos"),
            params={"part": "snippet,status"},
            headers={"Authorization": f"Bearer {access_token}"},
            json={"id": video_id, **updates},
            error_message="Failed to update YouTube video",
        )

    async def set_thumbnail(self, account: Account, video_id: str, thumbnail_url: str) -> dict[str, Any]:
        """Set a custom thumbnail from a hosted JPEG.

        Raises:
            PlatformAPIError: If YouTube rejects the thumbnail.
        """
        access_token = await self._access_token(account)
        thumbnail_bytes = await self._fetch_media(thumbnail_url)
        return await self._request_json(
            "POST",
            self._upload_url("thumbnails/set"),
            params={"videoId": video_id},
            headers={"Authorization": f"Bearer {access_token}", "Content-Type": "image/jpeg"},
            content=thumbnail_bytes,
            error_message="Failed to set YouTube thumbnail",
        )

    async def list_categories(self, account: Account, region_code: str = "US") -> list[dict[str, Any]]:
        """List video categories available in a region.

        Raises:
            PlatformAPIError: If YouTube rejects the request.
        """
        access_token = await self._access_token(account)
        data = await self._request_json(
            "GET",
            self._api_url("videoCategories"),
            params={"part": "snippet", "regionCode": region_code},
            headers={"Authorization": f"Bearer {access_token}"},
            error_message="Failed to get YouTube categories",
        )
        return data.get("items") or []
