"""Facebook Page publisher (Graph API, form-encoded posts)."""

from __future__ import annotations

import json
from typing import Any

from ...constants import Platform
from ..base import PlatformPublisher
from ..errors import PlatformAPIError, PreconditionError
from ..models import Account, MediaItem, PublishResult


class FacebookPublisher(PlatformPublisher):
    """Publishes to a Facebook Page.

    Branches on media:
    - none: feed post with the message only
    - one image: photo upload endpoint
    - one video: video upload endpoint
    - several images: each photo uploaded unpublished, then one feed post
      attaching all photo ids
    """

    @property
    def platform_name(self) -> str:
        return Platform.FACEBOOK.value

    def _graph_url(self, path: str) -> str:
        return f"{self.settings.endpoints.graph_url}/{path}"

    async def _publish(
        self,
        account: Account,
        content: str,
        media: list[MediaItem],
        metadata: dict[str, Any],
    ) -> PublishResult:
        if len(media) > 1 and any(item.is_video for item in media):
            raise PreconditionError(
                "Facebook supports a video only as the sole media item",
                platform=self.platform_name,
            )

        page_id = account.platform_user_id
        if not page_id:
            raise PreconditionError("Facebook account has no page id", platform=self.platform_name)

        access_token = await self._access_token(account)

        if not media:
            response = await self.publish_text_post(page_id, access_token, content)
        elif len(media) == 1 and media[0].is_video:
            response = await self.publish_video_post(page_id, access_token, content, media[0].url)
        elif len(media) == 1:
            response = await self.publish_photo_post(page_id, access_token, content, media[0].url)
        else:
            response = await self.publish_photo_album(page_id, access_token, content, media)

        return self._make_result(
            success=True,
            platform_post_id=response.get("id") or response.get("post_id"),
        )

    async def publish_text_post(self, page_id: str, access_token: str, message: str) -> dict:
        """Text-only feed post."""
        return await self._request_json(
            "POST",
            self._graph_url(f"{page_id}/feed"),
            data={"access_token": access_token, "message": message},
            error_message="Failed to publish text post",
        )

    async def publish_photo_post(
        self,
        page_id: str,
        access_token: str,
        message: str,
        photo_url: str,
    ) -> dict:
        """Single published photo with caption."""
        return await self._request_json(
            "POST",
            self._graph_url(f"{page_id}/photos"),
            data={"access_token": access_token, "message": message, "url": photo_url},
            error_message="Failed to publish photo",
        )

    async def publish_video_post(
        self,
        page_id: str,
        access_token: str,
        description: str,
        video_url: str,
    ) -> dict:
        """Single video; Facebook pulls the file from `file_url`."""
        return await self._request_json(
            "POST",
            self._graph_url(f"{page_id}/videos"),
            data={"access_token": access_token, "description": description, "file_url": video_url},
            error_message="Failed to publish video",
        )

    async def upload_unpublished_photo(self, page_id: str, access_token: str, photo_url: str) -> str:
        """Upload a photo with published=false and return its id."""
        data = await self._request_json(
            "POST",
            self._graph_url(f"{page_id}/photos"),
            data={"access_token": access_token, "url": photo_url, "published": "false"},
            error_message="Failed to upload photo",
        )
        photo_id = data.get("id")
        if not photo_id:
            raise PlatformAPIError("Photo upload returned no id", platform=self.platform_name, payload=data)
        return photo_id

    async def publish_photo_album(
        self,
        page_id: str,
        access_token: str,
        message: str,
        media: list[MediaItem],
    ) -> dict:
        """Multi-photo post: unpublished uploads first, then one feed post."""
        photo_ids = []
        for item in media:
            photo_ids.append(await self.upload_unpublished_photo(page_id, access_token, item.url))

        attached_media = [{"media_fbid": photo_id} for photo_id in photo_ids]
        return await self._request_json(
            "POST",
            self._graph_url(f"{page_id}/feed"),
            data={
                "access_token": access_token,
                "message": message,
                "attached_media": json.dumps(attached_media),
            },
            error_message="Failed to publish album",
        )
