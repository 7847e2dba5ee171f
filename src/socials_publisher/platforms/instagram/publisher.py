"""Instagram publisher using the Graph API container workflow.

Implements the container-based publishing workflow:
1. Resolve the Instagram Business Account linked to one of the token's Pages
2. Create a media container for each image/video (requires public URL)
3. Publish the single container, or wrap all containers in a CAROUSEL
   container and publish that

API Reference:
https://developers.facebook.com/docs/instagram-platform/instagram-graph-api/content-publishing
"""

from __future__ import annotations

from typing import Any

from ...constants import Platform
from ..base import PlatformPublisher
from ..errors import PlatformAPIError, PreconditionError
from ..models import Account, MediaItem, PublishResult


class InstagramPublisher(PlatformPublisher):
    """Instagram publisher implementing the platform interface."""

    @property
    def platform_name(self) -> str:
        return Platform.INSTAGRAM.value

    def _graph_url(self, path: str) -> str:
        return f"{self.settings.endpoints.graph_url}/{path}"

    async def _publish(
        self,
        account: Account,
        content: str,
        media: list[MediaItem],
        metadata: dict[str, Any],
    ) -> PublishResult:
        if not media:
            raise PreconditionError(
                "Instagram posts require at least one image or video",
                platform=self.platform_name,
            )

        access_token = await self._access_token(account)
        ig_account_id = await self.get_business_account_id(access_token)

        is_carousel = len(media) > 1
        container_ids = []
        for item in media:
            container_id = await self.create_media_container(
                ig_account_id,
                access_token,
                item,
                content,
                is_carousel_item=is_carousel,
            )
            container_ids.append(container_id)

        if is_carousel:
            creation_id = await self.create_carousel_container(
                ig_account_id, access_token, container_ids, content
            )
        else:
            creation_id = container_ids[0]

        media_id = await self.publish_container(ig_account_id, access_token, creation_id)
        return self._make_result(success=True, platform_post_id=media_id)

    async def get_business_account_id(self, access_token: str) -> str:
        """Walk the token's Facebook Pages and return the first linked business account id."""
        pages = await self._request_json(
            "GET",
            self._graph_url("me/accounts"),
            params={"access_token": access_token},
            error_message="Failed to get Instagram account",
        )

        page_ids = [page["id"] for page in pages.get("data") or [] if page.get("id")]
        if not page_ids:
            raise PlatformAPIError("No Facebook page found", platform=self.platform_name, payload=pages)

        for page_id in page_ids:
            page = await self._request_json(
                "GET",
                self._graph_url(page_id),
                params={"fields": "instagram_business_account", "access_token": access_token},
                error_message="No Instagram Business Account found",
            )
            business_account = page.get("instagram_business_account") or {}
            if business_account.get("id"):
                return business_account["id"]

        raise PlatformAPIError("No Instagram Business Account found", platform=self.platform_name)

    async def create_media_container(
        self,
        ig_account_id: str,
        access_token: str,
        item: MediaItem,
        caption: str,
        is_carousel_item: bool = False,
    ) -> str:
        """Create a media container for one image or video.

        Returns:
            Container ID (creation_id)
        """
        params = {
            "access_token": access_token,
            "caption": caption,
            "media_type": "VIDEO" if item.is_video else "IMAGE",
            ("video_url" if item.is_video else "image_url"): item.url,
        }
        if is_carousel_item:
            params["is_carousel_item"] = "true"

        data = await self._request_json(
            "POST",
            self._graph_url(f"{ig_account_id}/media"),
            data=params,
            error_message="Failed to create media container",
        )
        return self._require_id(data, "Media container")

    async def create_carousel_container(
        self,
        ig_account_id: str,
        access_token: str,
        children_ids: list[str],
        caption: str,
    ) -> str:
        """Create a carousel container from child containers."""
        data = await self._request_json(
            "POST",
            self._graph_url(f"{ig_account_id}/media"),
            data={
                "access_token": access_token,
                "media_type": "CAROUSEL",
                "caption": caption,
                "children": ",".join(children_ids),
            },
            error_message="Failed to create carousel container",
        )
        return self._require_id(data, "Carousel container")

    async def publish_container(self, ig_account_id: str, access_token: str, creation_id: str) -> str:
        """Publish a container to Instagram.

        Returns:
            Media ID of the published post
        """
        data = await self._request_json(
            "POST",
            self._graph_url(f"{ig_account_id}/media_publish"),
            data={"access_token": access_token, "creation_id": creation_id},
            error_message="Failed to publish media",
        )
        return self._require_id(data, "Publish")

    def _require_id(self, data: dict, step: str) -> str:
        if not data.get("id"):
            raise PlatformAPIError(f"{step} response has no id", platform=self.platform_name, payload=data)
        return data["id"]
