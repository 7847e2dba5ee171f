"""LinkedIn publisher (UGC posts with registered asset uploads)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ...constants import LINKEDIN_RESTLI_PROTOCOL_VERSION, MediaType, Platform
from ...http import read_json
from ..base import PlatformPublisher
from ..errors import PlatformAPIError, PreconditionError
from ..models import Account, MediaItem, PublishResult

_UPLOAD_MECHANISM = "com.linkedin.digitalmedia.uploading.MediaUploadHttpRequest"


@dataclass
class RegisteredUpload:
    """Upload slot returned by registerUpload."""

    upload_url: str
    asset: str


def build_share(
    person_urn: str,
    text: str,
    category: str = "NONE",
    assets: Optional[list[str]] = None,
) -> dict[str, Any]:
    """Build a ugcPosts payload for a public share."""
    share_content: dict[str, Any] = {
        "shareCommentary": {"text": text},
        "shareMediaCategory": category,
    }
    if assets:
        share_content["media"] = [{"status": "READY", "media": asset} for asset in assets]

    return {
        "author": person_urn,
        "lifecycleState": "PUBLISHED",
        "specificContent": {"com.linkedin.ugc.ShareContent": share_content},
        "visibility": {"com.linkedin.ugc.MemberNetworkVisibility": "PUBLIC"},
    }


class LinkedInPublisher(PlatformPublisher):
    """Publishes member shares to LinkedIn.

    Every media share is register, then upload, then reference: the asset
    URN from registerUpload is only usable after its bytes were PUT.
    """

    @property
    def platform_name(self) -> str:
        return Platform.LINKEDIN.value

    def _api_url(self, path: str) -> str:
        return f"{self.settings.endpoints.linkedin_api_base}/{path}"

    def _extract_error(self, payload: dict[str, Any]) -> Optional[str]:
        return payload.get("message")

    async def _publish(
        self,
        account: Account,
        content: str,
        media: list[MediaItem],
        metadata: dict[str, Any],
    ) -> PublishResult:
        if len(media) > 1 and any(item.is_video for item in media):
            raise PreconditionError(
                "LinkedIn multi-media posts support images only",
                platform=self.platform_name,
            )

        access_token = await self._access_token(account)
        person_urn = await self.get_person_urn(access_token)

        if not media:
            share = build_share(person_urn, content)
        elif len(media) == 1:
            item = media[0]
            media_type = MediaType.VIDEO.value if item.is_video else MediaType.IMAGE.value
            asset = await self.upload_asset(access_token, person_urn, item.url, media_type)
            share = build_share(person_urn, content, media_type.upper(), [asset])
        else:
            assets = []
            for item in media:
                assets.append(await self.upload_asset(access_token, person_urn, item.url))
            share = build_share(person_urn, content, "IMAGE", assets)

        post_id = await self.create_share(access_token, share)
        return self._make_result(success=True, platform_post_id=post_id)

    async def get_person_urn(self, access_token: str) -> str:
        """Resolve the acting member's URN."""
        data = await self._request_json(
            "GET",
            self._api_url("me"),
            headers={"Authorization": f"Bearer {access_token}"},
            error_message="Failed to get LinkedIn user info",
        )
        if not data.get("id"):
            raise PlatformAPIError("Failed to get LinkedIn user info", platform=self.platform_name, payload=data)
        return f"urn:li:person:{data['id']}"

    async def register_upload(
        self,
        access_token: str,
        person_urn: str,
        media_type: str = MediaType.IMAGE.value,
    ) -> RegisteredUpload:
        """Register an upload slot for one image or video."""
        data = await self._request_json(
            "POST",
            self._api_url("assets?action=registerUpload"),
            headers={"Authorization": f"Bearer {access_token}"},
            json={
                "registerUploadRequest": {
                    "recipes": [f"urn:li:digitalmediaRecipe:feedshare-{media_type.lower()}"],
                    "owner": person_urn,
                    "serviceRelationships": [
                        {
                            "relationshipType": "OWNER",
                            "identifier": "urn:li:userGeneratedContent",
                        }
                    ],
                }
            },
            error_message="Failed to register media upload",
        )

        try:
            value = data["value"]
            return RegisteredUpload(
                upload_url=value["uploadMechanism"][_UPLOAD_MECHANISM]["uploadUrl"],
                asset=value["asset"],
            )
        except (KeyError, TypeError) as e:
            raise PlatformAPIError(
                "Failed to register media upload",
                platform=self.platform_name,
                payload=data,
            ) from e

    async def upload_media(self, access_token: str, upload_url: str, media_url: str) -> None:
        """Fetch source bytes and PUT them to the registered upload URL."""
        media_bytes = await self._fetch_media(media_url)
        await self._request(
            "PUT",
            upload_url,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Content-Type": "application/octet-stream",
            },
            content=media_bytes,
            error_message="Failed to upload media to LinkedIn",
        )

    async def upload_asset(
        self,
        access_token: str,
        person_urn: str,
        media_url: str,
        media_type: str = MediaType.IMAGE.value,
    ) -> str:
        """Register, then upload; returns the asset URN."""
        upload = await self.register_upload(access_token, person_urn, media_type)
        await self.upload_media(access_token, upload.upload_url, media_url)
        return upload.asset

    async def create_share(self, access_token: str, share: dict[str, Any]) -> Optional[str]:
        """Create the UGC post and return its id."""
        response = await self._request(
            "POST",
            self._api_url("ugcPosts"),
            headers={
                "Authorization": f"Bearer {access_token}",
                "X-Restli-Protocol-Version": LINKEDIN_RESTLI_PROTOCOL_VERSION,
            },
            json=share,
            error_message="Failed to publish LinkedIn post",
        )
        data = read_json(response)
        return data.get("id") or response.headers.get("x-restli-id")
