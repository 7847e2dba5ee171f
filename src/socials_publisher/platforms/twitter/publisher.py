"""Twitter/X publisher (API v2 tweets, v1.1 media upload)."""

from __future__ import annotations

import base64
from typing import Any, Iterable, Optional, Union

from ...constants import Platform
from ..base import PlatformPublisher
from ..errors import PlatformAPIError, PreconditionError
from ..models import Account, MediaItem, PublishResult

ThreadPost = Union[str, dict[str, Any]]


class TwitterPublisher(PlatformPublisher):
    """Publishes tweets and threads.

    Media is uploaded first (one legacy upload call per item), then a single
    tweet references every collected media id.
    """

    @property
    def platform_name(self) -> str:
        return Platform.TWITTER.value

    @property
    def _tweets_url(self) -> str:
        return f"{self.settings.endpoints.twitter_api_base}/tweets"

    def _extract_error(self, payload: dict[str, Any]) -> Optional[str]:
        errors = payload.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            if errors[0].get("message"):
                return errors[0]["message"]
        return payload.get("detail")

    async def _publish(
        self,
        account: Account,
        content: str,
        media: list[MediaItem],
        metadata: dict[str, Any],
    ) -> PublishResult:
        access_token = await self._access_token(account)

        media_ids = []
        for item in media:
            media_ids.append(await self.upload_media(access_token, item.url))

        tweet_id = await self.create_tweet(access_token, content, media_ids=media_ids)
        return self._make_result(success=True, platform_post_id=tweet_id)

    async def upload_media(self, access_token: str, media_url: str) -> str:
        """Upload one media file via the legacy endpoint; returns media_id_string."""
        media_bytes = await self._fetch_media(media_url)
        data = await self._request_json(
            "POST",
            self.settings.endpoints.twitter_media_upload_url,
            headers={"Authorization": f"Bearer {access_token}"},
            data={"media_data": base64.b64encode(media_bytes).decode("ascii")},
            error_message="Failed to upload media",
        )
        media_id = data.get("media_id_string") or data.get("media_id")
        if not media_id:
            raise PlatformAPIError("Media upload returned no media id", platform=self.platform_name, payload=data)
        return str(media_id)

    async def create_tweet(
        self,
        access_token: str,
        text: str,
        media_ids: Optional[list[str]] = None,
        reply_to: Optional[str] = None,
    ) -> str:
        """Create one tweet and return its id."""
        body: dict[str, Any] = {"text": text}
        if media_ids:
            body["media"] = {"media_ids": media_ids}
        if reply_to:
            body["reply"] = {"in_reply_to_tweet_id": reply_to}

        data = await self._request_json(
            "POST",
            self._tweets_url,
            headers={"Authorization": f"Bearer {access_token}"},
            json=body,
            error_message="Failed to publish tweet",
        )
        tweet_id = (data.get("data") or {}).get("id")
        if not tweet_id:
            raise PlatformAPIError("Tweet response has no id", platform=self.platform_name, payload=data)
        return tweet_id

    async def publish_thread(self, account: Account, posts: Iterable[ThreadPost]) -> PublishResult:
        """Publish an ordered thread; each tweet replies to the one before it.

        Args:
            account: Connected Twitter account.
            posts: Tweet bodies in order (strings or {"content": ...} dicts).

        Returns:
            PublishResult whose platform_post_id is the first tweet and
            thread_ids holds every tweet id in order.
        """
        return await self._guard(self._publish_thread(account, list(posts)))

    async def _publish_thread(self, account: Account, posts: list[ThreadPost]) -> PublishResult:
        texts = [post["content"] if isinstance(post, dict) else post for post in posts]
        if not texts:
            raise PreconditionError("A thread needs at least one post", platform=self.platform_name)

        access_token = await self._access_token(account)

        tweet_ids: list[str] = []
        previous_id: Optional[str] = None
        for text in texts:
            previous_id = await self.create_tweet(access_token, text, reply_to=previous_id)
            tweet_ids.append(previous_id)

        return self._make_result(
            success=True,
            platform_post_id=tweet_ids[0],
            thread_ids=tuple(tweet_ids),
        )
