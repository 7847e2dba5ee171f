"""Fan-out of one logical post to every requested platform.

Each platform runs concurrently and independently. The join is
all-settled: every requested platform yields exactly one result, in the
order the platforms were requested, whatever happens to the others.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from ..platforms.base import coerce_media
from ..platforms.models import Account, MediaItem, PublishResult
from .dispatcher import Dispatcher

_logger = logging.getLogger("publishing")

NO_ACCOUNT_ERROR = "No connected account found for this platform"


def find_account(accounts: Iterable[Account], platform: str) -> Optional[Account]:
    """First account whose platform matches, case-insensitively."""
    wanted = platform.lower()
    for account in accounts:
        if account.platform.lower() == wanted:
            return account
    return None


@dataclass
class PublishRequest:
    """Inbound publish request as received from the HTTP layer."""

    platforms: list[str]
    accounts: list[Account]
    content: str = ""
    media: list[MediaItem] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PublishRequest":
        """Parse `{platforms, accounts, content, media, metadata}`.

        Raises:
            ValueError: If the payload shape is malformed.
        """
        if not isinstance(data, dict):
            raise ValueError("Publish request must be a JSON object")

        platforms = data.get("platforms")
        if not isinstance(platforms, list) or not all(isinstance(p, str) for p in platforms):
            raise ValueError("'platforms' must be a list of platform names")

        accounts = data.get("accounts") or []
        if not isinstance(accounts, list):
            raise ValueError("'accounts' must be a list")

        content = data.get("content") or ""
        if not isinstance(content, str):
            raise ValueError("'content' must be a string")

        media = data.get("media") or []
        if not isinstance(media, list):
            raise ValueError("'media' must be a list")

        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise ValueError("'metadata' must be an object")

        return cls(
            platforms=list(platforms),
            accounts=[Account.from_dict(account) for account in accounts],
            content=content,
            media=coerce_media(media),
            metadata=metadata,
        )


@dataclass(frozen=True)
class PublishSummary:
    """How many of the requested platforms succeeded."""

    total: int
    succeeded: int

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def any_succeeded(self) -> bool:
        return self.succeeded > 0

    @property
    def all_succeeded(self) -> bool:
        return self.total > 0 and self.succeeded == self.total

    def __str__(self) -> str:
        return f"{self.succeeded} of {self.total} platforms succeeded"


def summarize(results: Sequence[PublishResult]) -> PublishSummary:
    return PublishSummary(total=len(results), succeeded=sum(1 for r in results if r.success))


class PublishOrchestrator:
    """Publishes one post to many platforms at once.

    Usage:
        orchestrator = PublishOrchestrator()
        results = await orchestrator.dispatch_all(
            ["facebook", "linkedin"], accounts, "Hello!", media=[]
        )
        print(summarize(results))
    """

    def __init__(self, dispatcher: Dispatcher | None = None):
        self.dispatcher = dispatcher or Dispatcher()

    async def dispatch_all(
        self,
        platforms: Sequence[str],
        accounts: Sequence[Account],
        content: str,
        media: Optional[Iterable[Any]] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> list[PublishResult]:
        """Publish to every requested platform concurrently.

        Returns:
            One result per requested platform, in request order.

        Raises:
            TypeError: If platforms or accounts are malformed.
        """
        _check_inputs(platforms, accounts)
        media_items = coerce_media(media)

        _logger.info(f"Publishing to {len(platforms)} platform(s): {', '.join(platforms)}")

        outcomes = await asyncio.gather(
            *(
                self._publish_one(platform, accounts, content, media_items, metadata)
                for platform in platforms
            ),
            return_exceptions=True,
        )

        results = []
        for platform, outcome in zip(platforms, outcomes):
            if isinstance(outcome, BaseException):
                _logger.error(f"Publishing to {platform} raised: {outcome!r}")
                outcome = PublishResult.failed(platform, str(outcome) or "Unknown error")
            results.append(outcome)

        _logger.info(summarize(results))
        return results

    async def publish(self, request: PublishRequest) -> list[PublishResult]:
        """Publish a parsed request."""
        return await self.dispatch_all(
            request.platforms,
            request.accounts,
            request.content,
            request.media,
            request.metadata,
        )

    async def publish_payload(self, payload: dict[str, Any]) -> list[PublishResult]:
        """Publish a raw request payload (entry point for an HTTP layer)."""
        return await self.publish(PublishRequest.from_dict(payload))

    async def _publish_one(
        self,
        platform: str,
        accounts: Sequence[Account],
        content: str,
        media: list[MediaItem],
        metadata: Optional[dict[str, Any]],
    ) -> PublishResult:
        account = find_account(accounts, platform)
        if account is None:
            return PublishResult.failed(platform, NO_ACCOUNT_ERROR)

        return await self.dispatcher.dispatch(platform, account, content, media, metadata)


def _check_inputs(platforms: Sequence[str], accounts: Sequence[Account]) -> None:
    if isinstance(platforms, str) or not all(isinstance(p, str) for p in platforms):
        raise TypeError("platforms must be a sequence of platform names")
    if not all(isinstance(a, Account) for a in accounts):
        raise TypeError("accounts must be Account instances")
