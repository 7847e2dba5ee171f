"""Publishing service - loads inputs and runs publishers for the CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Sequence

from ..dispatch import PublishOrchestrator, PublishRequest
from ..platforms.models import Account, PublishResult
from ..platforms.twitter import TwitterPublisher
from ..platforms.youtube import YouTubePublisher


def load_json_file(path: Path) -> Any:
    """Read a JSON file.

    Raises:
        ValueError: If the file is missing or is not valid JSON.
    """
    if not path.exists():
        raise ValueError(f"File not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def load_request(path: Path) -> PublishRequest:
    return PublishRequest.from_dict(load_json_file(path))


def load_account(path: Path, platform: Optional[str] = None) -> Account:
    """Load one account record, optionally checking its platform."""
    account = Account.from_dict(load_json_file(path))
    if platform and account.platform.lower() != platform:
        raise ValueError(f"Expected a {platform} account, got {account.platform}")
    return account


async def run_publish(request: PublishRequest) -> list[PublishResult]:
    orchestrator = PublishOrchestrator()
    return await orchestrator.publish(request)


async def run_thread(account: Account, tweets: Sequence[str]) -> PublishResult:
    publisher = TwitterPublisher()
    return await publisher.publish_thread(account, list(tweets))


async def fetch_youtube_categories(account: Account, region: str) -> list[dict[str, Any]]:
    publisher = YouTubePublisher()
    return await publisher.list_categories(account, region)
