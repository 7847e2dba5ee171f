"""Dispatch of posts to platform publishers."""

from .dispatcher import Dispatcher
from .orchestrator import (
    NO_ACCOUNT_ERROR,
    PublishOrchestrator,
    PublishRequest,
    PublishSummary,
    find_account,
    summarize,
)

__all__ = [
    "Dispatcher",
    "NO_ACCOUNT_ERROR",
    "PublishOrchestrator",
    "PublishRequest",
    "PublishSummary",
    "find_account",
    "summarize",
]
