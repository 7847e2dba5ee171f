"""Command-line interface for multi-platform publishing.

Usage:
    socials-publisher publish request.json
    socials-publisher thread twitter_account.json "First" "Second"
    socials-publisher validate request.json
    socials-publisher youtube-categories youtube_account.json --region GB
"""

from .app import app, main

__all__ = ["app", "main"]
