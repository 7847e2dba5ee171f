"""Typer app configuration and logging setup."""

from __future__ import annotations

import logging
import warnings
from pathlib import Path

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# httpx cleanup after asyncio.run() closes the loop
warnings.filterwarnings("ignore", message=".*Event loop is closed.*")
warnings.filterwarnings("ignore", category=ResourceWarning)

app = typer.Typer(
    name="socials-publisher",
    help="Publish one post to Facebook, Instagram, LinkedIn, Twitter/X, TikTok and YouTube",
    add_completion=False,
)


def register_commands() -> None:
    """Register all publishing commands."""
    from .commands import publish, thread, validate, youtube_categories

    app.command(name="publish")(publish)
    app.command(name="thread")(thread)
    app.command(name="validate")(validate)
    app.command(name="youtube-categories")(youtube_categories)


def setup_logging(log_dir: Path | None = None) -> None:
    """Configure logging for CLI.

    - Suppresses console output from libraries
    - Writes every platform API call to logs/publishing_api.log
    """
    if log_dir is None:
        log_dir = Path(__file__).parent.parent.parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)

    for logger_name in ["httpx", "httpcore", "asyncio"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    file_handler = logging.FileHandler(log_dir / "publishing_api.log", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
    )

    for logger_name in ["publishing_api", "publishing"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.INFO)
        logger.propagate = False
        logger.handlers = []
        logger.addHandler(file_handler)


register_commands()


def main() -> None:
    """CLI entry point."""
    setup_logging()
    app()
