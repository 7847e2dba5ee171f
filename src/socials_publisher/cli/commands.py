"""Publishing CLI commands."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import List

import httpx
import typer

from ..dispatch import summarize
from ..platforms.errors import PublishError
from ..validation import validate_multiple_platforms
from .console import console, print_error, print_info, print_warning
from .display import (
    show_categories_table,
    show_results,
    show_summary,
    show_thread_result,
    show_validation,
)
from .service import (
    fetch_youtube_categories,
    load_account,
    load_request,
    run_publish,
    run_thread,
)


def publish(
    request_file: Path = typer.Argument(..., help="JSON file with platforms, accounts, content, media, metadata"),
    as_json: bool = typer.Option(False, "--json", help="Print raw results as JSON"),
    validate: bool = typer.Option(True, "--validate/--no-validate", help="Run pre-flight content validation"),
) -> None:
    """Publish one post to every requested platform.

    Exits with code 1 when no platform succeeded.
    """
    try:
        request = load_request(request_file)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(2)

    if validate and not as_json:
        report = validate_multiple_platforms(request.platforms, request.content, request.media)
        show_validation(console, report)
        if not report.is_valid:
            failing = ", ".join(report.all_errors)
            print_warning(f"Validation failed for {failing}; publishing anyway")

    results = asyncio.run(run_publish(request))
    summary = summarize(results)

    if as_json:
        console.print_json(json.dumps([result.to_dict() for result in results]))
    else:
        show_results(console, results)
        show_summary(console, summary)

    if not summary.any_succeeded:
        raise typer.Exit(1)


def thread(
    account_file: Path = typer.Argument(..., help="JSON file with the Twitter account"),
    tweets: List[str] = typer.Argument(..., help="Tweet texts, in thread order"),
) -> None:
    """Publish a Twitter thread, each tweet replying to the previous one."""
    try:
        account = load_account(account_file, platform="twitter")
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(2)

    result = asyncio.run(run_thread(account, tweets))
    show_thread_result(console, result)
    if not result.success:
        raise typer.Exit(1)


def validate(
    request_file: Path = typer.Argument(..., help="JSON file with platforms, content, media"),
) -> None:
    """Check content against each requested platform's limits."""
    try:
        request = load_request(request_file)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(2)

    report = validate_multiple_platforms(request.platforms, request.content, request.media)
    show_validation(console, report)
    if not report.is_valid:
        raise typer.Exit(1)


def youtube_categories(
    account_file: Path = typer.Argument(..., help="JSON file with the YouTube account"),
    region: str = typer.Option("US", "--region", "-r", help="ISO 3166-1 region code"),
) -> None:
    """List YouTube video categories for a region."""
    try:
        account = load_account(account_file, platform="youtube")
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(2)

    try:
        categories = asyncio.run(fetch_youtube_categories(account, region))
    except (PublishError, httpx.HTTPError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    if not categories:
        print_info(f"No categories returned for region {region}")
        return
    show_categories_table(console, categories, region)
