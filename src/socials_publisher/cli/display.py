"""Display functions for publishing commands - pure functions for Rich output."""

from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..dispatch import PublishSummary
from ..platforms.models import PublishResult
from ..validation import MultiPlatformReport, ValidationReport


def build_results_table(results: Sequence[PublishResult]) -> Table:
    """Build a table with one row per platform result."""
    table = Table(title="Publish Results")
    table.add_column("Platform", style="cyan")
    table.add_column("Status")
    table.add_column("Post ID")
    table.add_column("Details", style="dim")

    for result in results:
        if result.success:
            status = "[green]OK[/green]"
            details = result.video_url or (
                f"{len(result.thread_ids)} tweets" if result.thread_ids else ""
            )
        else:
            status = "[red]FAILED[/red]"
            details = result.error or ""
        table.add_row(result.platform, status, result.platform_post_id or "-", details)

    return table


def show_results(console: Console, results: Sequence[PublishResult]) -> None:
    console.print(build_results_table(results))


def show_summary(console: Console, summary: PublishSummary) -> None:
    """Display the "N of M platforms succeeded" line."""
    if summary.all_succeeded:
        style = "green"
    elif summary.any_succeeded:
        style = "yellow"
    else:
        style = "red"
    console.print(f"[bold {style}]{summary}[/bold {style}]")


def show_validation_report(console: Console, report: ValidationReport) -> None:
    """Display errors and warnings for one platform."""
    if report.is_valid and not report.warnings:
        console.print(f"[green][OK][/green] {report.platform}")
        return

    marker = "[green][OK][/green]" if report.is_valid else "[red][X][/red]"
    console.print(f"{marker} {report.platform}")
    for error in report.errors:
        console.print(f"    [red]- {error}[/red]")
    for warning in report.warnings:
        console.print(f"    [yellow]! {warning}[/yellow]")


def show_validation(console: Console, report: MultiPlatformReport) -> None:
    """Display validation reports for every platform."""
    for platform_report in report.reports.values():
        show_validation_report(console, platform_report)


def show_thread_result(console: Console, result: PublishResult) -> None:
    if result.success:
        console.print(Panel(
            "[bold green]Thread published![/bold green]\n\n"
            + "\n".join(f"  [cyan]{i}.[/cyan] {tweet_id}" for i, tweet_id in enumerate(result.thread_ids, 1)),
            title="Twitter Thread",
            border_style="green",
        ))
    else:
        console.print(Panel(
            f"[red]Thread failed[/red]\n\n{result.error}",
            title="Twitter Thread",
            border_style="red",
        ))


def show_categories_table(console: Console, categories: Sequence[dict[str, Any]], region: str) -> None:
    """Display YouTube video categories."""
    table = Table(title=f"YouTube Categories ({region})")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Assignable", justify="center")

    for category in categories:
        snippet = category.get("snippet", {})
        assignable = "[green]yes[/green]" if snippet.get("assignable") else "[dim]no[/dim]"
        table.add_row(str(category.get("id", "")), snippet.get("title", ""), assignable)

    console.print(table)
