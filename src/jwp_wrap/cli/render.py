"""Rich rendering of platform results for the CLI layer.

This module is responsible for:

* Rendering Rich tables for video lists, tracks and analytics.
* Printing single-video details and short result summaries.

All display-related logic lives here — no business logic, no network
calls, no response parsing.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from jwp_wrap.cli.console import console
from jwp_wrap.core.models import AnalyticsMetric, ThumbnailResource, VideoStats
from jwp_wrap.core.responses import Track, Video
from jwp_wrap.exceptions import EnvironmentError


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for result rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms — no I/O themselves)
# ---------------------------------------------------------------------------

def _format_duration(duration: float | None) -> str:
    """Render seconds as ``"3m 07s"`` or ``"—"``."""
    if duration is None:
        return "—"
    minutes, seconds = divmod(int(duration), 60)
    return f"{minutes}m {seconds:02d}s"


def _format_date(timestamp: int | None) -> str:
    """Render a Unix timestamp as an ISO date (UTC) or ``"—"``."""
    if timestamp is None:
        return "—"
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date().isoformat()


def _format_metric(value: int | float | None) -> str:
    if value is None:
        return "—"
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def display_videos(videos: Sequence[Video], total: int | None = None) -> None:
    """Print a Rich table summarising *videos*."""
    table_class = _import_rich_table()

    table = table_class(
        title=f"Videos ({total if total is not None else len(videos)} total)",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Key", style="bold", min_width=8)
    table.add_column("Title", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    table.add_column("Duration", justify="right", min_width=8)
    table.add_column("Published", justify="right", min_width=10)

    for video in videos:
        table.add_row(
            video.key,
            video.title or "",
            video.status or "—",
            _format_duration(video.duration),
            _format_date(video.date),
        )

    console.print()
    console.print(table)
    console.print()


def display_video(video: Video) -> None:
    """Print the details of a single video."""
    console.print()
    console.print(f"[bold cyan]Key:[/bold cyan]       {video.key}")
    console.print(f"[bold cyan]Title:[/bold cyan]     {video.title or ''}")
    if video.description:
        console.print(f"[bold cyan]About:[/bold cyan]     {video.description}")
    console.print(f"[bold cyan]Status:[/bold cyan]    {video.status or '—'}")
    console.print(f"[bold cyan]Duration:[/bold cyan]  {_format_duration(video.duration)}")
    console.print(f"[bold cyan]Published:[/bold cyan] {_format_date(video.date)}")
    if video.tags:
        console.print(f"[bold cyan]Tags:[/bold cyan]      {video.tags}")
    console.print()


def display_tracks(video_key: str, tracks: Sequence[Track]) -> None:
    """Print a Rich table of the text tracks attached to a video."""
    table_class = _import_rich_table()

    table = table_class(
        title=f"Tracks for {video_key}",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Key", style="bold", min_width=8)
    table.add_column("Kind", min_width=8)
    table.add_column("Label", min_width=12)
    table.add_column("Status", justify="center", min_width=8)

    for track in tracks:
        table.add_row(track.key, track.kind or "—", track.label or "", track.status or "—")

    console.print()
    console.print(table)
    console.print()


def display_stats(media_id: str, stats: VideoStats) -> None:
    """Print a Rich table with one row per analytics metric."""
    if stats.is_empty():
        console.print(f"[yellow]No analytics data for {media_id}.[/yellow]")
        return

    table_class = _import_rich_table()
    table = table_class(
        title=f"Analytics for {media_id}",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Metric", style="bold", min_width=14)
    table.add_column("Value", justify="right", min_width=10)

    for metric in AnalyticsMetric:
        table.add_row(metric.value, _format_metric(getattr(stats, metric.attribute)))

    console.print()
    console.print(table)
    console.print()


def display_thumbnail(resource: ThumbnailResource) -> None:
    console.print(
        f"[bold green]Saved[/bold green] {resource.name} → {resource.path}"
    )
