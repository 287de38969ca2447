"""CLI application entry point and command routing for jwp-wrap.

This module is the **sole error boundary** for the entire application.
It catches :class:`~jwp_wrap.exceptions.JwpWrapError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* ``print()`` is forbidden outside the CLI layer; Rich console is used
  exclusively.
* Heavy imports (httpx, pydantic) are deferred into the handlers so that
  ``--help`` and ``--version`` stay fast and dependency-free.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from jwp_wrap.cli import exit_codes
from jwp_wrap.cli.console import configure_logging, console
from jwp_wrap.exceptions import ConfigurationError, JwpWrapError
from jwp_wrap.version import __version__

if TYPE_CHECKING:
    from jwp_wrap.core.platform_api import PlatformApi
    from jwp_wrap.core.responses import StatusResponse


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser with one sub-command per action."""
    parser = argparse.ArgumentParser(
        prog="jwp-wrap",
        description="Command-line client for the JW Platform video API.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log HTTP calls and decoding details to stderr.",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    commands.add_parser("doctor", help="Check the environment and configuration.")

    list_cmd = commands.add_parser("list", help="List videos.")
    list_cmd.add_argument("--search", default=None, help="Free-text filter.")
    list_cmd.add_argument("--limit", type=int, default=50, help="Page size.")
    list_cmd.add_argument("--offset", type=int, default=0, help="Page offset.")

    show_cmd = commands.add_parser("show", help="Show one video.")
    show_cmd.add_argument("video_key")

    tracks_cmd = commands.add_parser("tracks", help="List the tracks of a video.")
    tracks_cmd.add_argument("video_key")

    stats_cmd = commands.add_parser("stats", help="Show analytics totals for a video.")
    stats_cmd.add_argument("media_id")
    stats_cmd.add_argument("--start-date", default=None, help="YYYY-MM-DD")
    stats_cmd.add_argument("--end-date", default=None, help="YYYY-MM-DD")
    stats_cmd.add_argument(
        "--timeframe",
        default=None,
        help='Relative timeframe such as "7 Days" (instead of dates).',
    )

    thumb_cmd = commands.add_parser("thumbnail", help="Download a video thumbnail.")
    thumb_cmd.add_argument("video_key")
    thumb_cmd.add_argument("--width", type=int, default=320, help="Rendition width.")

    upload_cmd = commands.add_parser("upload", help="Create a video and upload a file.")
    upload_cmd.add_argument("file")
    upload_cmd.add_argument("--title", required=True)
    upload_cmd.add_argument("--description", default=None)
    upload_cmd.add_argument("--tags", default=None, help="Comma-separated tags.")

    return parser


# ---------------------------------------------------------------------------
# Service wiring
# ---------------------------------------------------------------------------

@contextmanager
def _platform_api(*, needs_site_key: bool = False) -> Iterator[PlatformApi]:
    """Load settings, build the transport and yield a ready facade.

    The transport is closed when the block exits.  Only analytics
    queries pass *needs_site_key*; the other calls never address a site.

    Raises
    ------
    ConfigurationError
        If a setting cannot be parsed or credentials are missing.
    """
    from jwp_wrap.core.platform_api import PlatformApi
    from jwp_wrap.infra.httpx_transport import HttpxTransport
    from jwp_wrap.infra.settings import PlatformSettings
    from jwp_wrap.infra.temp_storage import TempFileStorage

    settings = PlatformSettings.load()
    settings.require_credentials(needs_site_key=needs_site_key)

    with HttpxTransport.from_settings(settings) as transport:
        yield PlatformApi(transport, settings.site_key, TempFileStorage())


def _report_status(response: StatusResponse) -> int:
    """Print a platform-side error and map the status to an exit code."""
    if response.ok:
        return exit_codes.SUCCESS
    console.print(
        f"[bold red]Platform error:[/bold red] {response.code or response.status}"
        f" — {response.message or response.title or 'no details'}"
    )
    return exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _handle_doctor(args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from jwp_wrap.cli.doctor import run_doctor

    return run_doctor()


def _handle_list(args: argparse.Namespace) -> int:
    from jwp_wrap.cli.render import display_videos
    from jwp_wrap.core.requests import ListVideosParams

    params = ListVideosParams(
        search=args.search,
        result_limit=args.limit,
        result_offset=args.offset,
    )
    with _platform_api() as api:
        response = api.fetch_videos(params)

    code = _report_status(response)
    if code == exit_codes.SUCCESS:
        display_videos(response.videos, response.total)
    return code


def _handle_show(args: argparse.Namespace) -> int:
    from jwp_wrap.cli.render import display_video
    from jwp_wrap.core.requests import ShowVideoParams

    with _platform_api() as api:
        response = api.fetch_video(ShowVideoParams(video_key=args.video_key))

    code = _report_status(response)
    if code == exit_codes.SUCCESS and response.video is not None:
        display_video(response.video)
    return code


def _handle_tracks(args: argparse.Namespace) -> int:
    from jwp_wrap.cli.render import display_tracks
    from jwp_wrap.core.requests import ListTracksParams

    with _platform_api() as api:
        response = api.fetch_tracks(ListTracksParams(video_key=args.video_key))

    code = _report_status(response)
    if code == exit_codes.SUCCESS:
        display_tracks(args.video_key, response.tracks)
    return code


def _handle_stats(args: argparse.Namespace) -> int:
    from jwp_wrap.cli.render import display_stats
    from jwp_wrap.core.requests import VideoStatsParams

    params = VideoStatsParams(
        media_id=args.media_id,
        start_date=args.start_date,
        end_date=args.end_date,
        relative_timeframe=args.timeframe,
    )
    with _platform_api(needs_site_key=True) as api:
        stats = api.fetch_analytics(params)

    display_stats(args.media_id, stats)
    return exit_codes.SUCCESS


def _handle_thumbnail(args: argparse.Namespace) -> int:
    from jwp_wrap.cli.render import display_thumbnail
    from jwp_wrap.core.requests import FetchThumbnailParams

    params = FetchThumbnailParams(video_key=args.video_key, thumb_width=args.width)
    with _platform_api() as api:
        resource = api.fetch_thumbnail(params)

    display_thumbnail(resource)
    return exit_codes.SUCCESS


def _handle_upload(args: argparse.Namespace) -> int:
    """Create the video record, then send the file to the issued link."""
    from jwp_wrap.core.requests import CreateVideoParams

    params = CreateVideoParams(
        title=args.title,
        description=args.description,
        tags=args.tags,
        sourcetype="file",
        upload_method="single",
    )
    with _platform_api() as api:
        created = api.create_video_metadata(params)
        code = _report_status(created)
        if code != exit_codes.SUCCESS:
            return code

        console.print(f"\n[bold]Uploading…[/bold]  {args.file}\n")
        api.upload(created.upload_metadata(), args.file)

    key = created.media.key if created.media is not None else "?"
    console.print(f"[bold green]Upload complete.[/bold green]  video key={key}")
    return exit_codes.SUCCESS


_HANDLERS: dict[str, Callable[[argparse.Namespace], int]] = {
    "doctor": _handle_doctor,
    "list": _handle_list,
    "show": _handle_show,
    "tracks": _handle_tracks,
    "stats": _handle_stats,
    "thumbnail": _handle_thumbnail,
    "upload": _handle_upload,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the jwp-wrap CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)
    return _HANDLERS[args.command](args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.CONFIGURATION_ERROR)
    except JwpWrapError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except OSError as exc:
        console.print(f"[bold red]File error:[/bold red] {exc}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
