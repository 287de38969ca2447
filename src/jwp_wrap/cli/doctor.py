"""``jwp-wrap doctor`` — environment diagnostics command.

Gathers runtime and configuration information and renders a Rich table
summarising whether jwp-wrap can talk to the platform.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No network call is made; it
purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys
from importlib import metadata

from jwp_wrap.cli import exit_codes
from jwp_wrap.cli.console import console
from jwp_wrap.exceptions import ConfigurationError
from jwp_wrap.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = major >= 3 and minor >= 10
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _package_check(distribution: str) -> tuple[str, str, str]:
    """Return (label, value, status) for an installed distribution."""
    try:
        version = metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return distribution, "NOT INSTALLED", "[red]FAIL[/red]"
    return distribution, version, "[green]OK[/green]"


def _settings_checks() -> list[tuple[str, str, str]]:
    """Return one row per required setting."""
    try:
        from jwp_wrap.infra.settings import PlatformSettings
    except ModuleNotFoundError:
        return [("settings", "pydantic-settings missing", "[red]FAIL[/red]")]

    try:
        settings = PlatformSettings.load()
    except ConfigurationError as exc:
        return [("settings", str(exc), "[red]FAIL[/red]")]

    # Only analytics needs the site key, so its absence is a warning.
    missing = set(settings.missing_credentials())
    rows: list[tuple[str, str, str]] = []
    if "JWP_API_SECRET" in missing:
        rows.append(("JWP_API_SECRET", "not set", "[red]FAIL[/red]"))
    else:
        rows.append(("JWP_API_SECRET", "set", "[green]OK[/green]"))
    if "JWP_SITE_KEY" in missing:
        rows.append(("JWP_SITE_KEY", "not set (stats only)", "[yellow]WARN[/yellow]"))
    else:
        rows.append(("JWP_SITE_KEY", "set", "[green]OK[/green]"))
    rows.append(("API v1", settings.v1_base_url, "[green]OK[/green]"))
    rows.append(("API v2", settings.v2_base_url, "[green]OK[/green]"))
    return rows


def _jwpwrap_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the jwp-wrap version row."""
    return "jwp-wrap", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\njwp-wrap doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<16} {'Value':<36} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<16} {value:<36} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all checks pass,
        :data:`exit_codes.GENERAL_ERROR` if any check fails.
    """
    checks = [
        _jwpwrap_version_check(),
        _python_version_check(),
        _package_check("httpx"),
        _package_check("pydantic"),
        _package_check("pydantic-settings"),
        *_settings_checks(),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print(
            "Some checks failed." if has_failure else "All checks passed.",
            file=sys.stderr,
        )
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="jwp-wrap doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=16)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
