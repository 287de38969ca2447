"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from jwp_wrap.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


def configure_logging(verbose: bool) -> None:
	"""Route library log records to stderr.

	Uses ``rich.logging.RichHandler`` when Rich is available, a plain
	stream handler otherwise.
	"""
	level = logging.DEBUG if verbose else logging.WARNING
	try:
		from rich.logging import RichHandler

		rich_console = get_rich_console()
	except (ModuleNotFoundError, EnvironmentError):
		logging.basicConfig(
			level=level,
			format="%(levelname)s %(name)s: %(message)s",
			stream=sys.stderr,
		)
		return
	logging.basicConfig(
		level=level,
		format="%(message)s",
		handlers=[RichHandler(console=rich_console, show_path=False)],
	)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()
