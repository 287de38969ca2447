"""Exit-code constants used by the CLI layer.

Every exit path of ``jwp-wrap`` returns one of these values.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Command completed; the platform answered with ``status == "ok"``."""

GENERAL_ERROR: int = 1
"""A known JwpWrapError was caught, or the platform reported an error status."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

CONFIGURATION_ERROR: int = 3
"""Credentials or the site key are missing from the environment."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C (128 + SIGINT)."""
