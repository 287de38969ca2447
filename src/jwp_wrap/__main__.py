"""Allow ``python -m jwp_wrap`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m jwp_wrap`` behaves identically to the ``jwp-wrap``
console script.
"""

from __future__ import annotations

from jwp_wrap.cli.app import cli

if __name__ == "__main__":
    cli()
