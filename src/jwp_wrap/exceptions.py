"""Custom exception hierarchy for jwp-wrap.

All exceptions that cross layer boundaries must inherit from
:class:`JwpWrapError`.  Raw third-party exceptions (e.g. from httpx)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
JwpWrapError
├── InvalidResponseError
├── TransportError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations


class JwpWrapError(Exception):
    """Base exception for all jwp-wrap errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Response shape --------------------------------------------------------

class InvalidResponseError(JwpWrapError):
    """Raised when a platform response does not have the expected shape.

    The offending body is kept verbatim on :attr:`raw_body`; the
    underlying parse failure, when there is one, is chained as
    ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        raw_body: str,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.raw_body: str = raw_body


# --- Transport -------------------------------------------------------------

class TransportError(JwpWrapError):
    """Raised when the HTTP exchange with the platform fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code: int | None = status_code


# --- Configuration ---------------------------------------------------------

class ConfigurationError(JwpWrapError):
    """Raised when required settings (credentials, site key) are missing."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(JwpWrapError):
    """Raised when a required runtime dependency is not available."""


def append_credentials_suggestion(hint: str) -> str:
    """Append credential setup guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Check your credentials:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    export JWP_API_SECRET=... JWP_SITE_KEY=...",
        )
    )
