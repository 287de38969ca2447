"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol


class PlatformTransport(Protocol):
    """Contract for the low-level HTTP client talking to the platform.

    Connection handling, credentials and status-code checks all live
    behind this protocol.  Implementations must map backend-specific
    exceptions to :class:`~jwp_wrap.exceptions.JwpWrapError` subclasses
    (typically :class:`~jwp_wrap.exceptions.TransportError`).
    """

    def request_v1(self, path: str, payload: dict[str, Any]) -> str:
        """Call a management (v1) endpoint and return the raw body text.

        Parameters
        ----------
        path:
            Endpoint path relative to the v1 base URL
            (e.g. ``"/videos/list"``).
        payload:
            Normalized request parameters.  ``None`` values may be
            present and are the implementation's to encode.
        """
        ...  # pragma: no cover

    def request_v2(self, path: str, payload: dict[str, Any]) -> str:
        """Call a v2 endpoint and return the raw body text."""
        ...  # pragma: no cover

    def upload_file(self, file_path: str, upload_link: str) -> str:
        """Send the file at *file_path* to a pre-issued *upload_link*.

        Returns
        -------
        str
            The raw body returned by the upload host.
        """
        ...  # pragma: no cover

    def download(self, path: str) -> bytes:
        """Fetch binary content (e.g. a thumbnail) from the delivery host."""
        ...  # pragma: no cover


class ScratchStorage(Protocol):
    """Contract for persisting downloaded content to local files."""

    def write(self, name: str, content: bytes) -> Path:
        """Write *content* to a newly created file and return its path.

        Every call must produce a distinct file.  *name* is a hint used
        to make the file recognisable; it does not have to be the final
        file name.

        Raises
        ------
        OSError
            When the file cannot be created or written.
        """
        ...  # pragma: no cover
