"""httpx backed implementation of :class:`~jwp_wrap.core.protocols.PlatformTransport`.

This module is the **only** place in the codebase that imports ``httpx``.
All httpx exceptions are caught here and re-raised as
:class:`~jwp_wrap.exceptions.TransportError` — nothing raw escapes the
infrastructure boundary.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType
from typing import Any

import httpx

from jwp_wrap.exceptions import TransportError
from jwp_wrap.infra.settings import PlatformSettings

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Concrete :class:`PlatformTransport` backed by ``httpx.Client``.

    Usage::

        with HttpxTransport.from_settings(PlatformSettings()) as transport:
            api = PlatformApi(transport, settings.site_key, TempFileStorage())

    This class satisfies the :class:`~jwp_wrap.core.protocols.PlatformTransport`
    protocol structurally — no explicit inheritance required.
    """

    def __init__(
        self,
        *,
        v1_client: httpx.Client,
        v2_client: httpx.Client,
        cdn_client: httpx.Client,
        upload_client: httpx.Client,
    ) -> None:
        self._v1 = v1_client
        self._v2 = v2_client
        self._cdn = cdn_client
        self._upload = upload_client

    @classmethod
    def from_settings(
        cls,
        settings: PlatformSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> HttpxTransport:
        """Build the four clients from *settings*.

        *transport* is forwarded to every client; tests pass an
        ``httpx.MockTransport`` here.
        """
        headers = {"Authorization": f"Bearer {settings.api_secret}"}
        common: dict[str, Any] = {"timeout": settings.timeout, "transport": transport}
        return cls(
            v1_client=httpx.Client(base_url=settings.v1_base_url, headers=headers, **common),
            v2_client=httpx.Client(base_url=settings.v2_base_url, headers=headers, **common),
            cdn_client=httpx.Client(base_url=settings.cdn_base_url, **common),
            upload_client=httpx.Client(**common),
        )

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def request_v1(self, path: str, payload: dict[str, Any]) -> str:
        """``GET`` a v1 endpoint with *payload* encoded as query parameters."""
        params = self._build_query(payload)
        response = self._send(self._v1, "GET", path, params=params)
        return response.text

    def request_v2(self, path: str, payload: dict[str, Any]) -> str:
        """``POST`` *payload* as JSON to a v2 endpoint."""
        response = self._send(self._v2, "POST", path, json=payload)
        return response.text

    def upload_file(self, file_path: str, upload_link: str) -> str:
        """``POST`` the file as multipart form data to *upload_link*.

        Raises
        ------
        OSError
            If *file_path* cannot be opened.
        TransportError
            For any HTTP failure.
        """
        with open(file_path, "rb") as handle:
            files = {"file": (Path(file_path).name, handle)}
            response = self._send(self._upload, "POST", upload_link, files=files)
        return response.text

    def download(self, path: str) -> bytes:
        """``GET`` binary content from the delivery host."""
        response = self._send(self._cdn, "GET", path)
        return response.content

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        for client in (self._v1, self._v2, self._cdn, self._upload):
            client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _build_query(payload: dict[str, Any]) -> dict[str, str]:
        """Flatten a normalized payload into v1 query parameters.

        ``None`` values are dropped (a query string cannot carry null),
        lists are comma-joined and booleans are spelled ``true``/``false``.
        """
        query: dict[str, str] = {"api_format": "json"}
        for key, value in payload.items():
            if value is None:
                continue
            if isinstance(value, bool):
                query[key] = "true" if value else "false"
            elif isinstance(value, (list, tuple)):
                query[key] = ",".join(str(item) for item in value)
            else:
                query[key] = str(value)
        return query

    @staticmethod
    def _send(
        client: httpx.Client,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Issue one request and map every httpx failure."""
        logger.debug("%s %s", method, url)
        try:
            response = client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("%s %s failed with HTTP %d", method, url, status)
            raise TransportError(
                f"Platform returned HTTP {status} for {url}: {exc.response.text}",
                status_code=status,
                hint="Check the request parameters and your API credentials."
                if status in (401, 403)
                else None,
            ) from exc
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(
                f"Network error while calling {url}: {exc}",
                hint="Check your network connection.",
            ) from exc
        return response
