"""Infrastructure layer — external system integration.

This layer wraps all interaction with the platform's HTTP hosts, the
local filesystem and the process environment.  Every raw third-party
exception must be caught here and re-raised as a
:class:`~jwp_wrap.exceptions.JwpWrapError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from jwp_wrap.infra.httpx_transport import HttpxTransport
from jwp_wrap.infra.settings import PlatformSettings
from jwp_wrap.infra.temp_storage import TempFileStorage

__all__: list[str] = [
    "HttpxTransport",
    "PlatformSettings",
    "TempFileStorage",
]
