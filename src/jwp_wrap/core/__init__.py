"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from jwp_wrap.core.analytics import decode_video_stats
from jwp_wrap.core.models import AnalyticsMetric, ApiVersion, ThumbnailResource, VideoStats
from jwp_wrap.core.platform_api import PlatformApi
from jwp_wrap.core.protocols import PlatformTransport, ScratchStorage

__all__: list[str] = [
    "AnalyticsMetric",
    "ApiVersion",
    "PlatformApi",
    "PlatformTransport",
    "ScratchStorage",
    "ThumbnailResource",
    "VideoStats",
    "decode_video_stats",
]
