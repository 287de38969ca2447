"""Request parameter models, one per platform operation.

Field names are the wire names of the JW Platform API.  Instances are
immutable pydantic models created by the caller and consumed once by
:class:`~jwp_wrap.core.platform_api.PlatformApi`, which normalizes them
with :meth:`pydantic.BaseModel.model_dump`.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from jwp_wrap.core.models import AnalyticsMetric


class RequestParams(BaseModel):
    """Base class for every outgoing parameter object."""

    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Videos (v1)
# ---------------------------------------------------------------------------

class CreateVideoParams(RequestParams):
    """Parameters for ``/videos/create``."""

    title: str | None = None
    description: str | None = None
    tags: str | None = None
    """Comma-separated tag list."""
    author: str | None = None
    date: int | None = None
    """Publish date as a Unix timestamp."""
    link: str | None = None
    sourcetype: Literal["file", "url"] | None = None
    sourceurl: str | None = None
    sourceformat: str | None = None
    upload_method: Literal["single", "multipart", "s3"] | None = None


class ListVideosParams(RequestParams):
    """Parameters for ``/videos/list``."""

    search: str | None = None
    tags: str | None = None
    tags_mode: Literal["all", "any"] | None = None
    mediatypes_filter: str | None = None
    statuses_filter: str | None = None
    order_by: str | None = None
    result_limit: int | None = None
    result_offset: int | None = None


class ShowVideoParams(RequestParams):
    """Parameters for ``/videos/show``."""

    video_key: str


class DeleteVideosParams(RequestParams):
    """Parameters for ``/videos/delete``.

    *video_key* may hold several keys separated by commas.
    """

    video_key: str


class UpdateVideoThumbnailParams(RequestParams):
    """Parameters for ``/videos/thumbnails/update``.

    Sent null-stripped: only the fields that were set reach the wire.
    """

    video_key: str
    position: float | None = None
    """Offset in seconds of the frame to use as thumbnail."""
    thumbnail_index: int | None = None
    md5: str | None = None
    size: int | None = None


# ---------------------------------------------------------------------------
# Tracks (v1)
# ---------------------------------------------------------------------------

class CreateVideoTrackParams(RequestParams):
    """Parameters for ``/videos/tracks/create``.

    Sent null-stripped: only the fields that were set reach the wire.
    """

    video_key: str
    kind: Literal["captions", "chapters", "thumbnails"] | None = None
    label: str | None = None
    default: bool | None = None
    md5: str | None = None
    size: int | None = None


class ListTracksParams(RequestParams):
    """Parameters for ``/videos/tracks/list``."""

    video_key: str


class DeleteVideoTrackParams(RequestParams):
    """Parameters for ``/videos/tracks/delete``."""

    track_key: str


# ---------------------------------------------------------------------------
# Thumbnails (delivery host)
# ---------------------------------------------------------------------------

class FetchThumbnailParams(RequestParams):
    """Identifies a thumbnail rendition on the delivery host."""

    video_key: str
    thumb_width: int = 320

    @property
    def resource_name(self) -> str:
        """Remote file name, e.g. ``abc-120.jpg``."""
        return f"{self.video_key}-{self.thumb_width}.jpg"


# ---------------------------------------------------------------------------
# Analytics (v2)
# ---------------------------------------------------------------------------

class MetricSpec(RequestParams):
    """One requested analytics column."""

    operation: Literal["sum", "max", "min", "avg"] = "sum"
    field: str


def _default_metrics() -> list[MetricSpec]:
    rate_like = {
        AnalyticsMetric.COMPLETE_RATE,
        AnalyticsMetric.PLAY_RATE,
        AnalyticsMetric.CONTENT_SCORE,
    }
    return [
        MetricSpec(
            operation="max" if metric in rate_like else "sum",
            field=metric.value,
        )
        for metric in AnalyticsMetric
    ]


class VideoStatsParams(RequestParams):
    """Query for per-video analytics.

    :attr:`media_id` is not sent as such; it is turned into the
    ``filter`` clause and later checked against the first cell of the
    returned row.
    """

    media_id: str = Field(exclude=True)
    start_date: str | None = None
    """ISO date (``YYYY-MM-DD``)."""
    end_date: str | None = None
    relative_timeframe: str | None = None
    """E.g. ``"7 Days"``; alternative to an explicit date range."""
    dimensions: list[str] = Field(default_factory=lambda: ["media_id"])
    metrics: list[MetricSpec] = Field(default_factory=_default_metrics)
    include_metadata: int = 1
    """Column headers are only returned when this is ``1``."""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def filter(self) -> list[dict[str, Any]]:
        return [{"field": "media_id", "operator": "=", "value": [self.media_id]}]


# ---------------------------------------------------------------------------
# Webhooks (v2)
# ---------------------------------------------------------------------------

class WebhookConfig(RequestParams):
    """Webhook configuration, echoed back by the platform on creation."""

    name: str
    endpoint: str
    events: list[str]
    site_ids: list[str]
    description: str | None = None


class CreateWebhookParams(RequestParams):
    """Body for ``POST /webhooks``."""

    metadata: WebhookConfig
