"""Response models parsed from platform JSON bodies.

Every model is a frozen pydantic model.  Unknown keys are ignored so
that additions on the platform side do not break parsing, but required
keys are enforced: a missing ``status`` (or ``id`` for webhooks) is a
shape mismatch.
"""

from __future__ import annotations

from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from jwp_wrap.exceptions import InvalidResponseError


class ResponseModel(BaseModel):
    """Base class for every parsed response object."""

    model_config = ConfigDict(frozen=True, extra="ignore")


# ---------------------------------------------------------------------------
# Shared pieces
# ---------------------------------------------------------------------------

class StatusResponse(ResponseModel):
    """Envelope shared by all v1 replies.

    Error replies keep ``status == "error"`` and fill in ``code``,
    ``title`` and ``message``.
    """

    status: str
    code: str | None = None
    title: str | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class MediaRef(ResponseModel):
    type: str | None = None
    key: str


class UploadQuery(ResponseModel):
    key: str
    token: str


class UploadLink(ResponseModel):
    """Pre-issued upload location returned by create operations."""

    protocol: str = "https"
    address: str
    path: str
    query: UploadQuery

    def to_url(self) -> str:
        query = urlencode(
            {"api_format": "json", "key": self.query.key, "token": self.query.token}
        )
        return f"{self.protocol}://{self.address}{self.path}?{query}"


class UploadMetadata(ResponseModel):
    """Where a file should be sent by :meth:`PlatformApi.upload`."""

    link: str


# ---------------------------------------------------------------------------
# Create / update replies
# ---------------------------------------------------------------------------

class ApiResponse(StatusResponse):
    """Reply of ``/videos/create``, thumbnail update and track create."""

    media: MediaRef | None = None
    link: UploadLink | None = None

    def upload_metadata(self) -> UploadMetadata:
        """Build the :class:`UploadMetadata` for the issued upload link.

        Raises
        ------
        InvalidResponseError
            If the reply carries no ``link`` block.
        """
        if self.link is None:
            raise InvalidResponseError(
                "Response does not contain an upload link.",
                raw_body=self.model_dump_json(),
            )
        return UploadMetadata(link=self.link.to_url())


# ---------------------------------------------------------------------------
# Videos
# ---------------------------------------------------------------------------

class Video(ResponseModel):
    """A video as described by ``/videos/list`` and ``/videos/show``."""

    key: str
    title: str | None = None
    description: str | None = None
    tags: str | None = None
    status: str | None = None
    mediatype: str | None = None
    author: str | None = None
    link: str | None = None
    date: int | None = None
    updated: int | None = None
    duration: float | None = None
    """Seconds; the platform sends it as a decimal string."""
    size: int | None = None
    views: int | None = None
    md5: str | None = None
    sourcetype: str | None = None
    sourceurl: str | None = None
    sourceformat: str | None = None
    custom: dict[str, str] = Field(default_factory=dict)


class VideosList(StatusResponse):
    videos: list[Video] = Field(default_factory=list)
    limit: int | None = None
    offset: int | None = None
    total: int | None = None

    @property
    def video_keys(self) -> list[str]:
        return [video.key for video in self.videos]


class VideoShowResponse(StatusResponse):
    video: Video | None = None


class DeleteVideosResponse(StatusResponse):
    pass


# ---------------------------------------------------------------------------
# Tracks
# ---------------------------------------------------------------------------

class Track(ResponseModel):
    key: str
    kind: str | None = None
    label: str | None = None
    status: str | None = None
    md5: str | None = None
    created: int | None = None


class TracksList(StatusResponse):
    tracks: list[Track] = Field(default_factory=list)
    total: int | None = None


class DeleteVideoTrackResponse(StatusResponse):
    pass


# ---------------------------------------------------------------------------
# Webhooks (v2)
# ---------------------------------------------------------------------------

class WebhookMetadata(ResponseModel):
    """Configuration echo of a created webhook."""

    name: str | None = None
    description: str | None = None
    endpoint: str | None = None
    events: list[str] = Field(default_factory=list)
    site_ids: list[str] = Field(default_factory=list)


class CreatedWebhookApiResponse(ResponseModel):
    id: str
    type: str | None = None
    created: str | None = None
    last_modified: str | None = None
    secret: str | None = None
    """Shared secret for verifying webhook signatures; only sent once."""
    metadata: WebhookMetadata = Field(default_factory=WebhookMetadata)
