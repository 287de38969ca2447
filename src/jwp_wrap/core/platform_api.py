"""Core platform facade — one method per supported API operation.

This is the central service class consumed by the CLI layer and by
library users.  It depends on a
:class:`~jwp_wrap.core.protocols.PlatformTransport` and a
:class:`~jwp_wrap.core.protocols.ScratchStorage` injected at
construction time (dependency inversion), keeping the core free of any
httpx or filesystem imports.

Every request/response operation goes through :meth:`PlatformApi._call`:
normalize the parameters, hand them to the transport, trim and parse
the raw body.  Parse failures surface as
:class:`~jwp_wrap.exceptions.InvalidResponseError`; transport errors
propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from jwp_wrap.core.analytics import decode_video_stats
from jwp_wrap.core.models import ApiVersion, ThumbnailResource, VideoStats
from jwp_wrap.core.protocols import PlatformTransport, ScratchStorage
from jwp_wrap.core.requests import (
    CreateVideoParams,
    CreateVideoTrackParams,
    CreateWebhookParams,
    DeleteVideosParams,
    DeleteVideoTrackParams,
    FetchThumbnailParams,
    ListTracksParams,
    ListVideosParams,
    RequestParams,
    ShowVideoParams,
    UpdateVideoThumbnailParams,
    VideoStatsParams,
)
from jwp_wrap.core.responses import (
    ApiResponse,
    CreatedWebhookApiResponse,
    DeleteVideosResponse,
    DeleteVideoTrackResponse,
    TracksList,
    UploadMetadata,
    VideoShowResponse,
    VideosList,
)
from jwp_wrap.exceptions import InvalidResponseError

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class PlatformApi:
    """Stateless facade over the JW Platform HTTP API.

    Parameters
    ----------
    transport:
        Any object satisfying the :class:`PlatformTransport` protocol.
    site_key:
        Property (site) identifier; scopes analytics queries.
    storage:
        Any object satisfying the :class:`ScratchStorage` protocol.
        Receives downloaded thumbnails.
    """

    def __init__(
        self,
        transport: PlatformTransport,
        site_key: str,
        storage: ScratchStorage,
    ) -> None:
        self._transport: PlatformTransport = transport
        self._site_key: str = site_key
        self._storage: ScratchStorage = storage

    # ------------------------------------------------------------------
    # Videos
    # ------------------------------------------------------------------

    def create_video_metadata(self, params: CreateVideoParams) -> ApiResponse:
        """Register a new video and obtain its upload link."""
        return self._call("/videos/create", params, ApiResponse)

    def create_thumbnail_update_metadata(
        self,
        params: UpdateVideoThumbnailParams,
    ) -> ApiResponse:
        """Request a thumbnail change; unset fields are not sent."""
        return self._call(
            "/videos/thumbnails/update",
            params,
            ApiResponse,
            skip_none=True,
        )

    def fetch_videos(self, params: ListVideosParams) -> VideosList:
        return self._call("/videos/list", params, VideosList)

    def fetch_video(self, params: ShowVideoParams) -> VideoShowResponse:
        return self._call("/videos/show", params, VideoShowResponse)

    def delete_videos(self, params: DeleteVideosParams) -> DeleteVideosResponse:
        return self._call("/videos/delete", params, DeleteVideosResponse)

    # ------------------------------------------------------------------
    # Tracks
    # ------------------------------------------------------------------

    def create_track_create_metadata(
        self,
        params: CreateVideoTrackParams,
    ) -> ApiResponse:
        """Register a captions/chapters track; unset fields are not sent."""
        return self._call(
            "/videos/tracks/create",
            params,
            ApiResponse,
            skip_none=True,
        )

    def fetch_tracks(self, params: ListTracksParams) -> TracksList:
        return self._call("/videos/tracks/list", params, TracksList)

    def delete_track(self, params: DeleteVideoTrackParams) -> DeleteVideoTrackResponse:
        return self._call("/videos/tracks/delete", params, DeleteVideoTrackResponse)

    # ------------------------------------------------------------------
    # Webhooks
    # ------------------------------------------------------------------

    def create_webhook(self, params: CreateWebhookParams) -> CreatedWebhookApiResponse:
        return self._call(
            "/webhooks",
            params,
            CreatedWebhookApiResponse,
            version=ApiVersion.V2,
        )

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    def upload(self, params: UploadMetadata, file_path: str) -> str:
        """Send *file_path* to the link carried by *params*.

        The upload host's reply is returned as-is and never parsed.
        """
        raw_result = self._transport.upload_file(file_path, params.link)
        logger.debug("Upload of %s finished (%d bytes of reply)", file_path, len(raw_result))
        return raw_result

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    def fetch_analytics(self, params: VideoStatsParams) -> VideoStats:
        """Fetch per-video totals for ``params.media_id``.

        Raises
        ------
        InvalidResponseError
            If the reply is not a tabular analytics payload, or its first
            row does not belong to ``params.media_id``.
        """
        path = f"/sites/{self._site_key}/analytics/queries/"
        logger.debug("Querying analytics for media %s", params.media_id)
        raw_response = self._transport.request_v2(path, self._normalize(params))
        return decode_video_stats(raw_response, params.media_id)

    # ------------------------------------------------------------------
    # Thumbnails
    # ------------------------------------------------------------------

    def fetch_thumbnail(self, params: FetchThumbnailParams) -> ThumbnailResource:
        """Download a thumbnail rendition into a new local file.

        Raises
        ------
        OSError
            If the local file cannot be created or written.
        """
        name = params.resource_name
        content = self._transport.download(f"/thumbs/{name}")
        path = self._storage.write(name, content)
        return ThumbnailResource(name=name, path=path, content_type=None)

    # ------------------------------------------------------------------
    # Shared request/response pipeline
    # ------------------------------------------------------------------

    @staticmethod
    def _normalize(params: RequestParams, *, skip_none: bool = False) -> dict[str, Any]:
        """Turn a parameter object into a JSON-compatible mapping."""
        return params.model_dump(mode="json", exclude_none=skip_none)

    def _call(
        self,
        path: str,
        params: RequestParams,
        response_type: type[ResponseT],
        *,
        version: ApiVersion = ApiVersion.V1,
        skip_none: bool = False,
    ) -> ResponseT:
        """Normalize *params*, call *path* and parse the reply.

        Raises
        ------
        InvalidResponseError
            If the body is not valid JSON or does not match
            *response_type*.
        """
        payload = self._normalize(params, skip_none=skip_none)
        logger.debug("Calling %s %s", version.value, path)

        if version is ApiVersion.V2:
            raw_response = self._transport.request_v2(path, payload)
        else:
            raw_response = self._transport.request_v1(path, payload)

        try:
            return response_type.model_validate_json(raw_response.strip())
        except ValidationError as exc:
            raise InvalidResponseError(
                f'Unable to deserialize: "{raw_response}"',
                raw_body=raw_response,
            ) from exc
