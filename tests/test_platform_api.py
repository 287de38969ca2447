"""Tests for PlatformApi (core/platform_api.py).

The :class:`PlatformTransport` and :class:`ScratchStorage` dependencies
are **mocked** — no internet access.  These tests verify:

* Endpoint path and API version per operation
* Normalization (with and without null-stripping)
* JSON → response model parsing
* Shape errors wrapped as ``InvalidResponseError`` with the raw body
* Transport errors propagating unchanged
* Upload, thumbnail and analytics delegation
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel, ValidationError

from jwp_wrap.core.models import ThumbnailResource, VideoStats
from jwp_wrap.core.platform_api import PlatformApi
from jwp_wrap.core.requests import (
    CreateVideoParams,
    CreateVideoTrackParams,
    CreateWebhookParams,
    DeleteVideosParams,
    DeleteVideoTrackParams,
    FetchThumbnailParams,
    ListTracksParams,
    ListVideosParams,
    ShowVideoParams,
    UpdateVideoThumbnailParams,
    VideoStatsParams,
    WebhookConfig,
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
from jwp_wrap.exceptions import InvalidResponseError, TransportError
from jwp_wrap.infra.temp_storage import TempFileStorage


# ---------------------------------------------------------------------------
# Canned replies
# ---------------------------------------------------------------------------

_CREATE_REPLY = (
    '{"status": "ok", "media": {"type": "video", "key": "abc"},'
    ' "link": {"protocol": "https", "address": "upload.jwplatform.com",'
    ' "path": "/v1/videos/upload", "query": {"key": "abc", "token": "t"}}}'
)
_LIST_REPLY = (
    '{"status": "ok", "limit": 50, "offset": 0, "total": 2, "videos": ['
    '{"key": "abc", "title": "First", "status": "ready", "duration": "61.20", "date": 1700000000},'
    '{"key": "def", "title": "Second", "tags": "a,b"}]}'
)
_SHOW_REPLY = '{"status": "ok", "video": {"key": "abc", "title": "First", "views": 7}}'
_TRACKS_REPLY = (
    '{"status": "ok", "total": 1, "tracks": '
    '[{"key": "trk1", "kind": "captions", "label": "English", "status": "ready"}]}'
)
_WEBHOOK_REPLY = (
    '{"id": "wh1", "type": "webhook", "created": "2024-01-01T00:00:00+00:00",'
    ' "secret": "shh", "metadata": {"name": "hook", "endpoint": "https://example.com/h",'
    ' "events": ["media_available"], "site_ids": ["site1"]}}'
)


# ---------------------------------------------------------------------------
# Endpoint routing — one row per simple operation
# ---------------------------------------------------------------------------

_V1_CASES: list[tuple[str, BaseModel, str, type[BaseModel], str]] = [
    ("create_video_metadata", CreateVideoParams(title="T"), "/videos/create", ApiResponse, _CREATE_REPLY),
    (
        "create_thumbnail_update_metadata",
        UpdateVideoThumbnailParams(video_key="abc"),
        "/videos/thumbnails/update",
        ApiResponse,
        _CREATE_REPLY,
    ),
    (
        "create_track_create_metadata",
        CreateVideoTrackParams(video_key="abc"),
        "/videos/tracks/create",
        ApiResponse,
        _CREATE_REPLY,
    ),
    ("fetch_videos", ListVideosParams(), "/videos/list", VideosList, _LIST_REPLY),
    ("fetch_video", ShowVideoParams(video_key="abc"), "/videos/show", VideoShowResponse, _SHOW_REPLY),
    (
        "delete_videos",
        DeleteVideosParams(video_key="abc,def"),
        "/videos/delete",
        DeleteVideosResponse,
        '{"status": "ok"}',
    ),
    ("fetch_tracks", ListTracksParams(video_key="abc"), "/videos/tracks/list", TracksList, _TRACKS_REPLY),
    (
        "delete_track",
        DeleteVideoTrackParams(track_key="trk1"),
        "/videos/tracks/delete",
        DeleteVideoTrackResponse,
        '{"status": "ok"}',
    ),
]


class TestV1Operations:
    @pytest.mark.parametrize(
        ("method", "params", "path", "response_type", "reply"),
        _V1_CASES,
        ids=[case[0] for case in _V1_CASES],
    )
    def test_routes_and_parses(
        self,
        api: PlatformApi,
        transport: MagicMock,
        method: str,
        params: BaseModel,
        path: str,
        response_type: type[BaseModel],
        reply: str,
    ) -> None:
        transport.request_v1.return_value = reply

        result = getattr(api, method)(params)

        assert isinstance(result, response_type)
        assert result == response_type.model_validate_json(reply)
        transport.request_v1.assert_called_once()
        assert transport.request_v1.call_args.args[0] == path
        transport.request_v2.assert_not_called()

    @pytest.mark.parametrize(
        ("method", "params"),
        [(case[0], case[1]) for case in _V1_CASES],
        ids=[case[0] for case in _V1_CASES],
    )
    def test_malformed_json_raises_with_raw_body(
        self,
        api: PlatformApi,
        transport: MagicMock,
        method: str,
        params: BaseModel,
    ) -> None:
        transport.request_v1.return_value = "<html>502 Bad Gateway</html>"

        with pytest.raises(InvalidResponseError) as exc_info:
            getattr(api, method)(params)

        assert exc_info.value.raw_body == "<html>502 Bad Gateway</html>"
        assert "<html>502 Bad Gateway</html>" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValidationError)


class TestResponseParsing:
    def test_whitespace_is_trimmed(self, api: PlatformApi, transport: MagicMock) -> None:
        transport.request_v1.return_value = '\n  {"status": "ok"}  \r\n'
        assert api.delete_videos(DeleteVideosParams(video_key="abc")).status == "ok"

    def test_list_fields_round_trip(self, api: PlatformApi, transport: MagicMock) -> None:
        transport.request_v1.return_value = _LIST_REPLY
        result = api.fetch_videos(ListVideosParams(search="first"))
        assert result.total == 2
        assert result.video_keys == ["abc", "def"]
        assert result.videos[0].title == "First"
        assert result.videos[0].duration == pytest.approx(61.2)
        assert result.videos[1].tags == "a,b"

    def test_create_round_trip(self, api: PlatformApi, transport: MagicMock) -> None:
        transport.request_v1.return_value = _CREATE_REPLY
        result = api.create_video_metadata(CreateVideoParams(title="T"))
        assert result.media is not None
        assert result.media.key == "abc"
        assert result.link is not None
        assert result.link.query.token == "t"

    def test_shape_mismatch_raises(self, api: PlatformApi, transport: MagicMock) -> None:
        transport.request_v1.return_value = '{"videos": []}'
        with pytest.raises(InvalidResponseError, match="Unable to deserialize"):
            api.fetch_videos(ListVideosParams())

    def test_wrong_field_type_raises(self, api: PlatformApi, transport: MagicMock) -> None:
        transport.request_v1.return_value = '{"status": "ok", "tracks": "none"}'
        with pytest.raises(InvalidResponseError):
            api.fetch_tracks(ListTracksParams(video_key="abc"))

    def test_error_status_is_parsed_not_raised(
        self, api: PlatformApi, transport: MagicMock,
    ) -> None:
        transport.request_v1.return_value = (
            '{"status": "error", "code": "NotFound", "title": "Not Found",'
            ' "message": "Video not found"}'
        )
        result = api.fetch_video(ShowVideoParams(video_key="zzz"))
        assert not result.ok
        assert result.video is None
        assert result.message == "Video not found"

    def test_transport_error_propagates_unchanged(
        self, api: PlatformApi, transport: MagicMock,
    ) -> None:
        error = TransportError("down", status_code=503)
        transport.request_v1.side_effect = error
        with pytest.raises(TransportError) as exc_info:
            api.fetch_videos(ListVideosParams())
        assert exc_info.value is error


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def _sent_payload(transport: MagicMock) -> dict[str, Any]:
    return transport.request_v1.call_args.args[1]


class TestNormalization:
    def test_create_video_sends_nulls(self, api: PlatformApi, transport: MagicMock) -> None:
        transport.request_v1.return_value = _CREATE_REPLY
        api.create_video_metadata(CreateVideoParams(title="T"))
        payload = _sent_payload(transport)
        assert payload["title"] == "T"
        assert "description" in payload
        assert payload["description"] is None

    def test_list_videos_sends_nulls(self, api: PlatformApi, transport: MagicMock) -> None:
        transport.request_v1.return_value = _LIST_REPLY
        api.fetch_videos(ListVideosParams(result_limit=5))
        payload = _sent_payload(transport)
        assert payload["result_limit"] == 5
        assert payload["search"] is None

    def test_thumbnail_update_strips_nulls(
        self, api: PlatformApi, transport: MagicMock,
    ) -> None:
        transport.request_v1.return_value = _CREATE_REPLY
        api.create_thumbnail_update_metadata(
            UpdateVideoThumbnailParams(video_key="abc", position=0.0)
        )
        assert _sent_payload(transport) == {"video_key": "abc", "position": 0.0}

    def test_track_create_strips_nulls_keeps_false_and_zero(
        self, api: PlatformApi, transport: MagicMock,
    ) -> None:
        transport.request_v1.return_value = _CREATE_REPLY
        api.create_track_create_metadata(
            CreateVideoTrackParams(video_key="abc", kind="captions", default=False, size=0)
        )
        assert _sent_payload(transport) == {
            "video_key": "abc",
            "kind": "captions",
            "default": False,
            "size": 0,
        }


# ---------------------------------------------------------------------------
# Webhooks (v2)
# ---------------------------------------------------------------------------

def _webhook_params() -> CreateWebhookParams:
    return CreateWebhookParams(
        metadata=WebhookConfig(
            name="hook",
            endpoint="https://example.com/h",
            events=["media_available"],
            site_ids=["site1"],
        )
    )


class TestCreateWebhook:
    def test_uses_v2(self, api: PlatformApi, transport: MagicMock) -> None:
        transport.request_v2.return_value = _WEBHOOK_REPLY
        result = api.create_webhook(_webhook_params())

        assert isinstance(result, CreatedWebhookApiResponse)
        transport.request_v1.assert_not_called()
        path, payload = transport.request_v2.call_args.args
        assert path == "/webhooks"
        assert payload["metadata"]["events"] == ["media_available"]

    def test_echo_fields(self, api: PlatformApi, transport: MagicMock) -> None:
        transport.request_v2.return_value = _WEBHOOK_REPLY
        result = api.create_webhook(_webhook_params())
        assert result.id == "wh1"
        assert result.secret == "shh"
        assert result.metadata.endpoint == "https://example.com/h"
        assert result.metadata.site_ids == ["site1"]

    def test_missing_id_raises(self, api: PlatformApi, transport: MagicMock) -> None:
        transport.request_v2.return_value = '{"type": "webhook"}'
        with pytest.raises(InvalidResponseError) as exc_info:
            api.create_webhook(_webhook_params())
        assert exc_info.value.raw_body == '{"type": "webhook"}'

    def test_malformed_json_raises_with_raw_body(
        self, api: PlatformApi, transport: MagicMock,
    ) -> None:
        transport.request_v2.return_value = "<html>502 Bad Gateway</html>"

        with pytest.raises(InvalidResponseError) as exc_info:
            api.create_webhook(_webhook_params())

        assert exc_info.value.raw_body == "<html>502 Bad Gateway</html>"
        assert "<html>502 Bad Gateway</html>" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValidationError)


# ---------------------------------------------------------------------------
# Upload
# ---------------------------------------------------------------------------

class TestUpload:
    def test_delegates_once_with_exact_link(
        self, api: PlatformApi, transport: MagicMock,
    ) -> None:
        transport.upload_file.return_value = '{"status": "ok"}'
        api.upload(UploadMetadata(link="https://upload.example/x"), "/data/clip.mp4")
        transport.upload_file.assert_called_once_with(
            "/data/clip.mp4", "https://upload.example/x",
        )

    def test_reply_returned_unparsed(self, api: PlatformApi, transport: MagicMock) -> None:
        transport.upload_file.return_value = "not json at all"
        result = api.upload(UploadMetadata(link="https://upload.example/x"), "/data/clip.mp4")
        assert result == "not json at all"
        transport.request_v1.assert_not_called()

    def test_transport_failure_propagates(
        self, api: PlatformApi, transport: MagicMock,
    ) -> None:
        transport.upload_file.side_effect = TransportError("refused")
        with pytest.raises(TransportError, match="refused"):
            api.upload(UploadMetadata(link="https://upload.example/x"), "/data/clip.mp4")


# ---------------------------------------------------------------------------
# Thumbnails
# ---------------------------------------------------------------------------

class TestFetchThumbnail:
    def test_downloads_deterministic_name(
        self, api: PlatformApi, transport: MagicMock, storage: MagicMock,
    ) -> None:
        transport.download.return_value = b"\xff\xd8jpeg"
        result = api.fetch_thumbnail(FetchThumbnailParams(video_key="abc", thumb_width=120))

        transport.download.assert_called_once_with("/thumbs/abc-120.jpg")
        storage.write.assert_called_once_with("abc-120.jpg", b"\xff\xd8jpeg")
        assert result == ThumbnailResource(
            name="abc-120.jpg",
            path=storage.write.return_value,
            content_type=None,
        )

    def test_distinct_temp_file_per_call(
        self, transport: MagicMock, tmp_path: Path,
    ) -> None:
        transport.download.return_value = b"bytes"
        api = PlatformApi(transport, "site1", TempFileStorage(directory=tmp_path))
        params = FetchThumbnailParams(video_key="abc", thumb_width=120)

        first = api.fetch_thumbnail(params)
        second = api.fetch_thumbnail(params)

        assert first.name == second.name == "abc-120.jpg"
        assert first.path != second.path
        assert first.path.read_bytes() == b"bytes"
        assert second.path.read_bytes() == b"bytes"
        assert first.content_type is None

    def test_storage_error_propagates(
        self, api: PlatformApi, transport: MagicMock, storage: MagicMock,
    ) -> None:
        transport.download.return_value = b"x"
        storage.write.side_effect = PermissionError("read-only")
        with pytest.raises(OSError):
            api.fetch_thumbnail(FetchThumbnailParams(video_key="abc"))

    def test_download_error_propagates(
        self, api: PlatformApi, transport: MagicMock, storage: MagicMock,
    ) -> None:
        transport.download.side_effect = TransportError("404", status_code=404)
        with pytest.raises(TransportError):
            api.fetch_thumbnail(FetchThumbnailParams(video_key="abc"))
        storage.write.assert_not_called()


# ---------------------------------------------------------------------------
# Analytics delegation (decoder details live in test_analytics.py)
# ---------------------------------------------------------------------------

class TestFetchAnalytics:
    def test_path_is_scoped_by_site_key(
        self, api: PlatformApi, transport: MagicMock,
    ) -> None:
        transport.request_v2.return_value = (
            '{"metadata": {"column_headers": {"metrics": [{"field": "plays"}]}},'
            ' "data": {"rows": [["media123", 10]]}}'
        )
        result = api.fetch_analytics(VideoStatsParams(media_id="media123"))

        path, payload = transport.request_v2.call_args.args
        assert path == "/sites/site1/analytics/queries/"
        assert payload["filter"][0]["value"] == ["media123"]
        assert "start_date" in payload
        assert result == VideoStats(plays=10)

    def test_shape_error_propagates(self, api: PlatformApi, transport: MagicMock) -> None:
        transport.request_v2.return_value = '{"data": {"rows": []}}'
        with pytest.raises(InvalidResponseError):
            api.fetch_analytics(VideoStatsParams(media_id="media123"))
