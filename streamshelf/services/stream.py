"""
Stream provider client - upload, delete and status lookup for hosted videos.

Talks to a Cloudflare-Stream-style REST API:
    POST   {endpoint}/{account_id}/stream          multipart upload
    GET    {endpoint}/{account_id}/stream/{uid}    video details
    DELETE {endpoint}/{account_id}/stream/{uid}
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional

import requests

from streamshelf.core.errors import UpstreamFailure
from streamshelf.core.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


@dataclass
class StreamUpload:
    external_id: str
    duration_sec: Optional[float] = None


@dataclass
class StreamStatus:
    state: str
    duration_sec: Optional[float] = None
    error_reason: Optional[str] = None


def stream_url(external_id: str, subdomain: Optional[str] = None) -> str:
    host = subdomain or default_settings.stream_customer_subdomain
    return f"https://{host}/{external_id}/manifest/video.m3u8"


def thumbnail_url(external_id: str, time: int = 0, subdomain: Optional[str] = None) -> str:
    host = subdomain or default_settings.stream_customer_subdomain
    return f"https://{host}/{external_id}/thumbnails/thumbnail.jpg?time={time}s"


def _duration(value) -> Optional[float]:
    # The provider reports -1 until the duration is known
    try:
        duration = float(value)
    except (TypeError, ValueError):
        return None
    return duration if duration >= 0 else None


class StreamClient:
    def __init__(self, config: Settings = default_settings, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        endpoint = self.config.stream_api_endpoint.rstrip("/")
        return f"{endpoint}/{self.config.stream_account_id}/stream"

    def _headers(self) -> dict:
        if not self.config.stream_account_id or not self.config.stream_api_token:
            raise UpstreamFailure("Stream provider is not configured")
        return {"Authorization": f"Bearer {self.config.stream_api_token}"}

    def _result(self, resp: requests.Response, action: str) -> dict:
        try:
            payload = resp.json()
        except ValueError:
            payload = {}

        if not resp.ok or not payload.get("success", False):
            errors = payload.get("errors") or []
            reason = errors[0].get("message") if errors and isinstance(errors[0], dict) else None
            logger.error(f"[stream] {action} failed: status={resp.status_code} reason={reason}")
            raise UpstreamFailure(reason or f"Stream provider {action} failed ({resp.status_code})")

        return payload.get("result") or {}

    def upload(self, fileobj: BinaryIO, filename: str, title: Optional[str] = None) -> StreamUpload:
        """Upload a video file. Returns the provider uid and duration if known."""
        headers = self._headers()
        data = {}
        if title:
            data["meta"] = json.dumps({"name": title})

        try:
            resp = self.session.post(
                self.base_url,
                headers=headers,
                files={"file": (filename, fileobj)},
                data=data,
                timeout=self.config.stream_timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error(f"[stream] upload request error: {e}")
            raise UpstreamFailure(f"Stream upload failed: {e}") from e

        result = self._result(resp, "upload")
        uid = result.get("uid")
        if not uid:
            raise UpstreamFailure("Stream provider returned no video id")

        logger.info(f"[stream] Uploaded {filename} -> {uid}")
        return StreamUpload(external_id=uid, duration_sec=_duration(result.get("duration")))

    def get_status(self, external_id: str) -> StreamStatus:
        headers = self._headers()
        try:
            resp = self.session.get(
                f"{self.base_url}/{external_id}",
                headers=headers,
                timeout=self.config.stream_timeout_seconds,
            )
        except requests.RequestException as e:
            raise UpstreamFailure(f"Stream status lookup failed: {e}") from e

        result = self._result(resp, "status")
        status = result.get("status") or {}
        return StreamStatus(
            state=str(status.get("state", "")).lower(),
            duration_sec=_duration(result.get("duration")),
            error_reason=status.get("errorReasonText") or status.get("errorReasonCode"),
        )

    def delete(self, external_id: str) -> None:
        headers = self._headers()
        try:
            resp = self.session.delete(
                f"{self.base_url}/{external_id}",
                headers=headers,
                timeout=self.config.stream_timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error(f"[stream] delete request error: {e}")
            raise UpstreamFailure(f"Stream delete failed: {e}") from e

        # DELETE answers with an empty body on success
        if not resp.ok:
            logger.error(f"[stream] delete {external_id} failed: status={resp.status_code}")
            raise UpstreamFailure(f"Stream provider delete failed ({resp.status_code})")

        logger.info(f"[stream] Deleted {external_id}")
