"""X/Twitter v1.1 API wrapper.

Provides async helper methods for uploading media and creating a status
update that references previously uploaded media. Requests are signed with
OAuth 1.0a user-context credentials.
"""
from __future__ import annotations

import base64
import logging
from typing import Any, Optional, Sequence

import httpx
from authlib.integrations.httpx_client import OAuth1Auth

logger = logging.getLogger(__name__)


class TwitterAPIError(Exception):
    """Raised when the Twitter API returns an error status or cannot be reached."""

    def __init__(self, status: int, message: str, response_json: Optional[dict[str, Any]] = None):
        super().__init__(f"Twitter API error {status}: {message}")
        self.status = status
        self.response_json = response_json or {}


class MediaUploadError(TwitterAPIError):
    """The media endpoint rejected an upload."""


class PostCreationError(TwitterAPIError):
    """The status update endpoint rejected a post."""


class TwitterClient:
    """Minimal async client for the Twitter media upload and status endpoints."""

    def __init__(
        self,
        *,
        consumer_key: str,
        consumer_secret: str,
        access_token: str,
        access_token_secret: str,
        api_base_url: str = "https://api.twitter.com/1.1",
        upload_base_url: str = "https://upload.twitter.com/1.1",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_base_url = api_base_url.rstrip("/")
        self._upload_base_url = upload_base_url.rstrip("/")
        auth = OAuth1Auth(
            client_id=consumer_key,
            client_secret=consumer_secret,
            token=access_token,
            token_secret=access_token_secret,
        )
        self._client = httpx.AsyncClient(auth=auth, timeout=timeout, transport=transport)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def upload_media(self, data: bytes) -> str:
        """Upload image bytes and return the ``media_id_string``."""

        url = f"{self._upload_base_url}/media/upload.json"
        payload = {"media_data": base64.b64encode(data).decode("ascii")}
        logger.debug("POST %s (%d bytes)", url, len(data))
        body = await self._post_form(url, payload, MediaUploadError)
        media_id = body.get("media_id_string")
        if not media_id:
            raise MediaUploadError(200, "Missing media_id_string in response", body)
        return media_id

    async def create_post(self, text: str, media_ids: Sequence[str]) -> str:
        """Create a status update with the given media attached; return its ``id_str``."""

        url = f"{self._api_base_url}/statuses/update.json"
        payload = {"status": text, "media_ids": ",".join(media_ids)}
        logger.debug("POST %s -> %s", url, payload)
        body = await self._post_form(url, payload, PostCreationError)
        post_id = body.get("id_str")
        if not post_id:
            raise PostCreationError(200, "Missing id_str in response", body)
        return post_id

    async def close(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _post_form(
        self,
        url: str,
        payload: dict[str, str],
        error_cls: type[TwitterAPIError],
    ) -> dict[str, Any]:
        try:
            resp = await self._client.post(url, data=payload)
        except httpx.HTTPError as exc:
            raise error_cls(0, str(exc)) from exc
        if resp.status_code >= 400:
            try:
                err_json = resp.json()
            except ValueError:
                err_json = None
            raise error_cls(resp.status_code, resp.text, err_json)
        try:
            body = resp.json()
        except ValueError as exc:
            raise error_cls(resp.status_code, "Response body is not JSON") from exc
        if not isinstance(body, dict):
            raise error_cls(resp.status_code, f"Expected a JSON object, got {type(body).__name__}")
        return body
