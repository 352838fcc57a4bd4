"""Publish resized variants as one post.

Phase 1 uploads every image to the media endpoint, tolerating individual
failures. Phase 2 creates a single post referencing whatever uploaded
successfully, or nothing at all if every upload failed. The outcome of both
phases is returned as a :class:`PublishReport`.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from resizepost.models import MediaResult, PublishReport, ResizedImage
from resizepost.services.twitter import MediaUploadError, PostCreationError, TwitterClient

logger = logging.getLogger(__name__)

DEFAULT_CAPTION = "Automatically resized images!"


class PublishError(Exception):
    """Raised when publishing fails outside the per-image and per-post handling."""


class Publisher:
    def __init__(
        self,
        client: TwitterClient,
        *,
        caption: str = DEFAULT_CAPTION,
        concurrent: bool = False,
    ) -> None:
        self._client = client
        self._caption = caption
        self._concurrent = concurrent

    async def publish(self, images: Sequence[ResizedImage]) -> PublishReport:
        try:
            results = await self._upload_all(images)
            report = PublishReport(results=results)
            await self._create_post(report)
        except Exception as exc:
            raise PublishError(f"Publishing failed: {exc}") from exc
        return report

    async def close(self) -> None:
        await self._client.close()

    # ------------------------------------------------------------------
    # Phase 1
    # ------------------------------------------------------------------

    async def _upload_all(self, images: Sequence[ResizedImage]) -> list[MediaResult]:
        if self._concurrent:
            # gather keeps results in submission order
            return list(await asyncio.gather(*(self._upload_one(img) for img in images)))
        return [await self._upload_one(img) for img in images]

    async def _upload_one(self, image: ResizedImage) -> MediaResult:
        try:
            media_id = await self._client.upload_media(image.content)
        except MediaUploadError as exc:
            logger.error("Media upload error for %s: %s", image.size, exc)
            return MediaResult(size=image.size, error=str(exc))
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unexpected media upload failure for %s", image.size)
            return MediaResult(size=image.size, error=repr(exc))
        logger.debug("Uploaded %s as media %s", image.size, media_id)
        return MediaResult(size=image.size, media_id=media_id)

    # ------------------------------------------------------------------
    # Phase 2
    # ------------------------------------------------------------------

    async def _create_post(self, report: PublishReport) -> None:
        media_ids = report.media_ids
        if not media_ids:
            logger.warning("No media uploaded successfully; skipping post creation")
            return
        try:
            report.post_id = await self._client.create_post(self._caption, media_ids)
        except PostCreationError as exc:
            logger.error("Error posting images: %s", exc)
            report.post_error = str(exc)
            return
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unexpected failure posting images")
            report.post_error = repr(exc)
            return
        logger.info("Images posted successfully! post=%s media=%s", report.post_id, ",".join(media_ids))
