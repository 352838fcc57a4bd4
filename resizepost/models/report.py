from __future__ import annotations

from pydantic import BaseModel

from .image import SizeSpec


class MediaResult(BaseModel):
    """Outcome of uploading a single resized image."""

    size: SizeSpec
    media_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.media_id is not None


class PublishReport(BaseModel):
    results: list[MediaResult] = []
    post_id: str | None = None
    post_error: str | None = None

    @property
    def media_ids(self) -> list[str]:
        """Successful media ids in submission order."""
        return [r.media_id for r in self.results if r.media_id is not None]

    @property
    def uploaded(self) -> int:
        return len(self.media_ids)

    @property
    def posted(self) -> bool:
        return self.post_id is not None
