from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SizeSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class UploadedFile(BaseModel):
    """Raw bytes of one uploaded file plus the content-type the client declared."""

    content: bytes
    content_type: str
    filename: str | None = None


class ResizedImage(BaseModel):
    content: bytes
    size: SizeSpec
    content_type: str
