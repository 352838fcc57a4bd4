"""Shared test fixtures.

Images are generated in memory with Pillow; the Twitter client is replaced
with an ``AsyncMock`` so nothing leaves the process.
"""

from __future__ import annotations

import io
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from resizepost.config import Settings
from resizepost.main import create_app
from resizepost.services.publisher import Publisher
from resizepost.services.twitter import TwitterClient


def make_image(fmt: str = "JPEG", size: tuple[int, int] = (640, 480), color=(200, 30, 30)) -> bytes:
    """Encode a solid-colour image of *size* in *fmt*."""
    mode = "P" if fmt == "GIF" else "RGB"
    img = Image.new("RGB", size, color)
    if mode == "P":
        img = img.convert("P")
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        twitter_consumer_key="ck",
        twitter_consumer_secret="cs",
        twitter_access_token_key="at",
        twitter_access_token_secret="ats",
    )


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image("JPEG")


@pytest.fixture
def png_bytes() -> bytes:
    return make_image("PNG", size=(300, 900))


@pytest.fixture
def mock_twitter() -> AsyncMock:
    """AsyncMock standing in for TwitterClient; uploads succeed with m1..mN."""
    client = AsyncMock(spec=TwitterClient)
    client.upload_media.side_effect = [f"m{i}" for i in range(1, 10)]
    client.create_post.return_value = "post-1"
    return client


@pytest.fixture
def publisher(mock_twitter: AsyncMock) -> Publisher:
    return Publisher(mock_twitter, caption="Automatically resized images!")


@pytest.fixture
def client(settings: Settings, publisher: Publisher) -> TestClient:
    return TestClient(create_app(settings, publisher))
