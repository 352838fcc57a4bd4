from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from resizepost.config import Settings, get_settings
from resizepost.handlers import upload_handler
from resizepost.services.publisher import Publisher
from resizepost.services.twitter import TwitterClient

logger = logging.getLogger(__name__)


def build_publisher(settings: Settings) -> Publisher:
    client = TwitterClient(
        consumer_key=settings.twitter_consumer_key,
        consumer_secret=settings.twitter_consumer_secret,
        access_token=settings.twitter_access_token_key,
        access_token_secret=settings.twitter_access_token_secret,
        api_base_url=settings.twitter_api_base_url,
        upload_base_url=settings.twitter_upload_base_url,
        timeout=settings.http_timeout,
    )
    return Publisher(client, caption=settings.post_caption, concurrent=settings.concurrent_uploads)


def create_app(settings: Settings | None = None, publisher: Publisher | None = None) -> FastAPI:
    """Build the app around an explicit settings object and publisher.

    Either may be supplied by the caller (tests pass doubles); otherwise the
    settings come from the environment and the publisher is built from them.
    """

    settings = settings or get_settings()
    owns_publisher = publisher is None
    if publisher is None:
        publisher = build_publisher(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        if owns_publisher:
            await publisher.close()

    app = FastAPI(title="Resize & Post", lifespan=lifespan)
    app.state.settings = settings
    app.state.publisher = publisher
    app.include_router(upload_handler.router)

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    return app


def run() -> None:  # pragma: no cover
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server is running on http://localhost:%d", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":  # pragma: no cover
    run()
