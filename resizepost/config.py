from __future__ import annotations

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from resizepost.models import SizeSpec

# Load environment variables from a .env file if present (local dev only)
load_dotenv()

# Banner sizes every upload is resized to, in publishing order.
PREDEFINED_SIZES: tuple[SizeSpec, ...] = (
    SizeSpec(width=300, height=250),
    SizeSpec(width=728, height=90),
    SizeSpec(width=160, height=600),
    SizeSpec(width=300, height=600),
)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # X / Twitter API credentials (OAuth 1.0a user context)
    twitter_consumer_key: str = Field(..., description="TWITTER_CONSUMER_KEY")
    twitter_consumer_secret: str = Field(..., description="TWITTER_CONSUMER_SECRET")
    twitter_access_token_key: str = Field(..., description="TWITTER_ACCESS_TOKEN_KEY")
    twitter_access_token_secret: str = Field(..., description="TWITTER_ACCESS_TOKEN_SECRET")

    twitter_api_base_url: str = Field("https://api.twitter.com/1.1")
    twitter_upload_base_url: str = Field("https://upload.twitter.com/1.1")
    http_timeout: float = Field(30.0, gt=0, description="Per-request timeout for Twitter calls (seconds).")

    # Publishing
    post_caption: str = Field("Automatically resized images!")
    concurrent_uploads: bool = Field(
        False, description="Upload the resized variants concurrently instead of one after another."
    )

    # Server
    host: str = Field("0.0.0.0")
    port: int = Field(3000, ge=1, le=65535)
    log_level: str = Field("INFO")


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
