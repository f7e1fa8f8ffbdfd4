"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    cron_secret: str
    aws_region: str = "ap-south-1"
    s3_bucket_name: str = "facefind-photos"
    events_table: str = "events"
    sessions_table: str = "sessions"
    photos_table: str = "photos"
    users_table: str = "users"
    session_batch_size: int = 25
    photo_batch_size: int = 25
    blob_batch_size: int = 1000
    resend_api_key: str | None = None
    email_from: str = "noreply@facefind.com"
    app_url: str = "https://facefind.com"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
