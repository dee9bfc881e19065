"""Configuration settings for the admin service"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Service Info
    service_name: str = "campreserv-admin"
    environment: str = "development"
    debug: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8010

    # Campground REST backend
    api_base_url: str = "http://localhost:4000/api"
    api_token: Optional[str] = None
    request_timeout: float = 10.0

    # Query cache (seconds, 0 = keep until invalidated)
    cache_ttl_seconds: float = 30.0

    # Used to build shareable referral links
    public_base_url: str = "https://campeveryday.com"

    cors_origins: list[str] = ["http://localhost:3000"]


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
