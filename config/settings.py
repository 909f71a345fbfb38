"""Configuration management using pydantic-settings."""
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # r6data configuration (stats provider)
    r6data_api_key: Optional[str] = None
    r6data_base_url: str = "https://api.r6data.eu/api"

    # Only this platform is looked up live, everything else gets mock data
    supported_platform: str = "uplay"
    platform_families: str = "pc"

    # Upstream calls abort after this many seconds
    upstream_timeout_seconds: float = 6.5

    # Cache settings
    default_cache_ttl_seconds: int = 300
    player_fresh_ttl_seconds: int = 600       # 10 minutes
    player_stale_ttl_seconds: int = 86400     # 24 hours, fallback only

    # YouTube feed (Ubisoft channel RSS, no API key needed)
    youtube_feed_url: str = "https://www.youtube.com/feeds/videos.xml?user=ubisoft"
    youtube_feed_label: str = "user=ubisoft"
    youtube_cache_ttl_seconds: int = 600

    # HTTP server
    cors_allow_origins: List[str] = ["*"]
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
