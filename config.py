# config.py
import os
from dataclasses import dataclass, field


def _env(name: str, default: str = "") -> str:
    return os.environ.get(name, default)


@dataclass
class Config:
    """Holds all application configuration."""
    SEARCH_RESULT_LIMIT: int = 50
    API_BASE_URL: str = "https://www.googleapis.com/youtube/v3"
    API_KEY: str = field(default_factory=lambda: _env("YOUTUBE_API_KEY"))
    REQUEST_TIMEOUT: float = 10.0
    WATCH_HOST: str = "www.youtube.com"
    EXPORT_DIR: str = field(default_factory=lambda: _env("FIND_YT_MANUAL_EXPORT_DIR", "."))
    LOG_FILE: str = field(default_factory=lambda: _env("FIND_YT_MANUAL_LOG_FILE", "find_yt_manual.log"))
    LOG_LEVEL: str = field(default_factory=lambda: _env("FIND_YT_MANUAL_LOG_LEVEL", "INFO"))
