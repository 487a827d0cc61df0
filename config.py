import os

from dotenv import load_dotenv

from errors import ConfigurationError
from niche_table import NicheTable, resolve_niche_table

load_dotenv()

YOUTUBE_API_KEY: str = os.getenv("YOUTUBE_API_KEY") or os.getenv("VITE_YOUTUBE_API_KEY", "")
CACHE_TTL_SECONDS: int = int(os.getenv("EARNINGS_CACHE_TTL", "3600"))
NICHE_TABLE: str = os.getenv("EARNINGS_NICHE_TABLE", "detailed")
VIDEO_WINDOW_DAYS: int = int(os.getenv("EARNINGS_VIDEO_WINDOW_DAYS", "30"))


def has_youtube_api() -> bool:
    return bool(get_api_key_or_none())


def get_api_key_or_none() -> str:
    return os.getenv("YOUTUBE_API_KEY") or os.getenv("VITE_YOUTUBE_API_KEY") or YOUTUBE_API_KEY


def get_api_key() -> str:
    """Get YouTube API key from environment."""
    key = get_api_key_or_none()
    if not key:
        raise ConfigurationError("YouTube API key is not configured.")
    return key


def get_niche_table(name_or_path: str = "") -> NicheTable:
    """Built-in table by name, or a JSON table file path."""
    source = name_or_path or NICHE_TABLE
    try:
        return resolve_niche_table(source)
    except (OSError, ValueError, KeyError) as e:
        raise ConfigurationError(f"Could not load niche table '{source}': {e}") from e
