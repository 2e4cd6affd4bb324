"""Application configuration loaded from environment variables.

Provides type-safe access to configuration with sensible defaults.
Game defaults match the reference game: 18 pairs, 500ms reveal, 20 points.
"""

import os

from memory_match.domain.constants import (
    DEFAULT_PAIR_COUNT,
    EVALUATION_DELAY_MS,
    MATCH_REWARD,
    SCOREBOARD_CAPACITY,
)


def _get_int(name: str, default: int, minimum: int = 0) -> int:
    """Read an integer environment variable.

    Raises:
        ValueError: If the value is not an integer or below minimum
    """
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from None
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def get_pair_count() -> int:
    """Get number of pairs dealt per session.

    Environment variable: MEMORY_PAIR_COUNT
    Default: 18 (36 cards)
    """
    return _get_int("MEMORY_PAIR_COUNT", DEFAULT_PAIR_COUNT, minimum=1)


def get_evaluation_delay_ms() -> int:
    """Get how long a revealed pair stays face up before resolving.

    Environment variable: MEMORY_EVALUATION_DELAY_MS
    Default: 500
    """
    return _get_int("MEMORY_EVALUATION_DELAY_MS", EVALUATION_DELAY_MS)


def get_match_reward() -> int:
    """Get points awarded per matched pair.

    Environment variable: MEMORY_MATCH_REWARD
    Default: 20
    """
    return _get_int("MEMORY_MATCH_REWARD", MATCH_REWARD)


def get_scoreboard_capacity() -> int:
    """Get number of top scores kept.

    Environment variable: MEMORY_SCOREBOARD_CAPACITY
    Default: 5
    """
    return _get_int("MEMORY_SCOREBOARD_CAPACITY", SCOREBOARD_CAPACITY, minimum=1)


def get_image_catalog_path() -> str | None:
    """Get optional path to an image manifest overriding the bundled one.

    Environment variable: IMAGE_CATALOG_PATH
    """
    return os.getenv("IMAGE_CATALOG_PATH") or None


def get_cors_origins() -> list[str]:
    """Get allowed CORS origins from environment.

    Environment variable: CORS_ORIGINS (comma-separated)
    Default: localhost:3000 and 5173 for development
    """
    default_origins = "http://localhost:3000,http://localhost:5173"
    origins_str = os.getenv("CORS_ORIGINS", default_origins)
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


def get_cors_allow_credentials() -> bool:
    """Get CORS allow_credentials setting.

    Environment variable: CORS_ALLOW_CREDENTIALS
    Default: false (the API uses no cookies)
    """
    return os.getenv("CORS_ALLOW_CREDENTIALS", "false").lower() == "true"


# Restricted HTTP methods - only what the API actually uses
CORS_ALLOWED_METHODS = ["GET", "POST", "DELETE", "OPTIONS"]

CORS_ALLOWED_HEADERS = [
    "Accept",
    "Content-Type",
]


def is_production() -> bool:
    """Check if running in production environment."""
    return os.getenv("ENVIRONMENT", "development").lower() == "production"
