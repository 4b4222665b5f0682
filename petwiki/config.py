"""Central application configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Config:
    """Central application configuration.

    Reads from environment variables with sensible defaults.
    All paths are resolved relative to project root.
    """

    # Paths
    media_dir: Path = field(default_factory=lambda: Path(os.getenv("MEDIA_DIR", "media")))

    # Curated pet API (WordPress pet-management plugin)
    api_base_url: str = field(
        default_factory=lambda: os.getenv(
            "PET_API_BASE_URL", "http://localhost:8080/wp-json/pet-management/v1"
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "15"))
    )

    # Which provider backs the breed dictionary: "rest" or "generative"
    breed_source: str = field(default_factory=lambda: os.getenv("BREED_SOURCE", "rest"))

    # Gemini
    gemini_api_key: str = field(default_factory=lambda: os.getenv("GEMINI_API_KEY", ""))
    text_model: str = "gemini-3-flash-preview"
    image_model: str = "gemini-2.5-flash-image"
    video_model: str = "veo-3.1-fast-generate-preview"

    # Video generation polling
    video_poll_interval: float = field(
        default_factory=lambda: float(os.getenv("VIDEO_POLL_INTERVAL", "5"))
    )
    video_max_wait: float = field(
        default_factory=lambda: float(os.getenv("VIDEO_MAX_WAIT", "600"))
    )

    # Listing
    default_per_page: int = 12
    breed_list_size: int = 12
    search_result_limit: int = 10

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))


def get_config() -> Config:
    """Get application configuration.

    Returns:
        Config instance with values from environment or defaults.
    """
    return Config()
