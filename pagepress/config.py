"""Configuration objects and constants for the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_CHAR_THRESHOLD = 500
DEFAULT_MAX_IMAGES = 20
DEFAULT_MAX_LINKS = 50
DEFAULT_WORDS_PER_MINUTE = 200
DEFAULT_TIMEOUT = 60.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
CHROMIUM_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
)


@dataclass
class ExtractionConfig:
    """Thresholds and caps applied while isolating and resolving content."""

    char_threshold: int = DEFAULT_CHAR_THRESHOLD
    max_images: int = DEFAULT_MAX_IMAGES
    max_links: int = DEFAULT_MAX_LINKS
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE
    preserve_classes: Tuple[str, ...] = ("caption", "figure", "img", "figcaption")
    excerpt_max_chars: int = 300


@dataclass
class FetchConfig:
    """Settings for the headless browser used to render pages."""

    navigation_timeout: float = 30.0
    wait_after_load: float = 2.0
    user_agent: str = DEFAULT_USER_AGENT
    viewport: Tuple[int, int] = (1920, 1080)
    headless: bool = True
    launch_args: Tuple[str, ...] = CHROMIUM_ARGS


@dataclass
class PipelineConfig:
    """Top-level settings for one fetch and extract request."""

    timeout: float = DEFAULT_TIMEOUT
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
