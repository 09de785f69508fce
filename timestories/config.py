"""Centralised settings for the Time Stories service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlsplit

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "3000"))
    )

    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    target_url: str = field(
        default_factory=lambda: os.environ.get("TARGET_URL", "https://time.com/")
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "15.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("USER_AGENT", _BROWSER_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # Extractor
    # ------------------------------------------------------------------
    max_stories: int = field(
        default_factory=lambda: int(os.environ.get("MAX_STORIES", "6"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )

    @property
    def target_domain(self) -> str:
        """Host name of :attr:`target_url`, e.g. ``time.com``."""
        return urlsplit(self.target_url).hostname or ""


def configure_logging(level: str | None = None) -> None:
    """Send log records to stderr at *level* (defaults to ``settings.log_level``)."""
    name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Module-level singleton, import this everywhere:
#   from timestories.config import settings
settings = Settings()
