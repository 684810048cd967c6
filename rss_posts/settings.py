# rss_posts/settings.py
"""
Static run settings for the feed fetcher.

Values come from the environment (a local .env is honoured) and are
passed into the pipeline as one frozen object, so tests can build their
own Settings instead of patching module globals.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_USER_AGENT = "rss-posts/2.0 (+https://waynexucn.github.io)"
DEFAULT_TIMEOUT_S = 15.0
DEFAULT_RETRIES = 3
DEFAULT_BACKOFF_BASE_S = 0.5
DEFAULT_LOCALES = ("zh_CN", "en_US")
DEFAULT_I18N_DIR = "i18n"
DEFAULT_OUTPUT_PATH = "src/data/rss-posts.json"
DEFAULT_LIMIT = 4

ACCEPT_HEADER = "application/rss+xml, application/atom+xml, application/xml, text/xml, */*"


@dataclass(frozen=True)
class Settings:
    user_agent: str = DEFAULT_USER_AGENT
    timeout_s: float = DEFAULT_TIMEOUT_S
    retries: int = DEFAULT_RETRIES
    backoff_base_s: float = DEFAULT_BACKOFF_BASE_S
    locales: tuple[str, ...] = DEFAULT_LOCALES
    i18n_dir: Path = field(default_factory=lambda: Path(DEFAULT_I18N_DIR))
    output_path: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_PATH))


def _split_locales(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def load_settings() -> Settings:
    """Build Settings from RSS_* environment variables, falling back to defaults."""
    load_dotenv()

    locales = _split_locales(os.getenv("RSS_LOCALES", "")) or DEFAULT_LOCALES

    return Settings(
        user_agent=os.getenv("RSS_USER_AGENT", DEFAULT_USER_AGENT),
        timeout_s=float(os.getenv("RSS_FETCH_TIMEOUT_S", str(DEFAULT_TIMEOUT_S))),
        retries=int(os.getenv("RSS_FETCH_RETRIES", str(DEFAULT_RETRIES))),
        backoff_base_s=float(os.getenv("RSS_BACKOFF_BASE_S", str(DEFAULT_BACKOFF_BASE_S))),
        locales=locales,
        i18n_dir=Path(os.getenv("RSS_I18N_DIR", DEFAULT_I18N_DIR)),
        output_path=Path(os.getenv("RSS_OUTPUT_PATH", DEFAULT_OUTPUT_PATH)),
    )
