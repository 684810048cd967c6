# rss_posts/feed_config.py
"""Read the featuredPosts.rss block from a locale's i18n/{locale}.json."""
from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from rss_posts.error_codes import CONFIG_INVALID
from rss_posts.logging_utils import log_event
from rss_posts.schemas import RssConfig


def locale_config_path(i18n_dir: Path, locale: str) -> Path:
    return Path(i18n_dir) / f"{locale}.json"


def load_rss_config(i18n_dir: Path, locale: str) -> RssConfig | None:
    """
    Return the locale's RssConfig, or None when there is nothing usable.

    A missing file, invalid JSON, a missing block, or a block that fails
    validation all mean "no feeds" for that locale rather than an error.
    """
    path = locale_config_path(i18n_dir, locale)
    if not path.exists():
        log_event("config_missing", locale=locale, path=str(path))
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        log_event("config_invalid", locale=locale, path=str(path), error_code=CONFIG_INVALID, error=str(exc), level=logging.WARNING)
        return None

    featured = data.get("featuredPosts") if isinstance(data, dict) else None
    block = featured.get("rss") if isinstance(featured, dict) else None
    if not block:
        log_event("config_missing", locale=locale, path=str(path), reason="no_rss_block")
        return None

    try:
        return RssConfig.model_validate(block)
    except ValidationError as exc:
        log_event("config_invalid", locale=locale, path=str(path), error_code=CONFIG_INVALID, error=str(exc), level=logging.WARNING)
        return None
