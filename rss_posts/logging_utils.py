import json
import logging
import os
from datetime import datetime, timezone


logger = logging.getLogger("rss_posts")


def configure_logging(level: str | None = None) -> None:
    """Send rss_posts events to stderr; level from the argument, RSS_LOG_LEVEL, or INFO."""
    name = (level or os.getenv("RSS_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    logger.setLevel(getattr(logging, name, logging.INFO))


def log_event(event: str, *, level: int = logging.INFO, **fields):
    """One JSON object per line. Failures go out at WARNING so a quiet run still shows them."""
    payload = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
        **fields,
    }

    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))
