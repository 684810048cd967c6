# rss_posts/pipeline.py
from __future__ import annotations

import asyncio
import logging
import time

import httpx

from rss_posts.error_codes import LOCALE_FAILED, PARSE_ERROR
from rss_posts.feed_config import load_rss_config
from rss_posts.feed_parse import ParserKind, parse_feed
from rss_posts.fetcher import FeedFetchError, fetch_with_retry
from rss_posts.logging_utils import log_event
from rss_posts.normalize import normalize_posts
from rss_posts.schemas import FeedSource, NormalizedPost, RawEntry
from rss_posts.settings import Settings
from rss_posts.writer import write_posts


async def collect_feed(client: httpx.AsyncClient, feed: FeedSource, settings: Settings) -> list[RawEntry]:
    """Fetch and parse one feed. Any failure is logged and the feed contributes nothing."""
    try:
        xml = await fetch_with_retry(
            client,
            feed.url,
            retries=settings.retries,
            timeout_s=settings.timeout_s,
            base_delay_s=settings.backoff_base_s,
            user_agent=settings.user_agent,
        )
    except FeedFetchError as exc:
        log_event(
            "feed_fetch_failed",
            url=feed.url,
            error_code=exc.error_code,
            attempts=exc.attempts,
            error_message=str(exc),
            level=logging.WARNING,
        )
        return []

    try:
        entries = parse_feed(xml, ParserKind.from_name(feed.parser))
    except Exception as exc:
        log_event("feed_parse_failed", url=feed.url, error_code=PARSE_ERROR, error=str(exc), level=logging.WARNING)
        return []

    log_event("feed_fetch_ok", url=feed.url, parser=feed.parser, items=len(entries))
    return entries


async def collect_locale(client: httpx.AsyncClient, locale: str, settings: Settings) -> list[NormalizedPost]:
    config = load_rss_config(settings.i18n_dir, locale)

    if config is None or not config.enabled or not config.feeds:
        log_event("locale_skipped", locale=locale, reason="no_feeds")
        return []

    log_event("locale_started", locale=locale, feeds=len(config.feeds))

    # Feeds are fetched one at a time to go easy on feed origins
    entries: list[RawEntry] = []
    for feed in config.feeds:
        entries.extend(await collect_feed(client, feed, settings))

    posts = normalize_posts(locale, entries, config.limit)
    log_event("locale_complete", locale=locale, received=len(entries), posts=len(posts))
    return posts


async def run_pipeline(settings: Settings, *, client: httpx.AsyncClient | None = None) -> dict[str, list[NormalizedPost]]:
    """Build locale -> posts for every configured locale, in order."""
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=settings.timeout_s)

    out: dict[str, list[NormalizedPost]] = {}
    try:
        for locale in settings.locales:
            try:
                out[locale] = await collect_locale(client, locale, settings)
            except Exception as exc:
                log_event(
                    "locale_failed",
                    locale=locale,
                    error_code=LOCALE_FAILED,
                    error_type=type(exc).__name__,
                    error=str(exc),
                    level=logging.WARNING,
                )
                out[locale] = []
    finally:
        if owns_client:
            await client.aclose()

    return out


def run(settings: Settings) -> dict[str, int]:
    """Run every locale, write the output document once, return post counts per locale."""
    t0 = time.perf_counter()
    log_event("run_started", locales=list(settings.locales), output=str(settings.output_path))

    posts_by_locale = asyncio.run(run_pipeline(settings))

    path = write_posts(settings.output_path, posts_by_locale)
    counts = {locale: len(posts) for locale, posts in posts_by_locale.items()}

    elapsed_ms = int((time.perf_counter() - t0) * 1000)
    log_event("output_written", path=str(path), counts=counts, elapsed_ms=elapsed_ms)
    return counts
