# Enable type hint syntax from future Python versions (allows using | for union types)
from __future__ import annotations

import asyncio
import logging

import httpx

from rss_posts.error_codes import FETCH_HTTP, FETCH_NETWORK, FETCH_TIMEOUT
from rss_posts.logging_utils import log_event
from rss_posts.settings import (
    ACCEPT_HEADER,
    DEFAULT_BACKOFF_BASE_S,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT_S,
    DEFAULT_USER_AGENT,
)


class FeedFetchError(Exception):
    """Raised when a feed cannot be fetched.

    `fetch_feed` raises it for a single failed attempt; `fetch_with_retry`
    raises it once every attempt has failed.
    """

    def __init__(self, reason: str, *, error_code: str, attempts: int = 1, message: str | None = None):
        self.reason = reason
        self.error_code = error_code
        self.attempts = attempts
        super().__init__(message or reason)


# One HTTP GET, bounded end-to-end by timeout_s - no retries here
async def fetch_feed(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    user_agent: str = DEFAULT_USER_AGENT,
) -> str:
    """Fetch a feed document and return the response body as text."""
    headers = {"User-Agent": user_agent, "Accept": ACCEPT_HEADER}

    try:
        # wait_for cancels the in-flight request when the whole attempt overruns,
        # httpx's own timeout only bounds each connect/read phase
        resp = await asyncio.wait_for(
            client.get(url, headers=headers, follow_redirects=True),
            timeout=timeout_s,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
        raise FeedFetchError("timeout", error_code=FETCH_TIMEOUT) from exc
    except httpx.HTTPError as exc:
        reason = str(exc) or type(exc).__name__
        raise FeedFetchError(reason, error_code=FETCH_NETWORK) from exc

    # Any non-2xx status counts as a failed attempt
    if not resp.is_success:
        raise FeedFetchError(f"HTTP {resp.status_code}: {resp.reason_phrase}", error_code=FETCH_HTTP)

    return resp.text


# Fetch with retry and exponential backoff (0.5s, 1s, 2s, ... between attempts)
async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    *,
    retries: int = DEFAULT_RETRIES,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    base_delay_s: float = DEFAULT_BACKOFF_BASE_S,
    user_agent: str = DEFAULT_USER_AGENT,
) -> str:
    """Fetch a feed, retrying every failure kind until `retries` attempts are spent."""
    attempts = max(1, retries)
    last: FeedFetchError | None = None

    for attempt in range(1, attempts + 1):
        try:
            return await fetch_feed(client, url, timeout_s=timeout_s, user_agent=user_agent)
        except FeedFetchError as exc:
            last = exc

            if attempt == attempts:
                break

            delay_s = base_delay_s * (2 ** (attempt - 1))
            log_event(
                "feed_fetch_retry",
                url=url,
                attempt=attempt,
                attempts=attempts,
                reason=exc.reason,
                delay_s=delay_s,
                level=logging.WARNING,
            )
            await asyncio.sleep(delay_s)

    # Exhausted all attempts
    raise FeedFetchError(
        last.reason,
        error_code=last.error_code,
        attempts=attempts,
        message=f"fetch failed after {attempts} attempts: {last.reason}",
    )
