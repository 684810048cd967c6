# rss_posts/normalize.py
"""
Deduplication, ranking and output shaping.
Pure functions: no network, no file access.
"""
from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from rss_posts.schemas import NormalizedPost, RawEntry
from rss_posts.settings import DEFAULT_LIMIT


DESCRIPTION_MAX_CHARS = 200
IMAGE_URL_TEMPLATE = "https://picsum.photos/seed/{seed}/600/350.jpg"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def short_hash(value: str) -> str:
    """First 8 hex chars of the MD5 digest. Stable ids and image seeds, not security."""
    return hashlib.md5(value.encode("utf-8")).hexdigest()[:8]


def parse_pub_date(raw: str | None) -> datetime | None:
    """
    Parse an RSS (RFC 822) or Atom (ISO-8601) date.

    - Returns an aware UTC datetime; naive values are taken as UTC
    - Returns None for missing, unparseable or out-of-range input
    """
    if not raw or not raw.strip():
        return None
    text = raw.strip()

    parsed: datetime | None = None
    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        parsed = None

    if parsed is None:
        iso = text[:-1] + "+00:00" if text[-1] in "zZ" else text
        try:
            parsed = datetime.fromisoformat(iso)
        except ValueError:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    # Offsets near datetime.min/max cannot be expressed in UTC
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None


def to_iso(dt: datetime) -> str:
    """UTC, millisecond precision, Z suffix: 2024-01-02T00:00:00.000Z"""
    utc = dt.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def truncate_description(text: str, max_chars: int = DESCRIPTION_MAX_CHARS) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def dedupe_by_url(entries: list[RawEntry]) -> list[RawEntry]:
    """
    Drop entries whose url was already seen.
    Preserves order (first occurrence wins).
    """
    seen: set[str] = set()
    out: list[RawEntry] = []

    for entry in entries:
        if entry.url in seen:
            continue
        seen.add(entry.url)
        out.append(entry)

    return out


def rank_by_date(entries: list[RawEntry]) -> list[RawEntry]:
    # sorted() is stable with reverse=True too, so ties keep encounter order
    return sorted(entries, key=lambda e: parse_pub_date(e.pub_date) or EPOCH, reverse=True)


def shape_post(locale: str, index: int, entry: RawEntry) -> NormalizedPost:
    category = entry.category or (entry.categories[0] if entry.categories else None)
    tags = entry.tags if entry.tags is not None else entry.categories[1:]

    published = parse_pub_date(entry.pub_date)

    return NormalizedPost(
        id=f"rss-{locale}-{index}-{short_hash(entry.url)}",
        title=entry.title,
        description=truncate_description(entry.description),
        url=entry.url,
        image=IMAGE_URL_TEMPLATE.format(seed=short_hash(entry.url + entry.title)),
        pub_date=to_iso(published) if published else None,
        categories=[c for c in [category, *tags] if c],
        category=category,
        tags=list(tags),
    )


def normalize_posts(locale: str, entries: list[RawEntry], limit: int | None = DEFAULT_LIMIT) -> list[NormalizedPost]:
    """Dedupe -> sort newest first -> keep `limit` -> shape. A falsy limit means the default of 4."""
    limit = limit or DEFAULT_LIMIT

    ranked = rank_by_date(dedupe_by_url(entries))
    return [shape_post(locale, i, entry) for i, entry in enumerate(ranked[:limit])]
