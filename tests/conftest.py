# tests/conftest.py
from __future__ import annotations

import asyncio
import json

import pytest

from rss_posts.settings import Settings


RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example Feed</title>
    <item>
      <title>Older</title>
      <link>https://example.com/older</link>
      <pubDate>Mon, 01 Jan 2024 00:00:00 GMT</pubDate>
      <description><![CDATA[<p>Older post</p>]]></description>
      <category>Tech</category>
    </item>
    <item>
      <title>Newer</title>
      <link>https://example.com/newer</link>
      <pubDate>Wed, 03 Jan 2024 00:00:00 GMT</pubDate>
      <description>Newer post</description>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Example</title>
  <entry>
    <title type="html">Middle</title>
    <link href="https://blog.example.org/middle" rel="alternate"/>
    <updated>2024-01-02T00:00:00Z</updated>
    <summary>Atom summary</summary>
    <category term="Tech"/>
    <category term="Web"/>
  </entry>
</feed>
"""


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        user_agent="rss-posts-test/1.0",
        timeout_s=1.0,
        retries=3,
        backoff_base_s=0.5,
        locales=("zh_CN", "en_US"),
        i18n_dir=tmp_path / "i18n",
        output_path=tmp_path / "out" / "rss-posts.json",
    )


@pytest.fixture
def write_locale(settings):
    """Write {"featuredPosts": {"rss": block}} to the locale's i18n file."""
    def _write(locale: str, block) -> None:
        settings.i18n_dir.mkdir(parents=True, exist_ok=True)
        path = settings.i18n_dir / f"{locale}.json"
        path.write_text(json.dumps({"featuredPosts": {"rss": block}}), encoding="utf-8")

    return _write


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    """Record backoff delays instead of sleeping."""
    recorded: list[float] = []

    async def fake_sleep(seconds):
        recorded.append(seconds)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return recorded


@pytest.fixture
def rss_xml() -> str:
    return RSS_FEED


@pytest.fixture
def atom_xml() -> str:
    return ATOM_FEED
