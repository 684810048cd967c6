# rss_posts/feed_parse.py
"""
Permissive RSS 2.0 / Atom 1.0 parsing.

Fields are pulled out with tag patterns rather than a validating XML
parser, so a feed with broken markup yields fewer entries instead of
an error.
"""
from __future__ import annotations

import re
from enum import Enum

from rss_posts.schemas import RawEntry


_ENTRY_RE = re.compile(r"<(entry|item)(?:\s+[^>]*)?>(.*?)</\1>", re.IGNORECASE | re.DOTALL)
_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_HREF_LINK_RE = re.compile(r"""<link[^>]*href=["']([^"']+)["'][^>]*>""", re.IGNORECASE)
_CATEGORY_TERM_RE = re.compile(r"""<category[^>]*term=["']([^"']+)["'][^>]*>""", re.IGNORECASE)
_CATEGORY_TAG_RE = re.compile(r"<category(?:\s+[^>]*)?>(.*?)</category>", re.IGNORECASE | re.DOTALL)
_DOUBLE_SLASH_RE = re.compile(r"([^:])//+")


class ParserKind(str, Enum):
    DEFAULT = "default"
    JEKYLL_FEED = "jekyllFeed"
    ASTRO_PAPER = "astroPaper"

    @classmethod
    def from_name(cls, name: str | None) -> "ParserKind":
        """Unknown or missing names fall back to the generic parser."""
        try:
            return cls(name)
        except ValueError:
            return cls.DEFAULT


def strip_html(text: str | None) -> str:
    if not text:
        return ""
    text = _CDATA_RE.sub(r"\1", text)
    return _TAG_RE.sub("", text).strip()


def tag_content(xml: str, tag: str) -> str | None:
    """Inner text of the first <tag ...>...</tag>, CDATA unwrapped. None if absent."""
    pattern = rf"<{re.escape(tag)}(?:\s+[^>]*)?>(.*?)</{re.escape(tag)}>"
    match = re.search(pattern, xml, re.IGNORECASE | re.DOTALL)
    if match is None:
        return None
    return _CDATA_RE.sub(r"\1", match.group(1)).strip()


def repair_double_slashes(url: str) -> str:
    # "//" right after the scheme colon is left alone
    return _DOUBLE_SLASH_RE.sub(r"\1/", url)


def link_href(xml: str) -> str:
    # Atom: <link href="..."/>
    match = _HREF_LINK_RE.search(xml)
    if match:
        return repair_double_slashes(match.group(1))

    # RSS: <link>...</link>
    content = tag_content(xml, "link")
    if content:
        return repair_double_slashes(content)

    return "#"


def categories_of(xml: str) -> list[str]:
    out: list[str] = []

    for term in _CATEGORY_TERM_RE.findall(xml):
        if term not in out:
            out.append(term)

    for raw in _CATEGORY_TAG_RE.findall(xml):
        cat = strip_html(raw)
        if cat and cat not in out:
            out.append(cat)

    return out


def _first_present(xml: str, *tags: str) -> str | None:
    for tag in tags:
        value = tag_content(xml, tag)
        if value:
            return value
    return None


def parse_generic(xml: str) -> list[RawEntry]:
    """
    Extract <entry> (Atom) and <item> (RSS) records in document order.

    Defaults:
    - title -> "Untitled"
    - url -> "#"
    - description -> ""
    - pub_date -> None
    """
    entries: list[RawEntry] = []

    for match in _ENTRY_RE.finditer(xml):
        content = match.group(2)

        title = tag_content(content, "title") or "Untitled"
        description = _first_present(content, "summary", "description", "content") or ""

        entries.append(
            RawEntry(
                title=strip_html(title),
                url=link_href(content),
                description=strip_html(description),
                pub_date=_first_present(content, "updated", "pubDate", "published"),
                categories=categories_of(content),
            )
        )

    return entries


def parse_astro_paper(xml: str) -> list[RawEntry]:
    """Generic parse, then the first category becomes the main category and the rest tags."""
    entries = parse_generic(xml)

    for entry in entries:
        cleaned = [c.strip() for c in entry.categories if c.strip()]
        main, *tags = cleaned or ["Uncategorized"]
        entry.category = main
        entry.tags = tags
        entry.categories = [main, *tags]

    return entries


_PARSERS = {
    ParserKind.DEFAULT: parse_generic,
    ParserKind.JEKYLL_FEED: parse_generic,
    ParserKind.ASTRO_PAPER: parse_astro_paper,
}


def parse_feed(xml: str, kind: ParserKind = ParserKind.DEFAULT) -> list[RawEntry]:
    return _PARSERS[kind](xml)
