from __future__ import annotations

import json
from pathlib import Path

from rss_posts.schemas import NormalizedPost


def posts_document(posts_by_locale: dict[str, list[NormalizedPost]]) -> dict[str, list[dict]]:
    # Keys follow the camelCase contract the page templates read
    return {
        locale: [post.model_dump(by_alias=True) for post in posts]
        for locale, posts in posts_by_locale.items()
    }


def write_posts(path: Path, posts_by_locale: dict[str, list[NormalizedPost]]) -> Path:
    """Overwrite `path` with the pretty-printed locale -> posts document."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    text = json.dumps(posts_document(posts_by_locale), ensure_ascii=False, indent=2)
    path.write_text(text, encoding="utf-8")
    return path
