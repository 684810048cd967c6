from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FeedSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    # None or an unknown name falls back to the generic parser
    parser: str | None = "default"


class RssConfig(BaseModel):
    """The featuredPosts.rss block of one locale file."""

    enabled: bool = True
    feeds: list[FeedSource] = Field(default_factory=list)
    limit: int | None = None

    @field_validator("feeds", mode="before")
    @classmethod
    def _coerce_bare_urls(cls, value):
        # A plain string entry is shorthand for {"url": ..., "parser": "default"}
        if isinstance(value, list):
            return [{"url": v} if isinstance(v, str) else v for v in value]
        return value


@dataclass
class RawEntry:
    title: str
    url: str
    description: str
    pub_date: str | None
    categories: list[str] = field(default_factory=list)
    # Only the themed parser fills these in
    category: str | None = None
    tags: list[str] | None = None


class NormalizedPost(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    url: str
    image: str
    pub_date: str | None = Field(default=None, alias="pubDate")
    categories: list[str]
    category: str | None
    tags: list[str]
    overlay_color: str = Field(default="bg-black", alias="overlayColor")
    overlay_opacity: str = Field(default="bg-opacity-70", alias="overlayOpacity")
    is_rss: bool = Field(default=True, alias="isRSS")
