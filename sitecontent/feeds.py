"""RSS generation for validated content entries."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from email.utils import format_datetime as format_rfc2822
from html import escape
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Sequence

from pydantic import BaseModel, ConfigDict, field_validator

from .content import ContentEntry
from .queries import sort_by_date_descending, take

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)

# Code points XML 1.0 does not allow, even as character references.
_XML_ILLEGAL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class FeedChannel(BaseModel):
    """Channel-level metadata for a syndication feed."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    base_url: str
    language: str = "en-us"

    @field_validator("base_url")
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @property
    def home_url(self) -> str:
        return f"{self.base_url}/"


def render(channel: FeedChannel, items: Sequence[ContentEntry]) -> str:
    """Render an RSS 2.0 document with one item per entry, in the given order."""
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0">',
        "  <channel>",
        f"    <title>{_xml_text(channel.title)}</title>",
        f"    <description>{_xml_text(channel.description)}</description>",
        f"    <link>{_xml_text(channel.home_url)}</link>",
        f"    <language>{_xml_text(channel.language)}</language>",
    ]

    for entry in items:
        link = _xml_text(entry_link(channel.base_url, entry))
        parts.extend(
            [
                "    <item>",
                f"      <title>{_xml_text(entry.title)}</title>",
                f"      <link>{link}</link>",
                f'      <guid isPermaLink="true">{link}</guid>',
                f"      <description>{_xml_text(entry.description or '')}</description>",
            ]
        )
        if entry.date is not None:
            parts.append(f"      <pubDate>{format_pub_date(entry.date)}</pubDate>")
        for tag in entry.tags:
            parts.append(f"      <category>{_xml_text(tag)}</category>")
        parts.append("    </item>")

    parts.extend(["  </channel>", "</rss>"])
    return "\n".join(parts) + "\n"


def write_feed(config: Config, entries: Iterable[ContentEntry]) -> Path | None:
    """Sort entries newest first, render the feed and write it to the configured path."""
    settings = config.feed
    if not settings.enabled:
        return None

    items = take(sort_by_date_descending(entries), settings.limit)
    target = config.feed_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render(settings.channel(), items), encoding="utf-8")
    logger.info("Wrote feed with %d item(s) to %s", len(items), target)
    return target


def _xml_text(value: str) -> str:
    return escape(_XML_ILLEGAL.sub("", value))


def entry_link(base_url: str, entry: ContentEntry) -> str:
    return f"{base_url.rstrip('/')}/{entry.collection.value}/{entry.slug.strip('/')}/"


def format_pub_date(value: datetime) -> str:
    normalized = value
    if normalized.tzinfo is None:
        normalized = normalized.replace(tzinfo=timezone.utc)
    return format_rfc2822(normalized.astimezone(timezone.utc))
