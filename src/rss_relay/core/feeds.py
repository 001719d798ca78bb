"""RSS document parsing and item normalization."""

import logging
import re
import xml.sax
from datetime import datetime, timezone
from typing import List, Optional, Union

import feedparser
from pydantic import BaseModel, ConfigDict, Field

MAXRSS = 10

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# feedparser version strings for RSS 0.9x/2.0 documents (RDF flavours excluded)
RSS_VERSIONS = {"rss", "rss091n", "rss091u", "rss092", "rss093", "rss094", "rss20"}

CHANNEL_TAG = re.compile(r"<channel[\s>]")


class MalformedFeedError(Exception):
    """Raised when a document is not an RSS feed with items."""


class FeedItem(BaseModel):
    """One normalized news entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    description: str = ""
    pub_date: str = Field(default="", alias="pubDate")
    link: str = ""
    media: Optional[str] = None

    def to_wire(self) -> dict:
        """Wire representation; ``media`` is left out when there is no thumbnail."""
        return self.model_dump(by_alias=True, exclude_none=True)


def parse_published(entry: feedparser.FeedParserDict) -> datetime:
    """Publication date of an entry, or the epoch when it cannot be parsed."""
    date_tuple = entry.get('published_parsed')
    if date_tuple:
        try:
            return datetime(*date_tuple[:6], tzinfo=timezone.utc)
        except (ValueError, TypeError):
            pass
    return EPOCH


def thumbnail_url(entry: feedparser.FeedParserDict) -> Optional[str]:
    """URL of the first ``media:thumbnail`` element, if any."""
    thumbnails = entry.get('media_thumbnail') or []
    for thumbnail in thumbnails:
        url = thumbnail.get('url')
        if url:
            return url
    return None


def has_channel(data: Union[bytes, str], encoding: Optional[str]) -> bool:
    """Whether the raw document contains an RSS ``<channel>`` start tag."""
    if isinstance(data, bytes):
        try:
            data = data.decode(encoding or 'utf-8', errors='replace')
        except LookupError:
            data = data.decode('utf-8', errors='replace')
    return CHANNEL_TAG.search(data) is not None


def parse_rss(data: Union[bytes, str], max_items: int = MAXRSS) -> List[FeedItem]:
    """
    Convert an RSS document into a list of feed items.

    Items are sorted newest first by ``pubDate`` and truncated to
    ``max_items``. Sorting is stable, so entries with equal or unparseable
    dates keep their document order.

    Field values are what feedparser reports: surrounding whitespace is
    stripped, and an item without ``<link>`` takes its link from a permalink
    ``<guid>``. The ``pubDate`` text is otherwise passed through as written.

    XML errors that feedparser recovers from (an undeclared ``media:``
    prefix, say) are logged and the recovered items are used.

    Args:
        data: Raw RSS document
        max_items: Maximum number of items to return

    Returns:
        Feed items with ``id`` set to their position

    Raises:
        MalformedFeedError: If the document is not RSS, has no channel or
            has no items
    """
    feed = feedparser.parse(data)
    entries = feed.entries

    if feed.bozo:
        if isinstance(feed.get('bozo_exception'), xml.sax.SAXException) and not entries:
            raise MalformedFeedError(f"Invalid XML: {feed.bozo_exception}")
        logging.warning(f"Feed parsing warning: {feed.get('bozo_exception')}")

    version = feed.get('version', '')
    if version not in RSS_VERSIONS:
        raise MalformedFeedError(f"Not an RSS channel document (version={version or 'unknown'})")

    if not has_channel(data, feed.get('encoding')):
        raise MalformedFeedError("RSS document has no channel")

    if not entries:
        raise MalformedFeedError("RSS channel has no items")

    ordered = sorted(entries, key=parse_published, reverse=True)

    items = []
    for position, entry in enumerate(ordered[:max_items]):
        items.append(FeedItem(
            id=position,
            description=entry.get('description', ''),
            pub_date=entry.get('published', ''),
            link=entry.get('link', ''),
            media=thumbnail_url(entry),
        ))

    logging.debug(f"Parsed {len(entries)} entries, returning {len(items)}")
    return items
