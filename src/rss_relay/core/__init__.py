"""Core feed catalog and RSS transformation."""

from .catalog import FeedCatalog, FeedNotAllowed, FeedSource
from .feeds import FeedItem, MalformedFeedError, parse_rss

__all__ = ["FeedCatalog", "FeedNotAllowed", "FeedSource", "FeedItem", "MalformedFeedError", "parse_rss"]
