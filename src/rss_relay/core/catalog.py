"""Catalog of known RSS feed sources."""

from typing import Iterable, Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict


class FeedNotAllowed(Exception):
    """Raised when a fetch target is not a known feed source."""

    def __init__(self, host: str, path: str):
        super().__init__(f"Feed {host}{path} is not in the catalog")
        self.host = host
        self.path = path


class FeedSource(BaseModel):
    """A named upstream RSS endpoint."""

    model_config = ConfigDict(frozen=True)

    title: str
    host: str
    path: str


DEFAULT_FEEDS: Tuple[FeedSource, ...] = (
    FeedSource(title="Sky - Home", host="news.sky.com", path="/feeds/rss/home.xml"),
    FeedSource(title="Sky - Business", host="news.sky.com", path="/feeds/rss/business.xml"),
    FeedSource(title="Sky - Politics", host="news.sky.com", path="/feeds/rss/politics.xml"),
    FeedSource(title="Sky - Technology", host="news.sky.com", path="/feeds/rss/technology.xml"),
    FeedSource(title="BBC - Home", host="feeds.bbci.co.uk", path="/news/rss.xml"),
    FeedSource(title="BBC - Business", host="feeds.bbci.co.uk", path="/news/business/rss.xml"),
    FeedSource(title="BBC - Politics", host="feeds.bbci.co.uk", path="/news/politics/rss.xml"),
    FeedSource(title="BBC - Technology", host="feeds.bbci.co.uk", path="/news/technology/rss.xml"),
)


class FeedCatalog:
    """Read-only list of feed sources, also used as the fetch allow-list."""

    def __init__(self, sources: Iterable[FeedSource] = DEFAULT_FEEDS):
        self._sources: Tuple[FeedSource, ...] = tuple(sources)
        self._targets = frozenset((s.host.lower(), s.path) for s in self._sources)

    def __iter__(self) -> Iterator[FeedSource]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __getitem__(self, index: int) -> FeedSource:
        return self._sources[index]

    def is_allowed(self, host: str, path: str) -> bool:
        return (host.lower(), path) in self._targets

    def require(self, host: str, path: str) -> None:
        """
        Check that a fetch target is a catalog entry.

        Raises:
            FeedNotAllowed: If no source matches host and path
        """
        if not self.is_allowed(host, path):
            raise FeedNotAllowed(host, path)

    def to_list(self) -> List[dict]:
        return [source.model_dump() for source in self._sources]
