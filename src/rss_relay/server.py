"""HTTP request routing for RSS Relay."""

import asyncio
import logging
from typing import List, Optional
from urllib.parse import parse_qsl

from aiohttp import web

from .config import Config
from .core.catalog import FeedCatalog, FeedNotAllowed
from .core.feeds import FeedItem, MalformedFeedError, parse_rss
from .encoder import encode_catalog, encode_error, encode_feed
from .services.assets import AssetNotFound, StaticAssets
from .services.fetcher import (
    FetchRequest,
    InvalidFetchRequest,
    UpstreamError,
    UpstreamFetcher,
    UpstreamTimeout,
)


class FeedRelay:
    """Request handlers bound to the catalog, fetcher and asset reader."""

    def __init__(
        self,
        catalog: FeedCatalog,
        fetcher: UpstreamFetcher,
        assets: StaticAssets,
        max_items: int,
    ):
        self.catalog = catalog
        self.fetcher = fetcher
        self.assets = assets
        self.max_items = max_items

    async def index(self, request: web.Request) -> web.Response:
        return self._serve_asset(self.assets.index_file)

    async def static(self, request: web.Request) -> web.Response:
        return self._serve_asset(request.path)

    async def rss_list(self, request: web.Request) -> web.Response:
        return encode_catalog(self.catalog)

    async def rss_feed(self, request: web.Request) -> web.Response:
        """Fetch an upstream feed and return it as a JSON item list."""
        body = await request.text()
        form = dict(parse_qsl(body, keep_blank_values=True))

        try:
            fetch_request = FetchRequest.from_form(form)
            self.catalog.require(fetch_request.host, fetch_request.path)
            items = await asyncio.to_thread(self.load_items, fetch_request)
        except InvalidFetchRequest as e:
            logging.warning(f"Rejected feed request: {e}")
            return encode_error(400, str(e))
        except FeedNotAllowed as e:
            logging.warning(str(e))
            return encode_error(403, str(e))
        except UpstreamTimeout as e:
            return encode_error(504, f"{e} ({e.url})")
        except UpstreamError as e:
            return encode_error(502, f"{e} ({e.url})")
        except MalformedFeedError as e:
            logging.error(f"Malformed feed from {fetch_request.host}{fetch_request.path}: {e}")
            return encode_error(502, f"Malformed feed: {e}")

        logging.info(f"Relayed {len(items)} items from {fetch_request.host}{fetch_request.path}")
        return encode_feed(items)

    def load_items(self, fetch_request: FetchRequest) -> List[FeedItem]:
        """Fetch and parse a feed; blocking, so it runs on a worker thread."""
        raw = self.fetcher.fetch(fetch_request)
        return parse_rss(raw, self.max_items)

    def _serve_asset(self, name: str) -> web.Response:
        try:
            contents, content_type = self.assets.read(name)
        except AssetNotFound as e:
            return web.Response(status=404, text=str(e))
        return web.Response(body=contents, content_type=content_type)


def create_app(config: Config, fetcher: Optional[UpstreamFetcher] = None) -> web.Application:
    """
    Build the aiohttp application.

    Args:
        config: Application configuration
        fetcher: Optional fetcher, defaults to one built from the config

    Returns:
        Configured web application
    """
    if fetcher is None:
        fetcher = UpstreamFetcher(
            timeout=config.fetch_timeout,
            scheme=config.upstream_scheme,
            user_agent=config.user_agent,
        )

    relay = FeedRelay(
        catalog=config.catalog,
        fetcher=fetcher,
        assets=StaticAssets(config.static_path, config.index_file),
        max_items=config.max_items,
    )

    app = web.Application()
    app.router.add_get("/", relay.index)
    app.router.add_get("/favicon.ico", relay.index)
    app.router.add_get("/rsslist", relay.rss_list)
    app.router.add_post("/rssfeed", relay.rss_feed)
    app.router.add_get("/{tail:.*}", relay.static)

    return app
