"""JSON response encoding."""

import json
from typing import Any, Iterable, List

from aiohttp import web
from pydantic import BaseModel

from .core.catalog import FeedCatalog
from .core.feeds import FeedItem


class FeedEnvelope(BaseModel):
    """Top-level wire object wrapping a list under ``feed``."""

    feed: List[Any]


def _json_response(payload: Any, status: int = 200) -> web.Response:
    return web.Response(
        status=status,
        body=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
        content_type="application/json",
    )


def encode_feed(items: Iterable[FeedItem]) -> web.Response:
    envelope = FeedEnvelope(feed=[item.to_wire() for item in items])
    return _json_response(envelope.model_dump())


def encode_catalog(catalog: FeedCatalog) -> web.Response:
    envelope = FeedEnvelope(feed=catalog.to_list())
    return _json_response(envelope.model_dump())


def encode_error(status: int, message: str) -> web.Response:
    return _json_response({"error": message}, status=status)
