"""Shared fixtures for RSS Relay tests."""

from datetime import datetime, timedelta, timezone
from xml.sax.saxutils import escape

import pytest
from aiohttp.test_utils import unused_port

from rss_relay.config import Config

BASE_DATE = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def rfc822(moment: datetime) -> str:
    return moment.strftime("%a, %d %b %Y %H:%M:%S GMT")


def build_rss(items) -> str:
    """Render an RSS 2.0 document from item dicts (description, pubDate, link, media)."""
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">',
        "<channel>",
        "<title>Test feed</title>",
        "<link>http://example.com/</link>",
        "<description>Fixture</description>",
        "<image><url>http://example.com/logo.png</url><title>Test feed</title>"
        "<link>http://example.com/</link></image>",
    ]
    for item in items:
        parts.append("<item>")
        parts.append(f"<title>{escape(item['description'])}</title>")
        parts.append(f"<description>{escape(item['description'])}</description>")
        parts.append(f"<link>{escape(item['link'])}</link>")
        if item.get("pubDate") is not None:
            parts.append(f"<pubDate>{escape(item['pubDate'])}</pubDate>")
        if item.get("media"):
            parts.append(f'<media:thumbnail width="144" height="81" url="{escape(item["media"])}"/>')
        parts.append("</item>")
    parts.append("</channel></rss>")
    return "\n".join(parts)


def make_items(count, descending=True, media=False):
    """Items numbered 0..count-1; item 0 is the newest when descending."""
    items = []
    for n in range(count):
        offset = n if descending else count - n
        items.append({
            "description": f"Story {n}",
            "pubDate": rfc822(BASE_DATE - timedelta(hours=offset)),
            "link": f"http://example.com/story/{n}",
            "media": f"http://example.com/img/{n}.jpg" if media else None,
        })
    return items


@pytest.fixture
def rss():
    """Builder for RSS documents."""
    return build_rss


@pytest.fixture
def feed_items():
    return make_items


@pytest.fixture
def static_root(tmp_path):
    root = tmp_path / "static"
    (root / "css").mkdir(parents=True)
    (root / "index.html").write_text("<html><body>relay</body></html>", encoding="utf-8")
    (root / "css" / "site.css").write_text("body { margin: 0; }", encoding="utf-8")
    (tmp_path / "secret.txt").write_text("do not serve", encoding="utf-8")
    return root


@pytest.fixture
def config(static_root):
    return Config(static_root=str(static_root), fetch_timeout=2)


@pytest.fixture
def aiohttp_unused_port():
    """Factory returning a free TCP port (formerly provided by aiohttp's pytest plugin)."""
    return unused_port
