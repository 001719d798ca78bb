"""Service layer for RSS Relay."""

from .assets import AssetNotFound, StaticAssets
from .fetcher import FetchRequest, UpstreamError, UpstreamFetcher, UpstreamTimeout

__all__ = ["AssetNotFound", "StaticAssets", "FetchRequest", "UpstreamError", "UpstreamFetcher", "UpstreamTimeout"]
