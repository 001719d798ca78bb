"""Main RSS Relay application."""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from aiohttp import web

from .config import Config, load_config
from .core.feeds import FeedItem, parse_rss
from .server import create_app
from .services.fetcher import FetchRequest, UpstreamFetcher


class RSSRelayApp:
    """Main RSS Relay application."""

    def __init__(self, config_file: Optional[Path] = None, config: Optional[Config] = None):
        """
        Initialize the RSS Relay application.

        Args:
            config_file: Optional path to configuration file
            config: Already loaded configuration, takes precedence over config_file
        """
        # Load configuration
        self.config = config or load_config(config_file)

        # Setup logging
        self._setup_logging()

        self.catalog = self.config.catalog
        self.fetcher = UpstreamFetcher(
            timeout=self.config.fetch_timeout,
            scheme=self.config.upstream_scheme,
            user_agent=self.config.user_agent,
        )

        logging.info("RSS Relay initialized")

    def _setup_logging(self) -> None:
        """Setup logging configuration."""
        # Convert string log level to logging constant
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        handlers: List[logging.Handler] = []

        # Setup console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

        # Setup file handler
        if self.config.log_file:
            log_file = Path(self.config.log_file).expanduser()
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

        # Configure root logger
        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        root_logger.handlers = handlers

    def build_app(self) -> web.Application:
        return create_app(self.config, fetcher=self.fetcher)

    def run(self, host: Optional[str] = None, port: Optional[int] = None, verbose: bool = False) -> int:
        """
        Run the HTTP server until interrupted.

        Args:
            host: Listen address override
            port: Listen port override
            verbose: If True, log at DEBUG level

        Returns:
            Exit code (0 for success)
        """
        if verbose:
            root_logger = logging.getLogger()
            root_logger.setLevel(logging.DEBUG)
            for handler in root_logger.handlers:
                handler.setLevel(logging.DEBUG)

        host = host or self.config.host
        port = port or self.config.port

        logging.info(f"Listening for connections on {host}:{port}")

        try:
            web.run_app(self.build_app(), host=host, port=port, print=None)
            return 0

        except OSError as e:
            logging.error(f"Cannot listen on {host}:{port}: {e}")
            return 1

    def fetch_feed(self, index: int) -> List[FeedItem]:
        """
        Fetch a catalog feed outside the server.

        Args:
            index: Position of the source in the catalog

        Returns:
            Normalized feed items
        """
        source = self.catalog[index]
        request = FetchRequest(host=source.host, path=source.path)
        raw = self.fetcher.fetch(request)
        return parse_rss(raw, self.config.max_items)

    def get_info(self) -> Dict:
        """
        Get application information.

        Returns:
            Dictionary with application info
        """
        from . import __version__

        return {
            "version": __version__,
            "listen": f"{self.config.host}:{self.config.port}",
            "static_root": str(self.config.static_path),
            "max_items": self.config.max_items,
            "fetch_timeout": self.config.fetch_timeout,
            "log_level": self.config.log_level,
            "feeds": len(self.catalog),
        }
