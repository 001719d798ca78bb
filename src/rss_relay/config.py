"""Configuration management for RSS Relay."""

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, validator

from .core.catalog import DEFAULT_FEEDS, FeedCatalog, FeedSource
from .utils.paths import get_config_file_path, get_project_root


class Config(BaseModel):
    """Main configuration for RSS Relay."""

    model_config = ConfigDict(extra="ignore")

    host: str = Field(default="0.0.0.0", description="Listen address")
    port: int = Field(default=8080, description="Listen port")
    static_root: str = Field(default="static", description="Directory served for static assets")
    index_file: str = Field(default="index.html", description="Entry file served for / and /favicon.ico")
    max_items: int = Field(default=10, description="Maximum items returned per feed")
    fetch_timeout: float = Field(default=10.0, description="Upstream connect/read timeout in seconds")
    upstream_scheme: str = Field(default="http", description="Scheme used for upstream fetches")
    user_agent: str = "RSS-Relay/1.0"
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = None
    feeds: List[FeedSource] = Field(default_factory=lambda: list(DEFAULT_FEEDS))

    @validator('log_level')
    def validate_log_level(cls, v):
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v.upper()

    @validator('upstream_scheme')
    def validate_scheme(cls, v):
        if v.lower() not in ("http", "https"):
            raise ValueError("Upstream scheme must be http or https")
        return v.lower()

    @validator('max_items')
    def validate_max_items(cls, v):
        if v < 1:
            raise ValueError("max_items must be at least 1")
        return v

    @validator('fetch_timeout')
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("fetch_timeout must be positive")
        return v

    @validator('port')
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return v

    @property
    def catalog(self) -> FeedCatalog:
        """Feed catalog built from the configured sources."""
        return FeedCatalog(self.feeds)

    @property
    def static_path(self) -> Path:
        """Static root resolved against the project root."""
        path = Path(self.static_root).expanduser()
        if not path.is_absolute():
            path = get_project_root() / path
        return path


def load_config(config_file: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_file: Optional path to config file. If None, uses default path.

    Returns:
        Config object
    """
    if config_file is None:
        config_file = get_config_file_path()

    if not config_file.exists():
        logging.debug(f"No config at {config_file}, using defaults")
        return Config()

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        config = Config(**data)
        logging.debug(f"Loaded config from {config_file}")
        return config

    except (yaml.YAMLError, ValueError) as e:
        logging.error(f"Error loading config from {config_file}: {e}")
        raise


def save_config(config: Config, config_file: Optional[Path] = None) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Config object to save
        config_file: Optional path to config file. If None, uses default path.
    """
    if config_file is None:
        config_file = get_config_file_path()

    config_file.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config.model_dump(), f, default_flow_style=False, indent=2, sort_keys=False)

        logging.debug(f"Saved config to {config_file}")

    except (OSError, yaml.YAMLError) as e:
        logging.error(f"Error saving config to {config_file}: {e}")
        raise


def dump_config(config: Config) -> str:
    """Render a config as YAML text."""
    return yaml.safe_dump(config.model_dump(), default_flow_style=False, indent=2, sort_keys=False)


def create_example_config() -> str:
    """Create an example configuration YAML string."""
    example_config = Config(
        port=8080,
        static_root="static",
        max_items=10,
        fetch_timeout=15,
        feeds=[
            FeedSource(title="BBC - Home", host="feeds.bbci.co.uk", path="/news/rss.xml"),
            FeedSource(title="Sky - Home", host="news.sky.com", path="/feeds/rss/home.xml"),
        ],
        log_level="INFO",
    )

    return dump_config(example_config)
