"""RSS Relay - serve remote RSS feeds as bounded JSON item lists."""

__version__ = "1.0.0"
