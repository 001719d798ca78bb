"""Utility functions for RSS Relay."""

from .paths import get_config_file_path, get_project_root, resolve_within

__all__ = [
    "get_config_file_path",
    "get_project_root",
    "resolve_within",
]
