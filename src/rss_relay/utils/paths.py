"""Path utilities for RSS Relay project."""

import os
from pathlib import Path
from typing import Optional


def get_project_root() -> Path:
    """
    Get the project root directory.

    ``RSS_RELAY_HOME`` overrides the location derived from the source tree.

    Returns:
        Path to the project root directory
    """
    override = os.environ.get("RSS_RELAY_HOME")
    if override:
        return Path(override).expanduser()
    return Path(__file__).parent.parent.parent.parent


def get_config_file_path() -> Path:
    """Get the path to the configuration file."""
    return get_project_root() / "config.yaml"


def resolve_within(root: Path, relative: str) -> Optional[Path]:
    """
    Resolve a request path against a root directory.

    Leading slashes are stripped so the path is always taken relative to
    ``root``. Symlinks and ``..`` segments are resolved before the
    containment check.

    Args:
        root: Base directory
        relative: Untrusted path from a request

    Returns:
        The resolved path, or None if it falls outside ``root``
    """
    base = root.resolve()
    candidate = (base / relative.lstrip("/\\")).resolve()

    if candidate != base and base not in candidate.parents:
        return None
    return candidate
