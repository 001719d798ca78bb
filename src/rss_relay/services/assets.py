"""Static asset serving for the front end."""

import logging
import mimetypes
from pathlib import Path
from typing import Tuple

from ..utils.paths import resolve_within


class AssetNotFound(Exception):
    """Raised when a static file cannot be served."""

    def __init__(self, name: str):
        super().__init__(f"404 : {name} not found")
        self.name = name


class StaticAssets:
    """Reads files below a fixed root directory."""

    def __init__(self, root: Path, index_file: str = "index.html"):
        """
        Initialize the asset reader.

        Args:
            root: Directory that holds the front end
            index_file: Entry file served for the site root
        """
        self.root = Path(root)
        self.index_file = index_file

    def read(self, name: str) -> Tuple[bytes, str]:
        """
        Read a file relative to the root.

        Args:
            name: Requested path, e.g. ``/css/site.css``

        Returns:
            Tuple of (contents, content_type)

        Raises:
            AssetNotFound: If the path escapes the root or cannot be read
        """
        target = resolve_within(self.root, name)
        if target is None:
            logging.warning(f"Rejected static path outside root: {name}")
            raise AssetNotFound(name)

        try:
            contents = target.read_bytes()
        except OSError as e:
            logging.debug(f"Static file {name} unavailable: {e}")
            raise AssetNotFound(name) from e

        content_type, _ = mimetypes.guess_type(target.name)
        return contents, content_type or "application/octet-stream"

    def read_index(self) -> Tuple[bytes, str]:
        return self.read(self.index_file)
