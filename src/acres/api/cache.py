"""
On-disk response cache.

Raw response bodies are stored one file per request, named by the SHA1 of the
endpoint and its query parameters. A miss is ``None``; there is no expiry.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)


def cache_key(endpoint: str, params: Mapping[str, Any] | None = None) -> str:
    """
    Generate a deterministic cache key for a request.

    Parameters are sorted so that their order does not change the key; ``None``
    values are dropped.

    Parameters:
        endpoint: Request URL without query string
        params: Query parameters

    Returns:
        40-character SHA1 hex digest

    Example:
        >>> len(cache_key("https://api.artic.edu/api/v1/artworks", {"page": 2}))
        40
    """
    items = sorted((k, str(v)) for k, v in (params or {}).items() if v is not None)
    material = endpoint + "?" + "&".join(f"{k}={v}" for k, v in items)
    return hashlib.sha1(material.encode("utf-8")).hexdigest()


class ResponseCache:
    """A directory of cached response bodies."""

    def __init__(self, directory: Path):
        self.directory = Path(directory).expanduser()

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.is_file():
            logger.debug("cache_miss", extra={"key": key})
            return None
        logger.debug("cache_hit", extra={"key": key, "path": str(path)})
        return path.read_bytes()

    def put(self, key: str, data: bytes) -> Path:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug("cache_put", extra={"key": key, "bytes": len(data)})
        return path

    def clear(self) -> int:
        """Delete every cached response; returns how many were removed."""
        removed = 0
        if not self.directory.is_dir():
            return removed
        for path in self.directory.glob("*.json"):
            path.unlink()
            removed += 1
        logger.info("cache_cleared", extra={"removed": removed})
        return removed
