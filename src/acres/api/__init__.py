"""
Art Institute of Chicago API client.

Basic usage:
    >>> from acres.api import Api
    >>> from acres.config import get_settings
    >>>
    >>> api = Api.from_settings(get_settings())
    >>> listing = api.artworks(ArtworksQuery(limit=2, fields=["id", "title"]))
    >>> for info in artwork_infos(api.artworks()):
    ...     print(info, info.to_uri())
"""

from .cache import ResponseCache, cache_key
from .client import Api, ApiError, fetch_bytes, default_headers
from .models import ArtworkInfo, ArtworkInfoConfig, ArtworkInfoData, ArtworksListing, artwork_infos
from .queries import ArtworksQuery, SearchQuery, InvalidQueryParams

__all__ = [
    # Client
    "Api",
    "ApiError",
    "fetch_bytes",
    "default_headers",
    # Cache
    "ResponseCache",
    "cache_key",
    # Models
    "ArtworkInfo",
    "ArtworkInfoConfig",
    "ArtworkInfoData",
    "ArtworksListing",
    "artwork_infos",
    # Queries
    "ArtworksQuery",
    "SearchQuery",
    "InvalidQueryParams",
]
