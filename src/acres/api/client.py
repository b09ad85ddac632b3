"""
Client for the Art Institute of Chicago public API.

All network access goes through a single injectable ``fetch`` callable
(URL in, response body out), so the client can be pointed at a fake in tests.
JSON responses are read through the on-disk cache when caching is enabled;
image bytes are never cached.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

import httpx

from acres import __version__
from acres.config import DEFAULT_BASE_URI, Settings
from acres.iiif import ImageRequest, InformationRequest

from .cache import ResponseCache, cache_key
from .models import ArtworkInfo
from .queries import ArtworksQuery, SearchQuery, encode

logger = logging.getLogger(__name__)

Fetch = Callable[[str], bytes]


class ApiError(RuntimeError):
    """A request to the API or the image server failed."""

    def __init__(self, message: str, url: str | None = None, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


def fetch_bytes(
    url: str,
    *,
    timeout: float = 30.0,
    headers: dict[str, str] | None = None,
) -> bytes:
    """
    Fetch a response body from URL.

    Parameters:
        url: URL to GET
        timeout: Request timeout in seconds
        headers: Extra request headers

    Returns:
        Response body as bytes

    Raises:
        ApiError: If the request fails or the server answers with an error
    """
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True, headers=headers) as client:
            resp = client.get(url)
            resp.raise_for_status()
            return resp.content
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        if status == 404:
            raise ApiError(f"could not find {url}", url=url, status=status) from e
        raise ApiError(f"GET {url} failed with HTTP {status}", url=url, status=status) from e
    except httpx.HTTPError as e:
        raise ApiError(f"GET {url} failed: {e}", url=url) from e


def default_headers(user_agent: str | None = None) -> dict[str, str]:
    agent = user_agent or f"acres/{__version__}"
    return {"User-Agent": agent, "AIC-User-Agent": agent}


class Api:
    """
    The top-level API client.

    Parameters:
        base_uri: API root, ``https://api.artic.edu/api/v1`` by default
        use_cache: Whether JSON responses are read through ``cache``
        cache: Response cache (required when ``use_cache`` is true)
        fetch: Callable returning the body for a URL; defaults to an httpx GET

    Example:
        >>> api = Api.from_settings(get_settings())
        >>> artwork = api.artwork(27992)
        >>> request = api.image_request(27992, size="!400,400")
        >>> str(request)
        'https://www.artic.edu/iiif/2/1adf2696-.../full/!400,400/0/default.jpg'
    """

    def __init__(
        self,
        base_uri: str = DEFAULT_BASE_URI,
        *,
        use_cache: bool = False,
        cache: ResponseCache | None = None,
        fetch: Fetch | None = None,
    ):
        self.base_uri = base_uri.rstrip("/")
        self.use_cache = use_cache and cache is not None
        self.cache = cache
        self.fetch: Fetch = fetch or (lambda url: fetch_bytes(url, headers=default_headers()))

    @classmethod
    def from_settings(cls, settings: Settings, *, fetch: Fetch | None = None) -> Api:
        headers = default_headers(settings.user_agent)
        return cls(
            settings.base_uri,
            use_cache=settings.use_cache,
            cache=ResponseCache(Path(settings.cache_dir)),
            fetch=fetch
            or (lambda url: fetch_bytes(url, timeout=settings.timeout, headers=headers)),
        )

    # ------------------------------------------------------------------
    # JSON endpoints
    # ------------------------------------------------------------------

    def get_json(self, endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        GET a JSON endpoint, reading through the cache when enabled.

        Only bodies that decode as JSON are written to the cache; a cached
        body that no longer decodes is fetched again.

        Raises:
            ApiError: If the fetch fails, the body is not JSON, or the cache
                cannot be read or written
        """
        params = params or {}
        url = endpoint + encode(params)
        key = cache_key(endpoint, params)
        caching = self.use_cache and self.cache is not None

        if caching:
            try:
                cached = self.cache.get(key)
            except OSError as e:
                raise ApiError(f"could not read cache for {url}: {e}", url=url) from e
            if cached is not None:
                try:
                    return _decode_json(cached, url)
                except ApiError:
                    logger.warning("cache_invalid", extra={"key": key, "url": url})

        logger.info("api_get", extra={"url": url})
        body = self.fetch(url)
        payload = _decode_json(body, url)
        if caching:
            try:
                self.cache.put(key, body)
            except OSError as e:
                raise ApiError(f"could not write cache for {url}: {e}", url=url) from e
        return payload

    def artwork(self, artwork_id: int, *, fields: list[str] | None = None) -> dict[str, Any]:
        """``GET /artworks/{id}``."""
        params = {"fields": ",".join(fields)} if fields else None
        return self.get_json(f"{self.base_uri}/artworks/{artwork_id}", params)

    def artworks(self, query: ArtworksQuery | None = None) -> dict[str, Any]:
        """``GET /artworks`` (listing, optionally by ids / page / fields)."""
        query = query or ArtworksQuery()
        return self.get_json(f"{self.base_uri}/artworks", query.params())

    def search(self, query: SearchQuery | None = None) -> dict[str, Any]:
        """
        ``GET /artworks/search``.

        Raises:
            InvalidQueryParams: If ``sort`` is given without ``query``
        """
        query = query or SearchQuery()
        return self.get_json(f"{self.base_uri}/artworks/search", query.params())

    def manifest(self, artwork_id: int) -> dict[str, Any]:
        """``GET /artworks/{id}/manifest.json`` (IIIF Presentation manifest)."""
        return self.get_json(f"{self.base_uri}/artworks/{artwork_id}/manifest.json")

    # ------------------------------------------------------------------
    # IIIF
    # ------------------------------------------------------------------

    def artwork_info(self, artwork_id: int) -> ArtworkInfo:
        """
        Artwork details needed to address its image.

        Raises:
            pydantic.ValidationError: If the artwork has no ``image_id``
        """
        payload = self.artwork(artwork_id, fields=["id", "title", "image_id"])
        return ArtworkInfo.model_validate(payload)

    def image_request(self, artwork_id: int, **params: Any) -> ImageRequest:
        """
        Image request for an artwork's primary image.

        Keyword arguments (``region``, ``size``, ``rotation``, ``quality``,
        ``format``) are passed to the request builder; unset ones take the
        builder defaults.
        """
        builder = ImageRequest.builder().uri(self.artwork_info(artwork_id).to_uri())
        for name, value in params.items():
            getattr(builder, name)(value)
        return builder.build()

    def image(self, request: ImageRequest) -> bytes:
        """Image bytes for a request (not cached)."""
        logger.info("iiif_image", extra={"url": str(request)})
        return self.fetch(str(request))

    def info(self, request: InformationRequest | ImageRequest) -> dict[str, Any]:
        """The image's ``info.json`` document."""
        if isinstance(request, ImageRequest):
            request = request.info()
        url = str(request)
        logger.info("iiif_info", extra={"url": url})
        return _decode_json(self.fetch(url), url)


def _decode_json(body: bytes, url: str) -> dict[str, Any]:
    try:
        return json.loads(body)
    except ValueError as e:
        raise ApiError(f"response from {url} is not JSON: {e}", url=url) from e
