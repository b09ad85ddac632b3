"""
Query parameters for the artworks listing and search endpoints.

See https://api.artic.edu/docs/#get-artworks and
https://api.artic.edu/docs/#get-artworks-search-2.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlencode


class InvalidQueryParams(ValueError):
    """Raised for parameter combinations the API rejects."""


def _join(values: list) -> str | None:
    return ",".join(str(v) for v in values) if values else None


def encode(params: dict[str, object | None]) -> str:
    """Render ``?k=v&...`` (commas kept literal), or "" when nothing is set."""
    present = {k: v for k, v in params.items() if v is not None}
    if not present:
        return ""
    return "?" + urlencode(present, safe=",")


@dataclass
class ArtworksQuery:
    """Parameters for ``GET /artworks``."""

    ids: list[int] = field(default_factory=list)
    limit: int | None = None
    page: int | None = None
    fields: list[str] = field(default_factory=list)
    include: list[str] = field(default_factory=list)

    def params(self) -> dict[str, object | None]:
        return {
            "ids": _join(self.ids),
            "limit": self.limit,
            "page": self.page,
            "fields": _join(self.fields),
            "include": _join(self.include),
        }


@dataclass
class SearchQuery:
    """
    Parameters for ``GET /artworks/search``.

    ``q`` is a free-text query; ``query`` is an Elasticsearch query DSL
    fragment. The API only honours ``sort`` together with ``query``.
    """

    q: str | None = None
    query: str | None = None
    sort: str | None = None
    from_: int | None = None
    size: int | None = None
    facets: list[str] = field(default_factory=list)

    def validate(self) -> None:
        if self.sort is not None and self.query is None:
            raise InvalidQueryParams("sort can only be used if query is also set")

    def params(self) -> dict[str, object | None]:
        self.validate()
        return {
            "q": self.q,
            "query": self.query,
            "sort": self.sort,
            "from": self.from_,
            "size": self.size,
            "facets": _join(self.facets),
        }
