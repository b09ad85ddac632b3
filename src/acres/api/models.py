"""
Pydantic models for the parts of AIC API payloads that lead to images.

Responses are otherwise forwarded verbatim; these models only pick out what
is needed to address an artwork's image through the IIIF Image API.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from acres.iiif import Uri


class ArtworkInfoConfig(BaseModel):
    """The ``config`` block every AIC response carries."""

    model_config = ConfigDict(extra="allow")

    iiif_url: str
    website_url: str | None = None


class ArtworkInfoData(BaseModel):
    """The artwork fields needed to locate its primary image."""

    model_config = ConfigDict(extra="allow")

    id: int
    title: str = "Untitled"
    image_id: str


class ArtworkInfo(BaseModel):
    """
    An artwork that has an IIIF image.

    Example:
        >>> info = ArtworkInfo.model_validate(api.artwork(27992))
        >>> str(info.to_uri())
        'https://www.artic.edu/iiif/2/1adf2696-8489-499b-cad2-821d7fde4b33'
    """

    model_config = ConfigDict(extra="allow")

    config: ArtworkInfoConfig
    data: ArtworkInfoData

    def to_uri(self) -> Uri:
        """Base IIIF URI: the configured IIIF server plus the image id."""
        base = self.config.iiif_url.rstrip("/")
        return Uri.parse(f"{base}/{self.data.image_id}")

    def __str__(self) -> str:
        return f"{self.data.title} ({self.data.id})"


class Pagination(BaseModel):
    """Pagination block of listing and search responses."""

    model_config = ConfigDict(extra="allow")

    total: int = 0
    limit: int = 0
    offset: int = 0
    total_pages: int | None = None
    current_page: int | None = None
    next_url: str | None = None


class ArtworksListing(BaseModel):
    """Listing/search response, keeping ``data`` entries as raw dicts."""

    model_config = ConfigDict(extra="allow")

    pagination: Pagination = Field(default_factory=Pagination)
    data: list[dict[str, Any]] = Field(default_factory=list)
    config: ArtworkInfoConfig

    def artwork_infos(self) -> list[ArtworkInfo]:
        """
        Artworks in the listing that can be shown as images.

        Entries without an ``image_id`` are skipped.

        Returns:
            ArtworkInfo per entry that has an image, in listing order
        """
        return [
            ArtworkInfo(config=self.config, data=ArtworkInfoData.model_validate(entry))
            for entry in self.data
            if entry.get("image_id") and "id" in entry
        ]


def artwork_infos(listing: dict[str, Any]) -> list[ArtworkInfo]:
    """Parse a listing payload and return its image-bearing artworks."""
    return ArtworksListing.model_validate(listing).artwork_infos()
