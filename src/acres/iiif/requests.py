"""
IIIF Image API requests.

``ImageRequest`` renders (and parses) the canonical image URL::

    {scheme}://{server}{prefix}/{identifier}/{region}/{size}/{rotation}/{quality}.{format}

``InformationRequest`` renders (and parses) the image information URL::

    {scheme}://{server}{prefix}/{identifier}/info.json
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import (
    MissingFormat,
    MissingInfoPart,
    MissingRegion,
    MissingRotation,
    MissingSize,
)
from .parameters import Format, Quality, Region, Rotation, Size
from .uri import Uri, path_segments, split_url, uri_from_segments

if TYPE_CHECKING:
    from .builders import ImageRequestBuilder

INFO_SUFFIX = "/info.json"


@dataclass(frozen=True)
class ImageRequest:
    """
    A complete, immutable IIIF image request.

    Attributes:
        uri: Base URI of the image
        region: Portion of the image to return
        size: Scaling applied to the region
        rotation: Mirroring and rotation applied after scaling
        quality: Colour treatment
        format: File format of the response

    Example:
        >>> request = ImageRequest.parse(
        ...     "https://example.org/images/12345/full/1024,/0/default.png"
        ... )
        >>> request.size
        WidthSize(w=1024)
        >>> str(request)
        'https://example.org/images/12345/full/1024,/0/default.png'
    """

    uri: Uri
    region: Region = field(default_factory=Region.default)
    size: Size = field(default_factory=Size.default)
    rotation: Rotation = field(default_factory=Rotation.default)
    quality: Quality = Quality.DEFAULT
    format: Format = Format.JPG

    @classmethod
    def builder(cls) -> ImageRequestBuilder:
        from .builders import ImageRequestBuilder

        return ImageRequestBuilder()

    @classmethod
    def parse(cls, text: str) -> ImageRequest:
        """
        Parse a full image request URL.

        Segments are consumed from the end of the path: ``quality.format``,
        rotation, size, region. Whatever precedes them is the base URI.
        The first missing or invalid component, in that order, is raised.

        Raises:
            MissingFormat: If the last segment is absent or has no ``.``
            MissingRotation / MissingSize / MissingRegion: If the path runs
                out of segments
            InvalidFormat / InvalidQuality / InvalidRotation / InvalidSize /
                InvalidRegion: If a segment does not match its grammar
            InvalidUri / InvalidScheme / MissingServer / MissingIdentifier:
                If the remaining base URI is malformed
        """
        parts = split_url(text)
        segments = path_segments(parts.path)

        last = segments.pop() if segments else ""
        quality_text, dot, format_text = last.rpartition(".")
        if not dot:
            raise MissingFormat(text)
        fmt = Format.parse(format_text)
        quality = Quality.parse(quality_text)

        if not segments:
            raise MissingRotation(text)
        rotation = Rotation.parse(segments.pop())

        if not segments:
            raise MissingSize(text)
        size = Size.parse(segments.pop())

        if not segments:
            raise MissingRegion(text)
        region = Region.parse(segments.pop())

        uri = uri_from_segments(parts, segments, text)
        return cls(uri, region, size, rotation, quality, fmt)

    def info(self) -> InformationRequest:
        """The information request for the same image."""
        return InformationRequest(self.uri)

    def __str__(self) -> str:
        return (
            f"{self.uri}/{self.region}/{self.size}/{self.rotation}/"
            f"{self.quality}.{self.format}"
        )


@dataclass(frozen=True)
class InformationRequest:
    """Request for an image's ``info.json`` description."""

    uri: Uri

    @classmethod
    def parse(cls, text: str) -> InformationRequest:
        """
        Parse an information request URL.

        Raises:
            MissingInfoPart: If the URL does not end with ``/info.json``
        """
        if not text.endswith(INFO_SUFFIX):
            raise MissingInfoPart(text)
        return cls(Uri.parse(text[: -len(INFO_SUFFIX)]))

    def __str__(self) -> str:
        return f"{self.uri}{INFO_SUFFIX}"
