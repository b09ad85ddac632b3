"""
IIIF Image API request grammar.

This module parses, validates and renders IIIF Image API 2.0/3.0 request
URLs: the base URI plus the region, size, rotation, quality and format
parameters.

Basic usage:
    >>> from acres.iiif import ImageRequest
    >>>
    >>> request = ImageRequest.parse(
    ...     "https://example.org/iiif/2/abcd1234/full/843,/0/default.jpg"
    ... )
    >>> request.uri.identifier
    'abcd1234'
    >>> str(request.info())
    'https://example.org/iiif/2/abcd1234/info.json'

Building a request:
    >>> from acres.iiif import ImageRequest, BestFitSize, Format
    >>>
    >>> request = (
    ...     ImageRequest.builder()
    ...     .uri("https://example.org/iiif/2/abcd1234")
    ...     .size(BestFitSize(640, 480))
    ...     .format(Format.PNG)
    ...     .build()
    ... )
    >>> str(request)
    'https://example.org/iiif/2/abcd1234/full/!640,480/0/default.png'
"""

from .errors import (
    IiifError,
    IncompleteBuilder,
    InvalidDegree,
    InvalidFormat,
    InvalidPercentage,
    InvalidQuality,
    InvalidRegion,
    InvalidRotation,
    InvalidScheme,
    InvalidSize,
    InvalidUri,
    MissingFormat,
    MissingIdentifier,
    MissingInfoPart,
    MissingRegion,
    MissingRotation,
    MissingServer,
    MissingSize,
)
from .scalars import Degree, Percentage
from .parameters import (
    Region,
    FullRegion,
    AbsoluteRegion,
    PercentageRegion,
    Size,
    FullSize,
    WidthSize,
    HeightSize,
    PercentageSize,
    ExactSize,
    BestFitSize,
    Rotation,
    Quality,
    Format,
)
from .uri import Scheme, Uri, UriBuilder
from .requests import ImageRequest, InformationRequest
from .builders import ImageRequestBuilder, DEFAULT_WIDTH

__all__ = [
    # Errors
    "IiifError",
    "IncompleteBuilder",
    "InvalidDegree",
    "InvalidFormat",
    "InvalidPercentage",
    "InvalidQuality",
    "InvalidRegion",
    "InvalidRotation",
    "InvalidScheme",
    "InvalidSize",
    "InvalidUri",
    "MissingFormat",
    "MissingIdentifier",
    "MissingInfoPart",
    "MissingRegion",
    "MissingRotation",
    "MissingServer",
    "MissingSize",
    # Scalars
    "Degree",
    "Percentage",
    # Parameters
    "Region",
    "FullRegion",
    "AbsoluteRegion",
    "PercentageRegion",
    "Size",
    "FullSize",
    "WidthSize",
    "HeightSize",
    "PercentageSize",
    "ExactSize",
    "BestFitSize",
    "Rotation",
    "Quality",
    "Format",
    # URIs
    "Scheme",
    "Uri",
    "UriBuilder",
    # Requests
    "ImageRequest",
    "InformationRequest",
    "ImageRequestBuilder",
    "DEFAULT_WIDTH",
]
