"""Staged construction of image requests."""

from __future__ import annotations

import logging

from .errors import IncompleteBuilder
from .parameters import Format, Quality, Region, Rotation, Size, WidthSize
from .requests import ImageRequest
from .uri import Uri

logger = logging.getLogger(__name__)

# Application default, narrower than the Image API's own "full".
DEFAULT_WIDTH = 843


def _or_default(value, factory):
    return factory() if value is None else value


class ImageRequestBuilder:
    """
    Builder for ``ImageRequest``.

    ``uri`` must be set before ``build()``. Parameters left unset fall back
    to: region ``full``, size ``843,``, rotation ``0``, quality ``default``,
    format ``jpg``. Every setter accepts either a typed value or its URL
    segment text; ``None`` clears the setting.

    Example:
        >>> request = (
        ...     ImageRequest.builder()
        ...     .uri("https://www.artic.edu/iiif/2/abcd1234")
        ...     .quality("gray")
        ...     .build()
        ... )
        >>> str(request)
        'https://www.artic.edu/iiif/2/abcd1234/full/843,/0/gray.jpg'
    """

    def __init__(self) -> None:
        self._uri: Uri | None = None
        self._region: Region | None = None
        self._size: Size | None = None
        self._rotation: Rotation | None = None
        self._quality: Quality | None = None
        self._format: Format | None = None

    def uri(self, uri: Uri | str | None) -> ImageRequestBuilder:
        self._uri = Uri.parse(uri) if isinstance(uri, str) else uri
        return self

    def region(self, region: Region | str | None) -> ImageRequestBuilder:
        self._region = Region.parse(region) if isinstance(region, str) else region
        return self

    def size(self, size: Size | str | None) -> ImageRequestBuilder:
        self._size = Size.parse(size) if isinstance(size, str) else size
        return self

    def rotation(self, rotation: Rotation | str | None) -> ImageRequestBuilder:
        self._rotation = Rotation.parse(rotation) if isinstance(rotation, str) else rotation
        return self

    def quality(self, quality: Quality | str | None) -> ImageRequestBuilder:
        if quality is not None and not isinstance(quality, Quality):
            quality = Quality.parse(quality)
        self._quality = quality
        return self

    def format(self, fmt: Format | str | None) -> ImageRequestBuilder:
        if fmt is not None and not isinstance(fmt, Format):
            fmt = Format.parse(fmt)
        self._format = fmt
        return self

    def build(self) -> ImageRequest:
        if self._uri is None:
            raise IncompleteBuilder("uri")
        request = ImageRequest(
            uri=self._uri,
            region=_or_default(self._region, Region.default),
            size=_or_default(self._size, lambda: WidthSize(DEFAULT_WIDTH)),
            rotation=_or_default(self._rotation, Rotation.default),
            quality=_or_default(self._quality, Quality.default),
            format=_or_default(self._format, Format.default),
        )
        logger.debug("image_request_built", extra={"url": str(request)})
        return request
