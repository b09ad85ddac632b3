"""
IIIF Image API request parameters: region, size, rotation, quality, format.

Each parameter is an immutable value with a ``parse`` classmethod accepting
the URL-segment grammar and a ``__str__`` producing the canonical segment.
See https://iiif.io/api/image/3.0/#4-image-requests.

Example:
    >>> str(Size.parse("!640,480"))
    '!640,480'
    >>> str(Region.parse("pct:10.0,10,80.333,80"))
    'pct:10,10,80.33,80'
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .errors import (
    IiifError,
    InvalidFormat,
    InvalidQuality,
    InvalidRegion,
    InvalidRotation,
    InvalidSize,
)
from .scalars import Degree, Percentage

U32_MAX = 2**32 - 1

_UNSIGNED = re.compile(r"\d+", re.ASCII)


def parse_unsigned(text: str) -> int | None:
    """Parse a pixel count (ASCII digits only, fits in 32 bits) or return None."""
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    if value > U32_MAX:
        return None
    return value


def _unsigned_parts(text: str, count: int) -> list[int] | None:
    parts = text.split(",")
    if len(parts) != count:
        return None
    values = [parse_unsigned(part) for part in parts]
    if any(v is None for v in values):
        return None
    return values  # type: ignore[return-value]


def _check_unsigned(*values: int) -> None:
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= U32_MAX:
            raise ValueError(f"pixel values must be unsigned 32-bit integers, got {v!r}")


def _coerce(instance: object, name: str, kind: type) -> None:
    # Plain numbers go through from_number so they get the canonical form.
    value = getattr(instance, name)
    if not isinstance(value, kind):
        object.__setattr__(instance, name, kind.from_number(value))


# --------------------------------------------------------------------------
# Region
# --------------------------------------------------------------------------


class Region:
    """
    Rectangular portion of the source image to return.

    Variants: ``FullRegion``, ``AbsoluteRegion``, ``PercentageRegion``.
    """

    __slots__ = ()

    @classmethod
    def default(cls) -> Region:
        return FullRegion()

    @classmethod
    def parse(cls, text: str) -> Region:
        """
        Parse a region segment.

        Accepts ``full``, ``x,y,w,h`` (unsigned pixels) or
        ``pct:x,y,w,h`` (percentages). Matching is case-sensitive.

        Raises:
            InvalidRegion: For any other shape, including the wrong number of
                components or a component that does not parse
        """
        if text == "full":
            return FullRegion()

        if text.startswith("pct:"):
            parts = text[len("pct:"):].split(",")
            if len(parts) == 4:
                try:
                    x, y, w, h = (Percentage.parse(part) for part in parts)
                except IiifError:
                    raise InvalidRegion(text) from None
                return PercentageRegion(x, y, w, h)
            raise InvalidRegion(text)

        values = _unsigned_parts(text, 4)
        if values is None:
            raise InvalidRegion(text)
        return AbsoluteRegion(*values)


@dataclass(frozen=True)
class FullRegion(Region):
    """The complete image."""

    def __str__(self) -> str:
        return "full"


@dataclass(frozen=True)
class AbsoluteRegion(Region):
    """Region in pixels, measured from the top-left corner."""

    x: int
    y: int
    w: int
    h: int

    def __post_init__(self) -> None:
        _check_unsigned(self.x, self.y, self.w, self.h)

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.w},{self.h}"


@dataclass(frozen=True)
class PercentageRegion(Region):
    """Region in percent of the full image's dimensions."""

    x: Percentage
    y: Percentage
    w: Percentage
    h: Percentage

    def __post_init__(self) -> None:
        for name in ("x", "y", "w", "h"):
            _coerce(self, name, Percentage)

    @classmethod
    def from_numbers(cls, x: float, y: float, w: float, h: float) -> PercentageRegion:
        return cls(*(Percentage.from_number(v) for v in (x, y, w, h)))

    def __str__(self) -> str:
        return f"pct:{self.x},{self.y},{self.w},{self.h}"


# --------------------------------------------------------------------------
# Size
# --------------------------------------------------------------------------


class Size:
    """
    Dimensions to scale the extracted region to.

    Variants: ``FullSize``, ``WidthSize``, ``HeightSize``,
    ``PercentageSize``, ``ExactSize``, ``BestFitSize``.
    """

    __slots__ = ()

    @classmethod
    def default(cls) -> Size:
        return FullSize()

    @classmethod
    def parse(cls, text: str) -> Size:
        """
        Parse a size segment.

        Rules are tried in order: ``full``, ``pct:n``, ``!w,h``, ``,h``,
        ``w,``, ``w,h``. Markers are checked before the bare ``w,h`` rule,
        and a malformed value after ``pct:`` fails without trying later rules.

        Raises:
            InvalidSize: If no rule matches
        """
        if text == "full":
            return FullSize()

        if text.startswith("pct:"):
            try:
                return PercentageSize(Percentage.parse(text[len("pct:"):]))
            except IiifError:
                raise InvalidSize(text) from None

        if text.startswith("!"):
            values = _unsigned_parts(text[1:], 2)
            if values is None:
                raise InvalidSize(text)
            return BestFitSize(*values)

        if text.startswith(","):
            height = parse_unsigned(text[1:])
            if height is None:
                raise InvalidSize(text)
            return HeightSize(height)

        if text.endswith(","):
            width = parse_unsigned(text[:-1])
            if width is None:
                raise InvalidSize(text)
            return WidthSize(width)

        values = _unsigned_parts(text, 2)
        if values is None:
            raise InvalidSize(text)
        return ExactSize(*values)


@dataclass(frozen=True)
class FullSize(Size):
    """No scaling."""

    def __str__(self) -> str:
        return "full"


@dataclass(frozen=True)
class WidthSize(Size):
    """Scale to this width, keeping the aspect ratio."""

    w: int

    def __post_init__(self) -> None:
        _check_unsigned(self.w)

    def __str__(self) -> str:
        return f"{self.w},"


@dataclass(frozen=True)
class HeightSize(Size):
    """Scale to this height, keeping the aspect ratio."""

    h: int

    def __post_init__(self) -> None:
        _check_unsigned(self.h)

    def __str__(self) -> str:
        return f",{self.h}"


@dataclass(frozen=True)
class PercentageSize(Size):
    """Scale both dimensions by this percentage."""

    pct: Percentage

    def __post_init__(self) -> None:
        _coerce(self, "pct", Percentage)

    def __str__(self) -> str:
        return f"pct:{self.pct}"


@dataclass(frozen=True)
class ExactSize(Size):
    """Scale to exactly these dimensions, possibly distorting the image."""

    w: int
    h: int

    def __post_init__(self) -> None:
        _check_unsigned(self.w, self.h)

    def __str__(self) -> str:
        return f"{self.w},{self.h}"


@dataclass(frozen=True)
class BestFitSize(Size):
    """Scale to fit inside a ``w`` by ``h`` box, keeping the aspect ratio."""

    w: int
    h: int

    def __post_init__(self) -> None:
        _check_unsigned(self.w, self.h)

    def __str__(self) -> str:
        return f"!{self.w},{self.h}"


# --------------------------------------------------------------------------
# Rotation
# --------------------------------------------------------------------------


@dataclass(frozen=True)
class Rotation:
    """
    Clockwise rotation, optionally preceded by a horizontal mirror.

    Use ``Rotation.degrees(...)`` / ``Rotation.mirrored(...)`` to build one
    from a number.
    """

    angle: Degree
    mirror: bool = False

    def __post_init__(self) -> None:
        _coerce(self, "angle", Degree)

    @classmethod
    def degrees(cls, value: float | Degree) -> Rotation:
        return cls(value)

    @classmethod
    def mirrored(cls, value: float | Degree) -> Rotation:
        return cls(value, mirror=True)

    @classmethod
    def default(cls) -> Rotation:
        return cls.degrees(0)

    @classmethod
    def parse(cls, text: str) -> Rotation:
        """
        Parse ``n`` (rotate) or ``!n`` (mirror, then rotate).

        Raises:
            InvalidRotation: If the angle is not a number in [0, 360]
        """
        mirror = text.startswith("!")
        try:
            angle = Degree.parse(text[1:] if mirror else text)
        except IiifError:
            raise InvalidRotation(text) from None
        return cls(angle, mirror=mirror)

    def __str__(self) -> str:
        return f"!{self.angle}" if self.mirror else str(self.angle)


# --------------------------------------------------------------------------
# Quality / Format
# --------------------------------------------------------------------------


class Quality(str, Enum):
    """Colour treatment of the returned image."""

    COLOR = "color"
    GRAY = "gray"
    BITONAL = "bitonal"
    DEFAULT = "default"

    @classmethod
    def default(cls) -> Quality:
        return cls.DEFAULT

    @classmethod
    def parse(cls, text: str) -> Quality:
        """Exact lowercase keyword match; raises InvalidQuality otherwise."""
        try:
            return cls(text)
        except ValueError:
            raise InvalidQuality(text) from None

    def __str__(self) -> str:
        return self.value


class Format(str, Enum):
    """File format (extension) of the returned image."""

    JPG = "jpg"
    TIF = "tif"
    PNG = "png"
    GIF = "gif"
    JP2 = "jp2"
    PDF = "pdf"
    WEBP = "webp"

    @classmethod
    def default(cls) -> Format:
        return cls.JPG

    @classmethod
    def parse(cls, text: str) -> Format:
        """Exact lowercase extension match; raises InvalidFormat otherwise."""
        try:
            return cls(text)
        except ValueError:
            raise InvalidFormat(text) from None

    def __str__(self) -> str:
        return self.value
