"""
Errors raised while parsing or building IIIF Image API requests.

Every error carries the offending text (or value) in ``.value`` so callers
can report exactly what was rejected.
"""

from __future__ import annotations

from typing import Any


class IiifError(ValueError):
    """Base class for IIIF grammar and construction failures."""

    template = "invalid IIIF request: {value}"

    def __init__(self, value: Any = None, message: str | None = None):
        self.value = value
        super().__init__(message or self.template.format(value=value))


class InvalidUri(IiifError):
    template = "unable to parse URI: {value}"


class InvalidScheme(IiifError):
    template = "invalid scheme: {value}"


class InvalidPercentage(IiifError):
    template = "invalid percentage: {value}"


class InvalidDegree(IiifError):
    template = "invalid degree: {value}"


class InvalidRegion(IiifError):
    template = "could not understand region specification: {value}"


class InvalidSize(IiifError):
    template = "could not understand size specification: {value}"


class InvalidRotation(IiifError):
    template = "could not understand rotation specification: {value}"


class InvalidQuality(IiifError):
    template = "could not understand quality specification: {value}"


class InvalidFormat(IiifError):
    template = "could not understand format specification: {value}"


class MissingServer(IiifError):
    template = "missing server: {value}"


class MissingIdentifier(IiifError):
    template = "missing identifier: {value}"


class MissingFormat(IiifError):
    template = "missing quality.format segment: {value}"


class MissingRotation(IiifError):
    template = "missing rotation segment: {value}"


class MissingSize(IiifError):
    template = "missing size segment: {value}"


class MissingRegion(IiifError):
    template = "missing region segment: {value}"


class MissingInfoPart(IiifError):
    template = "missing /info.json suffix: {value}"


class IncompleteBuilder(IiifError):
    """Raised when ``build()`` is called before every required field is set."""

    template = "required field(s) not set: {value}"
