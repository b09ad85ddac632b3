"""
IIIF base URIs.

A base URI names a single image on an image server::

    {scheme}://{server}{prefix}/{identifier}

See https://iiif.io/api/image/3.0/#2-uri-syntax.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import SplitResult, urlsplit

from .errors import (
    IncompleteBuilder,
    InvalidScheme,
    InvalidUri,
    MissingIdentifier,
    MissingServer,
)

DEFAULT_PORTS = {"http": 80, "https": 443}


class Scheme(str, Enum):
    """HTTP or HTTPS, the only protocols the Image API allows."""

    HTTP = "http"
    HTTPS = "https"

    @classmethod
    def default(cls) -> Scheme:
        return cls.HTTPS

    @classmethod
    def parse(cls, text: str) -> Scheme:
        try:
            return cls(text)
        except ValueError:
            raise InvalidScheme(text) from None

    def __str__(self) -> str:
        return self.value


def split_url(text: str) -> SplitResult:
    """
    Split an absolute http(s) URL, rejecting anything else.

    Raises:
        InvalidUri: If the text is not an absolute URL or has a bad port
        InvalidScheme: If the scheme is not http or https
    """
    try:
        parts = urlsplit(text)
        parts.port  # validates the port number
    except ValueError as e:
        raise InvalidUri(text, f"unable to parse URI: {text} ({e})") from None
    if not parts.scheme:
        raise InvalidUri(text, f"unable to parse URI: {text} (relative URL without a base)")
    Scheme.parse(parts.scheme)
    return parts


def server_from(parts: SplitResult, text: str) -> str:
    """Host plus ``:port`` when a non-default port is given."""
    host = parts.hostname
    if not host:
        raise MissingServer(text)
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != DEFAULT_PORTS[parts.scheme.lower()]:
        return f"{host}:{port}"
    return host


def uri_from_segments(parts: SplitResult, segments: list[str], text: str) -> Uri:
    """Build a Uri from split URL parts and the path segments that remain."""
    server = server_from(parts, text)
    if not segments or not segments[-1]:
        raise MissingIdentifier(text)
    identifier = segments[-1]
    prefix = "/".join(segments[:-1])
    return Uri(
        scheme=Scheme.parse(parts.scheme.lower()),
        server=server,
        prefix=f"/{prefix}" if prefix else "",
        identifier=identifier,
    )


def path_segments(path: str) -> list[str]:
    """Path segments without the leading slash (``/a/b`` -> ``["a", "b"]``)."""
    return path[1:].split("/") if path.startswith("/") else path.split("/")


@dataclass(frozen=True)
class Uri:
    """
    Base URI for one image.

    Attributes:
        scheme: http or https
        server: Host, with ``:port`` only for non-default ports
        prefix: Empty, or a path beginning with ``/``
        identifier: Image identifier (required, non-empty, no unencoded ``/``)

    Example:
        >>> uri = Uri.parse("http://127.0.0.1:80/some/path/to/12345")
        >>> str(uri)
        'http://127.0.0.1/some/path/to/12345'
        >>> uri.prefix
        '/some/path/to'
    """

    scheme: Scheme
    server: str
    prefix: str
    identifier: str

    def __post_init__(self) -> None:
        if not isinstance(self.scheme, Scheme):
            object.__setattr__(self, "scheme", Scheme.parse(self.scheme))
        if not self.server:
            raise MissingServer(str(self))
        if not self.identifier:
            raise MissingIdentifier(str(self))
        if "/" in self.identifier:
            raise InvalidUri(
                self.identifier,
                f"identifier must not contain '/', URL-encode it as %2F: {self.identifier}",
            )
        if self.prefix and not self.prefix.startswith("/"):
            raise InvalidUri(self.prefix, f"prefix must start with '/': {self.prefix}")

    @classmethod
    def parse(cls, text: str) -> Uri:
        """
        Parse a base URI from an absolute URL.

        The last path segment is the identifier; everything before it is the
        prefix. Query strings and fragments are ignored.

        Raises:
            InvalidUri: If the text is not a well-formed absolute URL
            InvalidScheme: If the scheme is not http or https
            MissingServer: If the URL has no host
            MissingIdentifier: If the path is empty or ends with ``/``
        """
        parts = split_url(text)
        return uri_from_segments(parts, path_segments(parts.path), text)

    @classmethod
    def builder(cls) -> UriBuilder:
        return UriBuilder()

    def __str__(self) -> str:
        return f"{self.scheme}://{self.server}{self.prefix}/{self.identifier}"


class UriBuilder:
    """
    Staged construction of a ``Uri``.

    Every field must be set explicitly, including ``prefix`` (which may be
    set to ``""``); ``build()`` raises ``IncompleteBuilder`` otherwise.

    Example:
        >>> uri = (
        ...     Uri.builder()
        ...     .scheme("https")
        ...     .server("example.org")
        ...     .prefix("image-service")
        ...     .identifier("abcd1234")
        ...     .build()
        ... )
        >>> str(uri)
        'https://example.org/image-service/abcd1234'
    """

    required = ("scheme", "server", "prefix", "identifier")

    def __init__(self) -> None:
        self._fields: dict[str, object] = {}

    def scheme(self, scheme: Scheme | str) -> UriBuilder:
        self._fields["scheme"] = scheme if isinstance(scheme, Scheme) else Scheme.parse(scheme)
        return self

    def server(self, server: str) -> UriBuilder:
        self._fields["server"] = server
        return self

    def prefix(self, prefix: str) -> UriBuilder:
        if prefix and not prefix.startswith("/"):
            prefix = f"/{prefix}"
        self._fields["prefix"] = prefix
        return self

    def identifier(self, identifier: str) -> UriBuilder:
        self._fields["identifier"] = identifier
        return self

    def build(self) -> Uri:
        missing = [name for name in self.required if name not in self._fields]
        if missing:
            raise IncompleteBuilder(", ".join(missing))
        return Uri(**self._fields)  # type: ignore[arg-type]
