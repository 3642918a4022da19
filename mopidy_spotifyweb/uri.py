"""Spotify resource identifiers.

A resource can be written in two equivalent forms::

    spotify:track:1xQE0QHrmJUQweLoMB0ZWC
    http://open.spotify.com/track/1xQE0QHrmJUQweLoMB0ZWC

:func:`parse` accepts either and returns a :class:`CompactUri` or a
:class:`WebUri`. Both are immutable and convert into each other with
:meth:`SpotifyUri.to_uri` and :meth:`SpotifyUri.to_url`.
"""

import abc
from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

PREFIX = "spotify"
WEB_SCHEME = "http"
WEB_HOST = "open.spotify.com"

TRACK = "track"
ALBUM = "album"
ARTIST = "artist"


class InvalidUri(ValueError):
    pass


class MalformedSyntax(InvalidUri):
    pass


class UnrecognizedForm(InvalidUri):
    pass


class UnexpectedUserInfo(InvalidUri):
    pass


class UnexpectedPort(InvalidUri):
    pass


class InvariantViolation(InvalidUri):
    pass


@dataclass(frozen=True)
class SpotifyUri(abc.ABC):
    path: str
    query: str = ""
    fragment: str = ""

    scheme = None
    host = None
    separator = None
    foreign_separator = None
    offset = 0

    def components(self):
        """Return the path segments, e.g. ``["track", "1xQE0QHrmJUQweLoMB0ZWC"]``.

        The segment count is not checked; callers expecting a (type, id)
        pair must verify it themselves.
        """
        return self.path[self.offset:].split(self.separator)

    def equivalent(self, other):
        return self.components() == other.components()

    @abc.abstractmethod
    def to_uri(self):
        """Return the ``spotify:`` form."""

    @abc.abstractmethod
    def to_url(self):
        """Return the ``open.spotify.com`` form."""

    def __str__(self):
        return urlunsplit(
            (self.scheme, self.host, self.path, self.query, self.fragment)
        )


@dataclass(frozen=True)
class CompactUri(SpotifyUri):
    scheme = PREFIX
    host = ""
    separator = ":"
    foreign_separator = "/"

    def to_uri(self):
        return self

    def to_url(self):
        path = "/" + self.path.replace(":", "/")
        return WebUri(path, self.query, self.fragment)


@dataclass(frozen=True)
class WebUri(SpotifyUri):
    scheme = WEB_SCHEME
    host = WEB_HOST
    separator = "/"
    foreign_separator = ":"
    offset = 1

    def to_uri(self):
        if not self.path.startswith("/"):
            raise InvariantViolation(
                f"spotify: Unexpected start of path {self.path!r}."
            )
        path = self.path[1:].replace("/", ":")
        return CompactUri(path, self.query, self.fragment)

    def to_url(self):
        return self


def parse(rawuri):
    """Parse a Spotify URI or open.spotify.com URL.

    Raises a subclass of :class:`InvalidUri` when ``rawuri`` is not one of
    the two accepted forms.
    """
    try:
        parts = urlsplit(rawuri)
        # Evaluated eagerly so an invalid port literal fails here.
        port = parts.port
    except ValueError as e:
        raise MalformedSyntax(f"spotify: Malformed URI: {e}.") from e
    if not parts.scheme:
        raise MalformedSyntax("spotify: Relative URI without a scheme.")

    host = parts.hostname or ""
    if (parts.scheme, host) == (PREFIX, ""):
        cls = CompactUri
    elif (parts.scheme, host) == (WEB_SCHEME, WEB_HOST):
        cls = WebUri
    else:
        raise UnrecognizedForm("spotify: Unrecognized URI.")
    if not parts.path.strip("/"):
        raise UnrecognizedForm("spotify: URI has no resource path.")
    if cls.foreign_separator in parts.path:
        raise UnrecognizedForm(
            f"spotify: Unexpected {cls.foreign_separator!r} in URI path."
        )

    if parts.username is not None or parts.password is not None:
        raise UnexpectedUserInfo("spotify: Unexpected userinfo.")
    if port is not None or parts.netloc.endswith(":"):
        raise UnexpectedPort("spotify: Unexpected port.")

    result = cls(parts.path, parts.query, parts.fragment)
    # Case folding and dropped empty delimiters would not format back.
    if str(result) != rawuri:
        raise UnrecognizedForm("spotify: URI is not in canonical form.")
    return result


def get_uri(type, id):
    return f"{PREFIX}:{type}:{id}"
