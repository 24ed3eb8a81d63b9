"""Single pass URL segmenter.

``parse_url()`` walks the input once, left to right, and reports every
component as a ``Span`` (offset, length) into the caller's buffer.
Nothing is copied: the caller keeps ownership of the input and slices it
when it needs the actual bytes.

The module is written in Cython "pure Python mode".  It runs unmodified
as regular Python, and ``setup.py`` can compile it into an extension.
"""

import logging
import typing

import cython

from .errors import (MissingColonError, MalformedSchemeError,
                     MissingAuthorityMarkerError, MissingAtSeparatorError,
                     MissingPathSeparatorError)


__all__ = ('Span', 'ParsedUrl', 'parse_url')


logger = logging.getLogger(__name__)

# Constant folded to True by the Cython compiler.
compiled = cython.compiled


_COLON = 0x3a       # :
_SLASH = 0x2f       # /
_AT = 0x40          # @
_QUESTION = 0x3f    # ?
_HASH = 0x23        # #
_LBRACKET = 0x5b    # [
_RBRACKET = 0x5d    # ]

# <scheme> := [A-Za-z+\-.]+, upper case is accepted as is.
_SCHEME_CHARS = frozenset(
    b'+-.' + bytes(range(0x41, 0x5b)) + bytes(range(0x61, 0x7b)))


class Span(typing.NamedTuple):
    """Half-open range ``[offset, offset + length)`` of the parsed input."""

    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def slice(self, data):
        """Return ``data[offset:end]``.

        Slicing a ``memoryview`` keeps the result zero-copy.
        """
        return data[self.offset:self.offset + self.length]


class ParsedUrl(typing.NamedTuple):
    """Spans of a parsed URL.

    ``scheme`` and ``host`` are always set.  Optional components are
    ``None`` when absent, and a zero-length ``Span`` when the delimiter is
    present but nothing follows it (``http://h:/`` has an empty port).
    """

    scheme: Span
    host: Span
    port: typing.Optional[Span] = None
    path: typing.Optional[Span] = None
    query: typing.Optional[Span] = None
    fragment: typing.Optional[Span] = None
    username: typing.Optional[Span] = None
    password: typing.Optional[Span] = None

    def spans(self) -> typing.Iterator[typing.Tuple[str, Span]]:
        """Yield ``(name, span)`` for present components in input order."""
        for name in ('scheme', 'username', 'password', 'host',
                     'port', 'path', 'query', 'fragment'):
            span = getattr(self, name)
            if span is not None:
                yield name, span

    def components(self, data) -> typing.Dict[str, typing.Any]:
        return {name: span.slice(data) for name, span in self.spans()}


def _as_bytes_view(url) -> memoryview:
    buf = memoryview(url)
    if buf.format != 'B' or buf.ndim != 1:
        buf = buf.cast('B')
    return buf


def _invalid(exc_type, reason, buf, offset):
    logger.debug('rejected URL at offset %d: %s', offset, reason)
    return exc_type('invalid URL, {} at offset {}: {!r}'.format(
        reason, offset, buf.tobytes()))


@cython.locals(end=cython.Py_ssize_t, cur=cython.Py_ssize_t,
               tmp=cython.Py_ssize_t, bad=cython.Py_ssize_t,
               userinfo=cython.bint)
def parse_url(url) -> ParsedUrl:
    """Parse a URL into a ``ParsedUrl`` of spans.

    ``url`` must be a bytes-like object (bytes, bytearray, memoryview,
    array).  The accepted form is::

        scheme://[user[:password]@]host[:port][/path][?query][#fragment]

    Any ``:``, ``@``, ``/``, ``?`` or ``#`` that belongs to a component
    has to be percent-encoded by the caller; escapes are not interpreted.

    Raises a subclass of ``UrlParserError`` when the input does not match.
    """
    buf = _as_bytes_view(url)
    end = len(buf)

    # Read scheme, up to the first ':' anywhere in the input.
    cur = 0
    bad = -1
    while cur < end and buf[cur] != _COLON:
        if bad < 0 and buf[cur] not in _SCHEME_CHARS:
            bad = cur
        cur += 1

    if cur == end:
        raise _invalid(MissingColonError, 'no scheme separator', buf, 0)
    if bad >= 0:
        raise _invalid(MalformedSchemeError,
                       'bad scheme character', buf, bad)
    if cur == 0:
        raise _invalid(MalformedSchemeError, 'empty scheme', buf, 0)

    scheme = Span(0, cur)

    # Skip ':' and eat "//".
    cur += 1
    if end - cur < 2 or buf[cur] != _SLASH or buf[cur + 1] != _SLASH:
        raise _invalid(MissingAuthorityMarkerError,
                       'expected "//"', buf, cur)
    cur += 2

    # Look ahead for user info: an '@' before the first '/'.
    userinfo = False
    tmp = cur
    while tmp < end:
        if buf[tmp] == _AT:
            userinfo = True
            break
        elif buf[tmp] == _SLASH:
            break
        tmp += 1

    username = password = None
    if userinfo:
        tmp = cur
        while tmp < end and buf[tmp] != _COLON and buf[tmp] != _AT:
            tmp += 1
        username = Span(cur, tmp - cur)
        cur = tmp

        if cur < end and buf[cur] == _COLON:
            cur += 1
            tmp = cur
            while tmp < end and buf[tmp] != _AT:
                tmp += 1
            password = Span(cur, tmp - cur)
            cur = tmp

        if cur == end or buf[cur] != _AT:
            raise _invalid(MissingAtSeparatorError,
                           'expected "@" after user info', buf, cur)
        cur += 1

    # Host; a bracketed IPv6 literal keeps its brackets and its colons.
    tmp = cur
    if cur < end and buf[cur] == _LBRACKET:
        while tmp < end:
            if buf[tmp] == _RBRACKET:
                tmp += 1
                break
            tmp += 1
    else:
        while tmp < end and buf[tmp] != _COLON and buf[tmp] != _SLASH:
            tmp += 1
    host = Span(cur, tmp - cur)
    cur = tmp

    port = None
    if cur < end and buf[cur] == _COLON:
        cur += 1
        tmp = cur
        while tmp < end and buf[tmp] != _SLASH:
            tmp += 1
        port = Span(cur, tmp - cur)
        cur = tmp

    if cur == end:
        return ParsedUrl(scheme, host, port,
                         username=username, password=password)

    if buf[cur] != _SLASH:
        raise _invalid(MissingPathSeparatorError,
                       'expected "/" before path', buf, cur)
    cur += 1

    tmp = cur
    while tmp < end and buf[tmp] != _QUESTION and buf[tmp] != _HASH:
        tmp += 1
    path = Span(cur, tmp - cur)
    cur = tmp

    query = None
    if cur < end and buf[cur] == _QUESTION:
        cur += 1
        tmp = cur
        while tmp < end and buf[tmp] != _HASH:
            tmp += 1
        query = Span(cur, tmp - cur)
        cur = tmp

    fragment = None
    if cur < end and buf[cur] == _HASH:
        cur += 1
        fragment = Span(cur, end - cur)

    return ParsedUrl(scheme, host, port, path, query, fragment,
                     username, password)
