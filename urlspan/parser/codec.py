"""Percent-encoding codec.

Bytes in the unreserved set are copied, everything else is written as
``%xx`` with lowercase hex digits.  The unreserved set is the RFC 2396
one: letters, digits and ``-._~!*'()``.

The ``*_into`` functions follow the fixed-buffer contract: the length of
``out`` is the capacity, at most ``capacity - 1`` bytes are produced and a
NUL terminator is stored right after them.  ``encode()`` and ``decode()``
allocate the buffer themselves and report whether the output was cut.
"""

import typing

import cython

from .errors import InvalidEscapeError


__all__ = ('UNRESERVED', 'HEX_VALUES', 'CodecResult',
           'encode', 'decode', 'encode_into', 'decode_into',
           'encoded_length', 'decoded_length')


UNRESERVED = bytes(
    1 if (0x30 <= c <= 0x39 or 0x41 <= c <= 0x5a or 0x61 <= c <= 0x7a or
          c in b"-._~!*'()") else 0
    for c in range(256))

HEX_VALUES = tuple(
    c - 0x30 if 0x30 <= c <= 0x39 else
    c - 0x57 if 0x61 <= c <= 0x66 else
    c - 0x37 if 0x41 <= c <= 0x46 else
    -1
    for c in range(256))

_HEX_DIGITS = b'0123456789abcdef'

_PERCENT = 0x25


class CodecResult(typing.NamedTuple):
    output: bytes
    written: int
    truncated: bool


def _readable(data) -> memoryview:
    view = memoryview(data)
    if view.format != 'B' or view.ndim != 1:
        view = view.cast('B')
    return view


def _writable(out) -> memoryview:
    view = _readable(out)
    if view.readonly:
        raise TypeError('a writable bytes-like object is required, '
                        'not {!r}'.format(type(out).__name__))
    return view


def _check_capacity(capacity):
    if capacity < 1:
        raise ValueError(
            'capacity must leave room for the terminator, got {}'.format(
                capacity))


@cython.locals(n=cython.Py_ssize_t, i=cython.Py_ssize_t,
               written=cython.Py_ssize_t)
def encoded_length(data) -> int:
    """Return the length of the fully encoded form of ``data``."""
    src = _readable(data)
    n = len(src)
    written = 0
    for i in range(n):
        written += 1 if UNRESERVED[src[i]] else 3
    return written


@cython.locals(n=cython.Py_ssize_t, i=cython.Py_ssize_t,
               written=cython.Py_ssize_t)
def decoded_length(data) -> int:
    """Return the length of the decoded form of ``data``.

    Escapes are counted, not validated.
    """
    src = _readable(data)
    n = len(src)
    i = 0
    written = 0
    while i < n:
        i += 3 if src[i] == _PERCENT else 1
        written += 1
    return written


@cython.locals(limit=cython.Py_ssize_t, n=cython.Py_ssize_t,
               consumed=cython.Py_ssize_t, written=cython.Py_ssize_t,
               c=cython.int)
def _encode(src, dst, limit):
    n = len(src)
    consumed = 0
    written = 0
    while consumed < n and written < limit:
        c = src[consumed]
        if UNRESERVED[c]:
            dst[written] = c
            written += 1
        else:
            # Never leave a partial escape behind.
            if limit - written < 3:
                break
            dst[written] = _PERCENT
            dst[written + 1] = _HEX_DIGITS[c >> 4]
            dst[written + 2] = _HEX_DIGITS[c & 0xf]
            written += 3
        consumed += 1
    return written, consumed


@cython.locals(limit=cython.Py_ssize_t, n=cython.Py_ssize_t,
               consumed=cython.Py_ssize_t, written=cython.Py_ssize_t,
               c=cython.int, hi=cython.int, lo=cython.int)
def _decode(src, dst, limit):
    n = len(src)
    consumed = 0
    written = 0
    while consumed < n and written < limit:
        c = src[consumed]
        if c == _PERCENT:
            if n - consumed < 3:
                raise InvalidEscapeError(
                    'truncated percent-escape at offset {}: {!r}'.format(
                        consumed, src.tobytes()))
            hi = HEX_VALUES[src[consumed + 1]]
            lo = HEX_VALUES[src[consumed + 2]]
            if hi < 0 or lo < 0:
                raise InvalidEscapeError(
                    'invalid percent-escape at offset {}: {!r}'.format(
                        consumed, src.tobytes()))
            dst[written] = (hi << 4) | lo
            consumed += 3
        else:
            dst[written] = c
            consumed += 1
        written += 1
    return written, consumed


def encode_into(data, out) -> int:
    """Percent-encode ``data`` into the writable buffer ``out``.

    Returns the number of bytes written, not counting the NUL terminator
    stored at ``out[written]``.
    """
    src = _readable(data)
    dst = _writable(out)
    _check_capacity(len(dst))
    written, _ = _encode(src, dst, len(dst) - 1)
    dst[written] = 0
    return written


def decode_into(data, out) -> int:
    """Decode percent-escapes in ``data`` into the writable buffer ``out``.

    Same buffer contract as ``encode_into()``.  Raises
    ``InvalidEscapeError`` when a ``%`` is not followed by two hex digits.
    """
    src = _readable(data)
    dst = _writable(out)
    _check_capacity(len(dst))
    written, _ = _decode(src, dst, len(dst) - 1)
    dst[written] = 0
    return written


def encode(data, capacity: typing.Optional[int] = None) -> CodecResult:
    """Percent-encode ``data``.

    With ``capacity=None`` the output is never truncated.  Otherwise at
    most ``capacity - 1`` bytes are produced, and ``truncated`` tells
    whether some input was left over.
    """
    src = _readable(data)
    if capacity is None:
        capacity = encoded_length(src) + 1
    _check_capacity(capacity)
    buf = bytearray(capacity)
    written, consumed = _encode(src, buf, capacity - 1)
    return CodecResult(bytes(buf[:written]), written, consumed < len(src))


def decode(data, capacity: typing.Optional[int] = None) -> CodecResult:
    src = _readable(data)
    if capacity is None:
        capacity = decoded_length(src) + 1
    _check_capacity(capacity)
    buf = bytearray(capacity)
    written, consumed = _decode(src, buf, capacity - 1)
    return CodecResult(bytes(buf[:written]), written, consumed < len(src))
