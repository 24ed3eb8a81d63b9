from typing import Union, Optional

from .parser import parse_url, ParsedUrl

__all__ = ('Url',)


class Url:
    """A parsed URL that keeps its input.

    ``parse_url()`` only returns spans.  ``Url`` holds on to the input as
    well and slices the components out of it on access.
    """

    __slots__ = ('_data', '_spans')

    def __init__(self, url: Union[bytes, bytearray, memoryview]):
        self._spans = parse_url(url)
        self._data = bytes(url)

    def _component(self, name: str) -> Optional[bytes]:
        span = getattr(self._spans, name)
        if span is None:
            return None
        return span.slice(self._data)

    @property
    def spans(self) -> ParsedUrl:
        return self._spans

    @property
    def scheme(self) -> bytes:
        return self._component('scheme')

    @property
    def username(self) -> Optional[bytes]:
        return self._component('username')

    @property
    def password(self) -> Optional[bytes]:
        return self._component('password')

    @property
    def host(self) -> bytes:
        return self._component('host')

    @property
    def port(self) -> Optional[bytes]:
        return self._component('port')

    @property
    def port_number(self) -> Optional[int]:
        """The port as an ``int``, or ``None`` if it is not a decimal number."""
        port = self.port
        if not port or not port.isdigit():
            return None
        return int(port)

    @property
    def path(self) -> Optional[bytes]:
        return self._component('path')

    @property
    def query(self) -> Optional[bytes]:
        return self._component('query')

    @property
    def fragment(self) -> Optional[bytes]:
        return self._component('fragment')

    def __bytes__(self) -> bytes:
        return self._data

    def __eq__(self, other):
        if not isinstance(other, Url):
            return NotImplemented
        return self._data == other._data

    def __hash__(self):
        return hash(self._data)

    def __repr__(self):
        parts = ', '.join(
            '{}={!r}'.format(name, span.slice(self._data))
            for name, span in self._spans.spans())
        return '<Url {}>'.format(parts)
