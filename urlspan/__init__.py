import logging

from . import parser
from .parser import *  # NOQA
from ._url import Url
from ._version import __version__  # NOQA

__all__ = parser.__all__ + ('Url', 'compiled', '__version__')  # NOQA

# True when the parser and codec modules were built as extensions.
compiled = parser.url_parser.compiled

logging.getLogger(__name__).addHandler(logging.NullHandler())
