from .errors import *  # NoQA
from .url_parser import *  # NoQA
from .codec import *  # NoQA

from . import errors, url_parser, codec

__all__ = errors.__all__ + url_parser.__all__ + codec.__all__  # NoQA
