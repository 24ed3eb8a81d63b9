__all__ = ('UrlParserError',
           'MissingColonError',
           'MalformedSchemeError',
           'MissingAuthorityMarkerError',
           'MissingAtSeparatorError',
           'MissingPathSeparatorError',
           'UrlCodecError',
           'InvalidEscapeError')


class UrlParserError(Exception):
    pass


class MissingColonError(UrlParserError):
    pass


class MalformedSchemeError(UrlParserError):
    pass


class MissingAuthorityMarkerError(UrlParserError):
    pass


class MissingAtSeparatorError(UrlParserError):
    pass


class MissingPathSeparatorError(UrlParserError):
    pass


class UrlCodecError(Exception):
    pass


class InvalidEscapeError(UrlCodecError, ValueError):
    pass
