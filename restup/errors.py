# restup/errors.py - exceptions raised by the client


class RestError(Exception):
    """Base class for everything the client raises on purpose."""


class ConfigurationError(RestError, ValueError):
    """Unknown protocol/method or a bad client setting."""


class UrlError(RestError, ValueError):
    """The request URL could not be built."""


class RequestError(RestError, IOError):
    """Opening the connection, writing the body or reading the response failed."""


class DecodeError(RestError, ValueError):
    """Response text is not the JSON that was asked for."""
