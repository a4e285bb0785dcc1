# restup - small HTTP client: one background request per call, Response with JSON decoding
from restup.client import Method, Protocol, RestClient, build_url, connect, encode
from restup.errors import ConfigurationError, DecodeError, RequestError, RestError, UrlError
from restup.options import Header, Option, OptionType, Param, header, param, partition_options
from restup.response import Response

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "Header",
    "Method",
    "Option",
    "OptionType",
    "Param",
    "Protocol",
    "RequestError",
    "Response",
    "RestClient",
    "RestError",
    "UrlError",
    "build_url",
    "connect",
    "encode",
    "header",
    "param",
    "partition_options",
]
