# restup/client.py - HTTP client facade: URL building and request dispatch
import base64
import os
import re
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from urllib.parse import quote_plus

import requests
from requests.structures import CaseInsensitiveDict

from restup.errors import ConfigurationError, RequestError, UrlError
from restup.options import Option, partition_options
from restup.payload_loader import get_logger, redact_headers
from restup.response import Response

logger = get_logger("restup")

# readLine-style line breaks; the body text is re-joined without them
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class Protocol(Enum):
    HTTP = "http"
    HTTPS = "https"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        raise ConfigurationError(f"Unknown protocol {value!r}.")


class Method(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().upper():
                    return member
        raise ConfigurationError(f"Unknown method {value!r}.")


def encode(value):
    """
    Form-encode a single query key or value (space becomes '+').

    Same output as java.net.URLEncoder: '*' stays as is, '~' is escaped.
    """
    return quote_plus(str(value), safe="*").replace("~", "%7E")


def build_url(protocol, host, port, path, params=()):
    """
    scheme://host[:port]/path[?key=value&...]

    The port is left out when it is zero or negative. The path is appended
    as given. Params keep the order they were passed in.
    """
    scheme = Protocol.parse(protocol).value
    url = f"{scheme}://{host}"
    if port > 0:
        url += f":{port}"
    url += f"/{path}"

    params = list(params)
    if params:
        url += "?" + "&".join(f"{encode(p.key)}={encode(p.value)}" for p in params)

    try:
        requests.PreparedRequest().prepare_url(url, None)
    except requests.exceptions.RequestException as e:
        raise UrlError(f"Error building URL {url!r}.") from e
    return url


class RestClient:
    """
    Client bound to one protocol/host/port and optional basic-auth credentials.

    Every call runs on the client's worker pool with its own connection and
    returns a concurrent.futures.Future that resolves to a Response. HTTP
    error statuses resolve normally (check Response.success()); only I/O and
    URL problems fail the future.
    """

    def __init__(self, protocol, host, port=-1, username=None, password=None, *,
                 encoding="utf-8", executor=None, max_workers=None):
        self._protocol = Protocol.parse(protocol)
        if not isinstance(host, str) or not host:
            raise ConfigurationError(f"host must be a non-empty string, got {host!r}")
        if isinstance(port, bool) or not isinstance(port, int):
            raise ConfigurationError(f"port must be an int, got {port!r}")
        try:
            "".encode(encoding)
        except LookupError as e:
            raise ConfigurationError(f"Unknown encoding {encoding!r}.") from e

        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._encoding = encoding
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="restup")

    @classmethod
    def from_env(cls, prefix="REST_", executor=None):
        """Build a client from REST_PROTOCOL, REST_HOST, REST_PORT, ... env vars."""
        host = os.environ.get(prefix + "HOST")
        if not host:
            raise ConfigurationError(f"{prefix}HOST is not set")
        try:
            port = int(os.environ.get(prefix + "PORT", "-1"))
        except ValueError as e:
            raise ConfigurationError(f"{prefix}PORT must be an integer") from e
        max_workers = os.environ.get(prefix + "MAX_WORKERS")
        try:
            max_workers = int(max_workers) if max_workers else None
        except ValueError as e:
            raise ConfigurationError(f"{prefix}MAX_WORKERS must be an integer") from e

        return cls(
            os.environ.get(prefix + "PROTOCOL", "http"),
            host,
            port,
            os.environ.get(prefix + "USERNAME"),
            os.environ.get(prefix + "PASSWORD"),
            encoding=os.environ.get(prefix + "ENCODING", "utf-8"),
            executor=executor,
            max_workers=max_workers,
        )

    @property
    def protocol(self):
        return self._protocol

    @property
    def scheme(self):
        return self._protocol.value

    @property
    def host(self):
        return self._host

    @property
    def port(self):
        return self._port

    @property
    def username(self):
        return self._username

    @property
    def encoding(self):
        return self._encoding

    def url_for(self, path, *params):
        return build_url(self._protocol, self._host, self._port, path, params)

    # one method per verb; the first extra argument may be the body
    def get(self, path, *args, body=None):
        return self._verb(Method.GET, path, args, body)

    def post(self, path, *args, body=None):
        return self._verb(Method.POST, path, args, body)

    def put(self, path, *args, body=None):
        return self._verb(Method.PUT, path, args, body)

    def delete(self, path, *args, body=None):
        return self._verb(Method.DELETE, path, args, body)

    def options(self, path, *args, body=None):
        return self._verb(Method.OPTIONS, path, args, body)

    def _verb(self, method, path, args, body):
        if args and not isinstance(args[0], Option):
            if body is not None:
                raise TypeError("body given both positionally and as a keyword")
            body, args = args[0], args[1:]
        return self.send(method, path, args, body)

    def send(self, method, path, options=(), body=None):
        """Schedule one request and return a Future[Response]."""
        method = Method.parse(method)
        if body is not None and not isinstance(body, (str, bytes)) \
                and not hasattr(body, "__iter__"):
            raise TypeError(f"body must be a str or an iterable of str, got {type(body).__name__}")
        return self._executor.submit(self._dispatch, method, path, list(options), body)

    def _credentials(self):
        raw = f"{self._username}:{self._password}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    def _encode_chunk(self, chunk):
        if isinstance(chunk, bytes):
            return chunk
        if isinstance(chunk, str):
            return chunk.encode(self._encoding)
        raise TypeError(f"body chunks must be str, got {type(chunk).__name__}")

    def _body(self, body):
        if body is None:
            return None
        if isinstance(body, bytes):
            return body
        if isinstance(body, str):
            return body.encode(self._encoding)
        # generator -> requests sends it chunk by chunk as it is produced
        return (self._encode_chunk(chunk) for chunk in body)

    def _read_text(self, resp):
        raw = resp.content.decode(self._encoding, errors="replace")
        return "".join(_LINE_BREAK.split(raw))

    def _dispatch(self, method, path, options, body):
        params, headers = partition_options(options)
        url = self.url_for(path, *params)

        request_headers = CaseInsensitiveDict()
        if self._username is not None and self._password is not None:
            request_headers["Authorization"] = "Basic " + self._credentials()
        for h in headers:
            request_headers[h.key] = h.value

        # query values may carry secrets, the full URL only goes to DEBUG
        logger.info("%s /%s", method.value, path)
        logger.debug("%s %s", method.value, url)
        logger.debug("request headers: %s", redact_headers(request_headers))

        try:
            with requests.Session() as session:
                # no .netrc or env credentials/proxies
                session.trust_env = False
                with session.request(method.value, url, headers=request_headers,
                                     data=self._body(body), stream=True) as resp:
                    status = resp.status_code
                    text = self._read_text(resp)
        except (requests.exceptions.RequestException, OSError) as e:
            logger.error("%s /%s failed: %s", method.value, path, e)
            raise RequestError(f"Could not send {method.value} request to /{path}.") from e

        logger.info("%s /%s -> %s", method.value, path, status)
        return Response(status, text)

    def close(self):
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __repr__(self):
        port = f":{self._port}" if self._port > 0 else ""
        user = f" user={self._username!r}" if self._username is not None else ""
        return f"<RestClient {self.scheme}://{self._host}{port}{user}>"


def connect(host, port=-1, protocol=Protocol.HTTP, username=None, password=None, **kwargs):
    """Shortcut for RestClient with the protocol defaulting to plain HTTP."""
    return RestClient(protocol, host, port, username, password, **kwargs)
