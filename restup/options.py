# restup/options.py - query params and headers passed to a request
from enum import Enum


class OptionType(Enum):
    PARAM = "param"
    HEADER = "header"


class Option:
    """
    A key/value pair that ends up either in the query string (Param)
    or in the request headers (Header).
    """
    __slots__ = ("_key", "_value")
    kind = None

    def __init__(self, key, value):
        if self.kind is None:
            raise TypeError("Option is abstract, use Param or Header")
        if not isinstance(key, str):
            raise TypeError(f"option key must be a str, got {type(key).__name__}")
        if value is None:
            raise TypeError(f"option {key!r} has no value")
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_value", str(value))

    @property
    def key(self):
        return self._key

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return (self.kind, self._key, self._value) == (other.kind, other._key, other._value)

    def __hash__(self):
        return hash((self.kind, self._key, self._value))

    def __repr__(self):
        return f"{type(self).__name__}({self._key!r}, {self._value!r})"


class Param(Option):
    __slots__ = ()
    kind = OptionType.PARAM


class Header(Option):
    __slots__ = ()
    kind = OptionType.HEADER


def param(key, value):
    return Param(key, value)


def header(key, value):
    return Header(key, value)


def partition_options(options):
    """Split options into (params, headers), keeping the order inside each list."""
    params, headers = [], []
    for opt in options:
        if not isinstance(opt, Option):
            raise TypeError(f"expected Param or Header, got {type(opt).__name__}")
        if opt.kind is OptionType.PARAM:
            params.append(opt)
        else:
            headers.append(opt)
    return params, headers
