# restup/response.py - status + body text returned for every request
import json

from pydantic import TypeAdapter, ValidationError

from restup.errors import DecodeError


def _shape(value, adapter):
    if adapter is None or value is None:
        return value
    try:
        return adapter.validate_python(value)
    except ValidationError as e:
        raise DecodeError(f"response JSON does not match the requested type: {e}") from e


class Response:
    """
    Outcome of one request. Only status 200 counts as success.

    decode_json / decode_json_array parse the stored text on every call;
    both return "nothing" (None / []) for empty text or a non-200 status.
    `into` is any type pydantic can validate (models, dataclasses, builtins);
    unknown JSON fields are ignored, nested objects are converted too.
    """
    __slots__ = ("_status", "_text")

    def __init__(self, status: int, text: str):
        if text is None:
            raise TypeError("response text must not be None")
        self._status = int(status)
        self._text = text

    @property
    def status(self) -> int:
        return self._status

    @property
    def text(self) -> str:
        return self._text

    def success(self) -> bool:
        return self._status == 200

    def _parse(self):
        try:
            return json.loads(self._text)
        except json.JSONDecodeError as e:
            raise DecodeError(f"response body is not valid JSON: {e}") from e

    def decode_json(self, into=None):
        if not self._text or not self.success():
            return None
        adapter = TypeAdapter(into) if into is not None else None
        return _shape(self._parse(), adapter)

    def decode_json_array(self, into=None) -> list:
        if not self._text or not self.success():
            return []
        data = self._parse()
        if not isinstance(data, list):
            raise DecodeError(f"expected a JSON array, got {type(data).__name__}")
        adapter = TypeAdapter(into) if into is not None else None
        return [_shape(item, adapter) for item in data]

    def __repr__(self):
        preview = self._text if len(self._text) <= 60 else self._text[:57] + "..."
        return f"<Response [{self._status}] {preview!r}>"
