"""Split a JSON object into the raw encodings of its fields.

The splitter does not interpret field values. Each value is returned as the
exact bytes it occupies in the input, so that type-specific decoders can
apply their own structural checks to the original text.
"""

import json
import re
from typing import Iterable, Union

from .exceptions import MalformedObjectError, UnknownFieldError

WHITESPACE = re.compile(r"[ \t\n\r]*")


def _reject_constant(name: str):
    raise ValueError(f"invalid constant {name}")


# json accepts NaN and Infinity by default; they are not valid JSON.
_decoder = json.JSONDecoder(parse_constant=_reject_constant)


def _to_text(data: Union[bytes, bytearray, str]) -> str:
    if isinstance(data, str):
        return data
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedObjectError(f"input is not valid UTF-8: {e}") from e


def _skip(text: str, idx: int) -> int:
    return WHITESPACE.match(text, idx).end()


def _expect(text: str, idx: int, char: str, what: str) -> int:
    if idx >= len(text) or text[idx] != char:
        found = repr(text[idx]) if idx < len(text) else "end of input"
        raise MalformedObjectError(f"expected {what} at offset {idx}, found {found}")
    return idx + 1


def _scan(text: str, idx: int):
    try:
        return _decoder.raw_decode(text, idx)
    except ValueError as e:
        raise MalformedObjectError(str(e)) from e
    except RecursionError as e:
        raise MalformedObjectError(f"value at offset {idx} is nested too deeply") from e


def split_object(data: Union[bytes, bytearray, str]) -> dict[str, bytes]:
    """Split a JSON object into {key: raw value bytes} without a schema."""
    text = _to_text(data)
    raw: dict[str, bytes] = {}

    idx = _expect(text, _skip(text, 0), "{", "'{'")
    idx = _skip(text, idx)
    if idx < len(text) and text[idx] == "}":
        idx += 1
    else:
        while True:
            if idx >= len(text) or text[idx] != '"':
                raise MalformedObjectError(f"expected field name at offset {idx}")
            key, idx = _scan(text, idx)
            idx = _expect(text, _skip(text, idx), ":", "':'")
            start = _skip(text, idx)
            _, idx = _scan(text, start)
            # Duplicate keys keep the last value.
            raw[key] = text[start:idx].encode("utf-8")
            idx = _skip(text, idx)
            if idx < len(text) and text[idx] == ",":
                idx = _skip(text, idx + 1)
                continue
            idx = _expect(text, idx, "}", "',' or '}'")
            break

    idx = _skip(text, idx)
    if idx != len(text):
        raise MalformedObjectError(f"trailing data at offset {idx}")
    return raw


def split_fields(field_names: Iterable[str], data: Union[bytes, bytearray, str]) -> dict[str, bytes]:
    """Split a JSON object into the raw encodings of the declared fields.

    Raises MalformedObjectError if the input is not exactly one JSON object and
    UnknownFieldError for the first key that is not in ``field_names``. Fields
    missing from the input are missing from the result.
    """
    declared = set(field_names)
    raw = split_object(data)
    for key in raw:
        if key not in declared:
            raise UnknownFieldError(key)
    return raw


def join_fields(items: Iterable[tuple[str, bytes]]) -> bytes:
    """Assemble (name, raw value bytes) pairs into a compact JSON object."""
    parts = [
        json.dumps(name).encode("utf-8") + b":" + value
        for name, value in items
    ]
    return b"{" + b",".join(parts) + b"}"


__all__ = ["split_object", "split_fields", "join_fields"]
