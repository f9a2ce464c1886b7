"""Beacon API JSON codecs for remerkleable views.

The JSON shape of every consensus type follows from its SSZ type:

- unsigned integers are decimal strings
- booleans are JSON booleans
- byte vectors, byte lists and bitfields are 0x-prefixed hex strings
  (bitfields use their SSZ byte encoding, including the Bitlist delimiter)
- vectors and lists are arrays, except lists of uint8 which are hex strings
- containers are objects whose keys are the field names, in field order

Decoding is strict: every container field must be present, no unknown keys
are allowed and fixed sizes must match exactly.
"""

import json
import re
from typing import Any, Optional, Sequence, Type

from remerkleable.basic import boolean, uint, uint8
from remerkleable.bitfields import Bitlist, Bitvector
from remerkleable.byte_arrays import ByteList, ByteVector
from remerkleable.complex import Container, List, Vector
from remerkleable.core import View

from .exceptions import InvalidEncodingError, MissingValueError

HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")
DECIMAL_DIGITS = re.compile(r"[0-9]+")


def _reject_constant(name: str):
    raise ValueError(f"invalid constant {name}")


def load_json(raw: bytes) -> Any:
    """Parse one raw JSON value."""
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        raise InvalidEncodingError(f"invalid JSON: {e}") from e
    except RecursionError as e:
        raise InvalidEncodingError("invalid JSON: nesting too deep") from e


def dump_json(obj: Any) -> bytes:
    """Serialize a JSON value compactly."""
    return json.dumps(obj, separators=(",", ":")).encode("utf-8")


def to_hex(value: bytes) -> str:
    """Convert bytes to a hex string with 0x prefix."""
    return "0x" + bytes(value).hex()


def from_hex(obj: Any) -> bytes:
    """Convert a 0x-prefixed hex string to bytes."""
    if not isinstance(obj, str):
        raise InvalidEncodingError(f"expected hex string, got {type(obj).__name__}")
    if not obj.startswith("0x"):
        raise InvalidEncodingError("hex string missing 0x prefix")
    digits = obj[2:]
    if len(digits) % 2 != 0:
        raise InvalidEncodingError("odd number of hex digits")
    if not HEX_DIGITS.fullmatch(digits):
        raise InvalidEncodingError("invalid hex digits")
    return bytes.fromhex(digits)


def _is_byte_sequence(typ: Type[View]) -> bool:
    return issubclass(typ, (List, Vector)) and issubclass(typ.element_cls(), uint8)


def to_obj(value: View) -> Any:
    """Project a view onto its Beacon API JSON value."""
    if isinstance(value, boolean):
        return bool(value)
    if isinstance(value, uint):
        return str(int(value))
    if isinstance(value, (ByteVector, ByteList)):
        return to_hex(value)
    if isinstance(value, (Bitvector, Bitlist)):
        return to_hex(value.encode_bytes())
    if isinstance(value, Container):
        return {name: to_obj(getattr(value, name)) for name in value.__class__.fields()}
    if isinstance(value, (List, Vector)):
        if _is_byte_sequence(value.__class__):
            return to_hex(value.encode_bytes())
        return [to_obj(item) for item in value]
    raise TypeError(f"unsupported view type {type(value).__name__}")


def _uint_from_obj(typ: Type[uint], obj: Any) -> uint:
    if not isinstance(obj, str) or not DECIMAL_DIGITS.fullmatch(obj):
        raise InvalidEncodingError(f"expected decimal string, got {obj!r}")
    # int() refuses very long digit strings, so bound the length first.
    digits = obj.lstrip("0") or "0"
    if len(digits) > len(str(2 ** (typ.type_byte_length() * 8) - 1)):
        raise InvalidEncodingError(f"value of {len(digits)} digits out of range for {typ.__name__}")
    value = int(digits)
    if value.bit_length() > typ.type_byte_length() * 8:
        raise InvalidEncodingError(f"value {digits} out of range for {typ.__name__}")
    return typ(value)


def _bitvector_from_obj(typ: Type[Bitvector], obj: Any) -> Bitvector:
    data = from_hex(obj)
    bit_len = typ.vector_length()
    if len(data) != (bit_len + 7) // 8:
        raise InvalidEncodingError(f"expected {(bit_len + 7) // 8} bytes, got {len(data)}")
    if bit_len % 8 != 0 and data[-1] >> (bit_len % 8) != 0:
        raise InvalidEncodingError(f"bits set beyond length {bit_len}")
    return typ.decode_bytes(data)


def _bitlist_from_obj(typ: Type[Bitlist], obj: Any) -> Bitlist:
    data = from_hex(obj)
    if len(data) == 0 or data[-1] == 0:
        raise InvalidEncodingError("bitlist missing delimiter bit")
    bit_len = (len(data) - 1) * 8 + data[-1].bit_length() - 1
    if bit_len > typ.limit():
        raise InvalidEncodingError(f"bitlist length {bit_len} exceeds limit {typ.limit()}")
    return typ.decode_bytes(data)


def _bytes_from_obj(typ: Type[View], obj: Any) -> View:
    data = from_hex(obj)
    if issubclass(typ, ByteVector):
        expected = typ.type_byte_length()
        if len(data) != expected:
            raise InvalidEncodingError(f"expected {expected} bytes, got {len(data)}")
        return typ(data)
    if issubclass(typ, Vector):
        expected = typ.vector_length()
        if len(data) != expected:
            raise InvalidEncodingError(f"expected {expected} bytes, got {len(data)}")
        return typ.decode_bytes(data)
    if len(data) > typ.limit():
        raise InvalidEncodingError(f"{len(data)} bytes exceeds limit {typ.limit()}")
    if issubclass(typ, ByteList):
        return typ(data)
    return typ.decode_bytes(data)


def _container_from_obj(typ: Type[Container], obj: Any) -> Container:
    if not isinstance(obj, dict):
        raise InvalidEncodingError(f"expected object, got {type(obj).__name__}")
    fields = typ.fields()
    for key in obj:
        if key not in fields:
            raise InvalidEncodingError(f"unknown field {key!r}")
    values = {}
    for name, field_type in fields.items():
        if name not in obj:
            raise MissingValueError("field missing", (name,))
        try:
            values[name] = from_obj(field_type, obj[name])
        except InvalidEncodingError as e:
            raise e.within(name) from e
    return typ(**values)


def _sequence_from_obj(typ: Type[View], obj: Any) -> View:
    if not isinstance(obj, list):
        raise InvalidEncodingError(f"expected array, got {type(obj).__name__}")
    if issubclass(typ, Vector):
        if len(obj) != typ.vector_length():
            raise InvalidEncodingError(f"expected {typ.vector_length()} elements, got {len(obj)}")
    elif len(obj) > typ.limit():
        raise InvalidEncodingError(f"{len(obj)} elements exceeds limit {typ.limit()}")
    elem_cls = typ.element_cls()
    items = []
    for i, item in enumerate(obj):
        try:
            items.append(from_obj(elem_cls, item))
        except InvalidEncodingError as e:
            raise e.within(i) from e
    return typ(items)


def from_obj(typ: Type[View], obj: Any) -> View:
    """Build a view of type ``typ`` from its Beacon API JSON value."""
    if obj is None:
        raise MissingValueError()
    if issubclass(typ, boolean):
        if not isinstance(obj, bool):
            raise InvalidEncodingError(f"expected boolean, got {obj!r}")
        return typ(obj)
    if issubclass(typ, uint):
        return _uint_from_obj(typ, obj)
    if issubclass(typ, (ByteVector, ByteList)) or _is_byte_sequence(typ):
        return _bytes_from_obj(typ, obj)
    if issubclass(typ, Bitvector):
        return _bitvector_from_obj(typ, obj)
    if issubclass(typ, Bitlist):
        return _bitlist_from_obj(typ, obj)
    if issubclass(typ, Container):
        return _container_from_obj(typ, obj)
    if issubclass(typ, (List, Vector)):
        return _sequence_from_obj(typ, obj)
    raise TypeError(f"unsupported view type {typ.__name__}")


class ViewCodec:
    """JSON codec for a single consensus type.

    decode() returns None for a JSON null; callers decide whether a missing
    value is acceptable.
    """

    def __init__(self, typ: Type[View]):
        self.typ = typ

    def __repr__(self) -> str:
        return f"ViewCodec({self.typ.__name__})"

    def from_obj(self, obj: Any) -> Optional[View]:
        if obj is None:
            return None
        return from_obj(self.typ, obj)

    def to_obj(self, value: View) -> Any:
        return to_obj(value)

    def decode(self, raw: bytes) -> Optional[View]:
        return self.from_obj(load_json(raw))

    def encode(self, value: View) -> bytes:
        return dump_json(self.to_obj(value))


class FixedBytesCodec(ViewCodec):
    """JSON codec for a fixed-size binary value (signatures, commitments).

    Unlike ViewCodec it never yields None: a null is an invalid encoding.
    """

    def __init__(self, typ: Type[ByteVector]):
        if not issubclass(typ, ByteVector):
            raise TypeError(f"{typ.__name__} is not a fixed-size byte vector")
        super().__init__(typ)

    def from_obj(self, obj: Any) -> ByteVector:
        return from_obj(self.typ, obj)


class ListCodec:
    """Permissive JSON codec for a list of values.

    A null list decodes as empty, and a null entry decodes as None when the
    element codec allows it. Rejecting missing entries is left to the caller.
    """

    def __init__(self, element: ViewCodec):
        self.element = element

    def __repr__(self) -> str:
        return f"ListCodec({self.element!r})"

    def from_obj(self, obj: Any) -> list[Optional[View]]:
        if obj is None:
            return []
        if not isinstance(obj, list):
            raise InvalidEncodingError(f"expected array, got {type(obj).__name__}")
        items = []
        for i, item in enumerate(obj):
            try:
                items.append(self.element.from_obj(item))
            except InvalidEncodingError as e:
                raise e.within(i) from e
        return items

    def to_obj(self, values: Sequence[View]) -> list:
        return [self.element.to_obj(v) for v in values]

    def decode(self, raw: bytes) -> list[Optional[View]]:
        return self.from_obj(load_json(raw))

    def encode(self, values: Sequence[View]) -> bytes:
        return dump_json(self.to_obj(values))


__all__ = [
    "load_json",
    "dump_json",
    "to_hex",
    "from_hex",
    "to_obj",
    "from_obj",
    "ViewCodec",
    "FixedBytesCodec",
    "ListCodec",
]
