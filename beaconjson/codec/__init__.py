"""Beacon API JSON encoding for the Electra block body.

Note: importing this package imports beaconjson.spec.types, so the preset must
be selected before the first import.
"""

from .exceptions import (
    CodecError,
    SplitterError,
    MalformedObjectError,
    UnknownFieldError,
    InvalidEncodingError,
    MissingValueError,
    GraffitiError,
    InvalidPrefixError,
    InvalidSuffixError,
    InvalidLengthError,
    InvalidHexError,
    FieldDecodeError,
    MissingListEntryError,
)
from .splitter import split_object, split_fields, join_fields
from .views import ViewCodec, FixedBytesCodec, ListCodec, to_obj, from_obj
from .block_body import (
    decode_block_body,
    encode_block_body,
    block_body_to_obj,
    block_body_from_obj,
)

__all__ = [
    "CodecError",
    "SplitterError",
    "MalformedObjectError",
    "UnknownFieldError",
    "InvalidEncodingError",
    "MissingValueError",
    "GraffitiError",
    "InvalidPrefixError",
    "InvalidSuffixError",
    "InvalidLengthError",
    "InvalidHexError",
    "FieldDecodeError",
    "MissingListEntryError",
    "split_object",
    "split_fields",
    "join_fields",
    "ViewCodec",
    "FixedBytesCodec",
    "ListCodec",
    "to_obj",
    "from_obj",
    "decode_block_body",
    "encode_block_body",
    "block_body_to_obj",
    "block_body_from_obj",
]
