"""JSON codec for the Electra beacon block body.

Nested values are handled by their own codecs. This module owns the field
attribution of errors, the graffiti format check and the rejection of null
entries in the operation lists.
"""

import logging
import re
from typing import Union

from .exceptions import (
    CodecError,
    FieldDecodeError,
    InvalidEncodingError,
    InvalidHexError,
    InvalidLengthError,
    InvalidPrefixError,
    InvalidSuffixError,
    MissingListEntryError,
    MissingValueError,
)
from .splitter import join_fields, split_fields
from .views import FixedBytesCodec, ListCodec, ViewCodec, dump_json, to_hex
from ..spec.types import (
    Attestation,
    AttesterSlashing,
    BLSSignature,
    Bytes32,
    Deposit,
    ElectraBeaconBlockBody,
    Eth1Data,
    ExecutionPayload,
    ExecutionRequests,
    KZGCommitment,
    ProposerSlashing,
    SignedBLSToExecutionChange,
    SignedVoluntaryExit,
    SyncAggregate,
)

logger = logging.getLogger(__name__)

GRAFFITI_LENGTH = 32
GRAFFITI_PREFIX = b'"0x'
GRAFFITI_SUFFIX = b'"'
# Opening quote, 0x, two hex digits per byte, closing quote.
GRAFFITI_JSON_LENGTH = 1 + 2 + GRAFFITI_LENGTH * 2 + 1

HEX_DIGITS = re.compile(rb"[0-9a-fA-F]*")

NULL = b"null"

REQUIRED_FIELDS = {
    "eth1_data": ViewCodec(Eth1Data),
    "sync_aggregate": ViewCodec(SyncAggregate),
    "execution_payload": ViewCodec(ExecutionPayload),
    "execution_requests": ViewCodec(ExecutionRequests),
}

OPERATION_LISTS = {
    "proposer_slashings": ListCodec(ViewCodec(ProposerSlashing)),
    "attester_slashings": ListCodec(ViewCodec(AttesterSlashing)),
    "attestations": ListCodec(ViewCodec(Attestation)),
    "deposits": ListCodec(ViewCodec(Deposit)),
    "voluntary_exits": ListCodec(ViewCodec(SignedVoluntaryExit)),
    "bls_to_execution_changes": ListCodec(ViewCodec(SignedBLSToExecutionChange)),
}

RANDAO_REVEAL = FixedBytesCodec(BLSSignature)
BLOB_KZG_COMMITMENTS = ListCodec(FixedBytesCodec(KZGCommitment))

FIELD_NAMES = tuple(ElectraBeaconBlockBody.fields().keys())


def decode_graffiti(raw: bytes) -> Bytes32:
    """Decode the raw JSON encoding of the graffiti field.

    The value must be a quoted 0x-prefixed string of exactly 64 hex digits.
    """
    if not raw.startswith(GRAFFITI_PREFIX):
        raise InvalidPrefixError()
    if not raw.endswith(GRAFFITI_SUFFIX):
        raise InvalidSuffixError()
    if len(raw) != GRAFFITI_JSON_LENGTH:
        raise InvalidLengthError()
    digits = raw[len(GRAFFITI_PREFIX):len(GRAFFITI_PREFIX) + GRAFFITI_LENGTH * 2]
    if not HEX_DIGITS.fullmatch(digits):
        raise InvalidHexError(f"invalid hex digits {digits.decode('utf-8', 'replace')!r}")
    data = bytes.fromhex(digits.decode("ascii"))
    if len(data) != GRAFFITI_LENGTH:
        raise InvalidLengthError()
    return Bytes32(data)


def encode_graffiti(graffiti: Bytes32) -> bytes:
    return dump_json(to_hex(graffiti))


def _reject_missing_entries(field: str, entries: list) -> None:
    for i, entry in enumerate(entries):
        if entry is None:
            logger.debug(f"Block body field {field} rejected: entry {i} is null")
            raise MissingListEntryError(field, i)


def _field_error(field: str, cause: Exception) -> FieldDecodeError:
    index = None
    if isinstance(cause, InvalidEncodingError) and cause.path and isinstance(cause.path[0], int):
        index = cause.path[0]
    logger.debug(f"Block body field {field} rejected: {cause}")
    return FieldDecodeError(field, cause, index)


def _decode_required(field: str, raw: bytes):
    try:
        value = REQUIRED_FIELDS[field].decode(raw)
    except InvalidEncodingError as e:
        raise _field_error(field, e) from e
    if value is None:
        cause = MissingValueError()
        raise _field_error(field, cause) from cause
    return value


def _decode_operations(field: str, raw: bytes) -> list:
    try:
        entries = OPERATION_LISTS[field].decode(raw)
    except InvalidEncodingError as e:
        raise _field_error(field, e) from e
    _reject_missing_entries(field, entries)
    return entries


def _decode_list_value(field: str, entries: list):
    """Build the typed list for a body field, attributing limit overflows to it."""
    list_type = ElectraBeaconBlockBody.fields()[field]
    if len(entries) > list_type.limit():
        cause = InvalidEncodingError(f"{len(entries)} entries exceeds limit {list_type.limit()}")
        raise _field_error(field, cause) from cause
    return list_type(entries)


def decode_block_body(data: Union[bytes, bytearray, str]) -> ElectraBeaconBlockBody:
    """Decode a block body from its JSON encoding.

    Splitter failures propagate unchanged. Every other failure is raised as a
    FieldDecodeError naming the field; null entries in the operation lists
    raise MissingListEntryError. Decoding stops at the first failure.
    """
    raw = split_fields(FIELD_NAMES, data)

    def field_raw(name: str) -> bytes:
        return raw.get(name, NULL)

    values = {}

    try:
        values["randao_reveal"] = RANDAO_REVEAL.decode(field_raw("randao_reveal"))
    except InvalidEncodingError as e:
        raise _field_error("randao_reveal", e) from e

    values["eth1_data"] = _decode_required("eth1_data", field_raw("eth1_data"))

    try:
        values["graffiti"] = decode_graffiti(field_raw("graffiti"))
    except CodecError as e:
        raise _field_error("graffiti", e) from e

    for name in ("proposer_slashings", "attester_slashings", "attestations", "deposits", "voluntary_exits"):
        values[name] = _decode_list_value(name, _decode_operations(name, field_raw(name)))

    values["sync_aggregate"] = _decode_required("sync_aggregate", field_raw("sync_aggregate"))
    values["execution_payload"] = _decode_required("execution_payload", field_raw("execution_payload"))

    values["bls_to_execution_changes"] = _decode_list_value(
        "bls_to_execution_changes",
        _decode_operations("bls_to_execution_changes", field_raw("bls_to_execution_changes")),
    )

    try:
        commitments = BLOB_KZG_COMMITMENTS.decode(field_raw("blob_kzg_commitments"))
    except InvalidEncodingError as e:
        raise _field_error("blob_kzg_commitments", e) from e
    values["blob_kzg_commitments"] = _decode_list_value("blob_kzg_commitments", commitments)

    values["execution_requests"] = _decode_required("execution_requests", field_raw("execution_requests"))

    return ElectraBeaconBlockBody(**values)


def encode_block_body(body: ElectraBeaconBlockBody) -> bytes:
    """Encode a block body to compact JSON, fields in schema order."""
    encoded = {
        "randao_reveal": RANDAO_REVEAL.encode(body.randao_reveal),
        "graffiti": encode_graffiti(body.graffiti),
        "blob_kzg_commitments": BLOB_KZG_COMMITMENTS.encode(body.blob_kzg_commitments),
    }
    for name, codec in REQUIRED_FIELDS.items():
        encoded[name] = codec.encode(getattr(body, name))
    for name, codec in OPERATION_LISTS.items():
        encoded[name] = codec.encode(getattr(body, name))
    return join_fields((name, encoded[name]) for name in FIELD_NAMES)


def block_body_to_obj(body: ElectraBeaconBlockBody) -> dict:
    """Project a block body onto a JSON-ready dict, e.g. for an API response."""
    return ViewCodec(ElectraBeaconBlockBody).to_obj(body)


def block_body_from_obj(obj: dict) -> ElectraBeaconBlockBody:
    """Decode a block body from an already parsed JSON value."""
    return decode_block_body(dump_json(obj))


__all__ = [
    "FIELD_NAMES",
    "decode_graffiti",
    "encode_graffiti",
    "decode_block_body",
    "encode_block_body",
    "block_body_to_obj",
    "block_body_from_obj",
]
