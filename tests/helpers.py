"""Shared builders for block body test data."""

import json


def h(byte: int, length: int) -> str:
    """Hex string of ``length`` repetitions of ``byte``."""
    return "0x" + f"{byte:02x}" * length


def dump(obj) -> bytes:
    """Compact JSON, the same layout the encoder produces."""
    return json.dumps(obj, separators=(",", ":")).encode("utf-8")


def _checkpoint(epoch: str, byte: int) -> dict:
    return {"epoch": epoch, "root": h(byte, 32)}


def _attestation_data() -> dict:
    return {
        "slot": "100",
        "index": "0",
        "beacon_block_root": h(0x22, 32),
        "source": _checkpoint("2", 0x23),
        "target": _checkpoint("3", 0x24),
    }


def _signed_header(byte: int) -> dict:
    return {
        "message": {
            "slot": "64",
            "proposer_index": "7",
            "parent_root": h(byte, 32),
            "state_root": h(byte + 1, 32),
            "body_root": h(byte + 2, 32),
        },
        "signature": h(byte + 3, 96),
    }


def _indexed_attestation() -> dict:
    return {
        "attesting_indices": ["1", "5", "9"],
        "data": _attestation_data(),
        "signature": h(0x31, 96),
    }


def make_block_body_obj() -> dict:
    """A populated Electra block body in Beacon API JSON form, fields in schema order."""
    from beaconjson.spec.constants import MAX_COMMITTEES_PER_SLOT, SYNC_COMMITTEE_SIZE

    committee_bytes = (MAX_COMMITTEES_PER_SLOT() + 7) // 8
    return {
        "randao_reveal": h(0x99, 96),
        "eth1_data": {
            "deposit_root": h(0x01, 32),
            "deposit_count": "12",
            "block_hash": h(0x02, 32),
        },
        "graffiti": h(0xab, 32),
        "proposer_slashings": [
            {"signed_header_1": _signed_header(0x40), "signed_header_2": _signed_header(0x50)},
        ],
        "attester_slashings": [
            {"attestation_1": _indexed_attestation(), "attestation_2": _indexed_attestation()},
        ],
        "attestations": [
            {
                "aggregation_bits": "0x0b",
                "data": _attestation_data(),
                "signature": h(0x32, 96),
                "committee_bits": "0x01" + "00" * (committee_bytes - 1),
            },
        ],
        "deposits": [
            {
                "proof": [h(0x60 + i % 16, 32) for i in range(33)],
                "data": {
                    "pubkey": h(0x71, 48),
                    "withdrawal_credentials": h(0x72, 32),
                    "amount": "32000000000",
                    "signature": h(0x73, 96),
                },
            },
        ],
        "voluntary_exits": [
            {"message": {"epoch": "5", "validator_index": "6"}, "signature": h(0x81, 96)},
        ],
        "sync_aggregate": {
            "sync_committee_bits": h(0xff, SYNC_COMMITTEE_SIZE() // 8),
            "sync_committee_signature": h(0x82, 96),
        },
        "execution_payload": {
            "parent_hash": h(0x90, 32),
            "fee_recipient": h(0x91, 20),
            "state_root": h(0x92, 32),
            "receipts_root": h(0x93, 32),
            "logs_bloom": h(0x00, 256),
            "prev_randao": h(0x94, 32),
            "block_number": "7",
            "gas_limit": "30000000",
            "gas_used": "21000",
            "timestamp": "1700000000",
            "extra_data": "0x6265616e",
            "base_fee_per_gas": "1000000000",
            "block_hash": h(0x95, 32),
            "transactions": ["0x02f86b0180", "0x"],
            "withdrawals": [
                {"index": "0", "validator_index": "1", "address": h(0x96, 20), "amount": "100"},
            ],
            "blob_gas_used": "131072",
            "excess_blob_gas": "0",
        },
        "bls_to_execution_changes": [
            {
                "message": {
                    "validator_index": "9",
                    "from_bls_pubkey": h(0xa1, 48),
                    "to_execution_address": h(0xa2, 20),
                },
                "signature": h(0xa3, 96),
            },
        ],
        "blob_kzg_commitments": [h(0xaa, 48), h(0xbb, 48)],
        "execution_requests": {
            "deposits": [
                {
                    "pubkey": h(0xc1, 48),
                    "withdrawal_credentials": h(0xc2, 32),
                    "amount": "1000000000",
                    "signature": h(0xc3, 96),
                    "index": "4",
                },
            ],
            "withdrawals": [
                {"source_address": h(0xd1, 20), "validator_pubkey": h(0xd2, 48), "amount": "0"},
            ],
            "consolidations": [
                {"source_address": h(0xe1, 20), "source_pubkey": h(0xe2, 48), "target_pubkey": h(0xe3, 48)},
            ],
        },
    }
