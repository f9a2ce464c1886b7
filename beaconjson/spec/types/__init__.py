"""SSZ types for the Electra block body.

Types are organized by the fork that introduced them:
- base.py: Basic types and primitives
- phase0.py: Phase 0 types (operations, eth1 data)
- altair.py: Altair types (sync aggregate)
- capella.py: Capella types (withdrawals, BLS changes)
- deneb.py: Deneb types (execution payload with blob gas)
- electra.py: Electra types (attestations, execution requests, block body)
"""

# Base types
from .base import (
    uint8, uint64, uint256, boolean,
    Bytes20, Bytes32, Bytes48, Bytes96, ByteVector, ByteList,
    Container, Vector, List,
    Bitvector, Bitlist,
    Slot, Epoch, CommitteeIndex, ValidatorIndex, Gwei,
    Root, Hash32, BLSPubkey, BLSSignature, ExecutionAddress,
    WithdrawalIndex, KZGCommitment,
    Transaction,
    Checkpoint,
)

# Phase 0
from .phase0 import (
    AttestationData,
    Eth1Data,
    BeaconBlockHeader,
    SignedBeaconBlockHeader,
    ProposerSlashing,
    DepositData,
    Deposit,
    VoluntaryExit,
    SignedVoluntaryExit,
)

# Altair
from .altair import SyncAggregate

# Capella
from .capella import (
    Withdrawal,
    BLSToExecutionChange,
    SignedBLSToExecutionChange,
)

# Deneb
from .deneb import ExecutionPayload

# Electra
from .electra import (
    Attestation,
    IndexedAttestation,
    AttesterSlashing,
    DepositRequest,
    WithdrawalRequest,
    ConsolidationRequest,
    ExecutionRequests,
    ElectraBeaconBlockBody,
)
