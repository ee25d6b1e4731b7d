"""
DiamondHands client.

Locks an SPL token balance in a program-owned vault until a chosen date and
releases it afterwards, by driving the on-chain DiamondHands program.
"""

from diamondhands.application.use_cases import (
    CheckLockRecordExists,
    CreateLockRecord,
    ReleaseLock,
    ResolveLockRecord,
)
from diamondhands.domain.entities import LockRecord
from diamondhands.domain.value_objects import (
    ByAddress,
    BySnapshot,
    LockOptions,
    TokenAccount,
    record_ref,
)
from diamondhands.infrastructure.blockchain import (
    DIAMOND_HANDS_PROGRAM_ID,
    DiamondHandsProvider,
    derive_lock_record_address,
    derive_vault_authority,
    resolve_vault_and_existence,
)

__version__ = "0.1.0"

__all__ = [
    "CreateLockRecord",
    "ReleaseLock",
    "ResolveLockRecord",
    "CheckLockRecordExists",
    "LockRecord",
    "LockOptions",
    "TokenAccount",
    "ByAddress",
    "BySnapshot",
    "record_ref",
    "DIAMOND_HANDS_PROGRAM_ID",
    "DiamondHandsProvider",
    "derive_lock_record_address",
    "derive_vault_authority",
    "resolve_vault_and_existence",
]
