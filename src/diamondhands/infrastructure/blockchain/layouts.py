"""
Wire formats of the DiamondHands program and SPL token accounts.

Instruction data is an 8-byte discriminator followed by the Borsh-encoded
argument struct. Account data is an 8-byte discriminator followed by the
Borsh-encoded account struct.
"""

import hashlib

from borsh_construct import U8, U64, Bool, CStruct
from solders.pubkey import Pubkey  # type: ignore

from diamondhands.domain.entities.lock_record import LockRecord
from diamondhands.domain.exceptions import AccountDecodeError

DISCRIMINATOR_SIZE = 8

CREATE_LOCK_RECORD_IX_NAME = "create_diamond_hands_account"
RELEASE_LOCK_IX_NAME = "unfreeze_assets"
LOCK_RECORD_ACCOUNT_NAME = "DiamondHandsAccount"

PubkeyLayout = U8[32]

CreateLockRecordParamsLayout = CStruct(
    "diamondhands_nonce" / U8,
    "nonce" / U8,
    "date_to_unfreeze" / U64,
    "amount" / U64,
)

ReleaseLockParamsLayout = CStruct("amount" / U64)

LockRecordLayout = CStruct(
    "owner" / PubkeyLayout,
    "diamondhands_account" / PubkeyLayout,
    "diamondhands_nonce" / U8,
    "gatekeeper" / PubkeyLayout,
    "nonce" / U8,
    "vault" / PubkeyLayout,
    "thawed" / Bool,
    "date_to_unfreeze" / U64,
)

# 32 + 32 + 1 + 32 + 1 + 32 + 1 + 8
LOCK_RECORD_SIZE = 139

# mint, owner, amount; the rest of the 165-byte account is not needed
TokenAccountPrefixLayout = CStruct(
    "mint" / PubkeyLayout,
    "owner" / PubkeyLayout,
    "amount" / U64,
)
TOKEN_ACCOUNT_PREFIX_SIZE = 72


def sighash(name: str) -> bytes:
    """Instruction discriminator for a snake_case instruction name."""
    return hashlib.sha256(f"global:{name}".encode()).digest()[:DISCRIMINATOR_SIZE]


def account_discriminator(name: str) -> bytes:
    """Account discriminator for a CamelCase account type name."""
    return hashlib.sha256(f"account:{name}".encode()).digest()[:DISCRIMINATOR_SIZE]


LOCK_RECORD_DISCRIMINATOR = account_discriminator(LOCK_RECORD_ACCOUNT_NAME)


def encode_create_lock_record(
    record_nonce: int,
    vault_authority_nonce: int,
    unlock_timestamp: int,
    amount: int,
) -> bytes:
    """Encode create_diamond_hands_account instruction data."""
    data = CreateLockRecordParamsLayout.build(
        {
            "diamondhands_nonce": record_nonce,
            "nonce": vault_authority_nonce,
            "date_to_unfreeze": unlock_timestamp,
            "amount": amount,
        }
    )
    return sighash(CREATE_LOCK_RECORD_IX_NAME) + data


def encode_release_lock(amount: int) -> bytes:
    """Encode unfreeze_assets instruction data."""
    data = ReleaseLockParamsLayout.build({"amount": amount})
    return sighash(RELEASE_LOCK_IX_NAME) + data


def _pubkey(raw) -> Pubkey:
    return Pubkey.from_bytes(bytes(raw))


def encode_lock_record(record: LockRecord) -> bytes:
    """Encode a snapshot as the program stores it (discriminator included)."""
    data = LockRecordLayout.build(
        {
            "owner": list(bytes(record.owner)),
            "diamondhands_account": list(bytes(record.record_address)),
            "diamondhands_nonce": record.record_nonce,
            "gatekeeper": list(bytes(record.vault_authority)),
            "nonce": record.vault_authority_nonce,
            "vault": list(bytes(record.vault)),
            "thawed": record.released,
            "date_to_unfreeze": record.unlock_timestamp,
        }
    )
    return LOCK_RECORD_DISCRIMINATOR + data


def decode_lock_record(address: str, data: bytes) -> LockRecord:
    """
    Decode DiamondHands account bytes into a LockRecord.

    Args:
        address: Account address (for error messages)
        data: Raw account data

    Returns:
        LockRecord snapshot

    Raises:
        AccountDecodeError: If the discriminator or length is wrong
    """
    data = bytes(data)
    if len(data) < DISCRIMINATOR_SIZE + LOCK_RECORD_SIZE:
        raise AccountDecodeError(
            address,
            f"expected {DISCRIMINATOR_SIZE + LOCK_RECORD_SIZE} bytes, got {len(data)}",
        )

    if data[:DISCRIMINATOR_SIZE] != LOCK_RECORD_DISCRIMINATOR:
        raise AccountDecodeError(address, "not a DiamondHands account")

    parsed = LockRecordLayout.parse(
        data[DISCRIMINATOR_SIZE : DISCRIMINATOR_SIZE + LOCK_RECORD_SIZE]
    )
    return LockRecord(
        owner=_pubkey(parsed.owner),
        record_address=_pubkey(parsed.diamondhands_account),
        record_nonce=parsed.diamondhands_nonce,
        vault_authority=_pubkey(parsed.gatekeeper),
        vault_authority_nonce=parsed.nonce,
        vault=_pubkey(parsed.vault),
        released=bool(parsed.thawed),
        unlock_timestamp=parsed.date_to_unfreeze,
    )


def decode_token_account_prefix(address: str, data: bytes) -> dict:
    """
    Decode mint, owner and amount from SPL token account bytes.

    Raises:
        AccountDecodeError: If the data is too short
    """
    data = bytes(data)
    if len(data) < TOKEN_ACCOUNT_PREFIX_SIZE:
        raise AccountDecodeError(
            address,
            f"token account data too short ({len(data)} bytes)",
        )

    parsed = TokenAccountPrefixLayout.parse(data[:TOKEN_ACCOUNT_PREFIX_SIZE])
    return {
        "mint": _pubkey(parsed.mint),
        "owner": _pubkey(parsed.owner),
        "amount": parsed.amount,
    }
