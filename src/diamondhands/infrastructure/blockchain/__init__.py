"""Ledger access, encodings and address derivation for DiamondHands."""

from diamondhands.infrastructure.blockchain.constants import DIAMOND_HANDS_PROGRAM_ID
from diamondhands.infrastructure.blockchain.keypairs import load_keypair
from diamondhands.infrastructure.blockchain.ledger_client import (
    AccountFetchResult,
    FetchStatus,
    LedgerClient,
)
from diamondhands.infrastructure.blockchain.pda import (
    derive_lock_record_address,
    derive_vault_authority,
)
from diamondhands.infrastructure.blockchain.provider import DiamondHandsProvider
from diamondhands.infrastructure.blockchain.token_accounts import (
    VaultResolution,
    get_associated_token_address,
    resolve_vault_and_existence,
)

__all__ = [
    "DIAMOND_HANDS_PROGRAM_ID",
    "load_keypair",
    "AccountFetchResult",
    "FetchStatus",
    "LedgerClient",
    "derive_lock_record_address",
    "derive_vault_authority",
    "DiamondHandsProvider",
    "VaultResolution",
    "get_associated_token_address",
    "resolve_vault_and_existence",
]
