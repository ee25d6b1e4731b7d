"""
Test fixtures and configuration.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from solders.keypair import Keypair  # type: ignore
from solders.pubkey import Pubkey  # type: ignore

from diamondhands.config import reset_settings
from diamondhands.domain.entities.lock_record import LockRecord
from diamondhands.domain.value_objects.token_account import TokenAccount
from diamondhands.infrastructure.blockchain.constants import (
    DIAMOND_HANDS_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from diamondhands.infrastructure.blockchain.ledger_client import LedgerClient
from diamondhands.infrastructure.blockchain.pda import (
    derive_lock_record_address,
    derive_vault_authority,
)
from diamondhands.infrastructure.blockchain.provider import DiamondHandsProvider
from diamondhands.infrastructure.blockchain.token_accounts import (
    get_associated_token_address,
)
from diamondhands.infrastructure.monitoring import SystemReporter, set_reporter

TOKEN_ACCOUNT_SIZE = 165


@pytest.fixture(autouse=True)
def isolated_globals():
    """Reset settings and reporter singletons around every test."""
    reset_settings()
    set_reporter(SystemReporter(name="diamondhands-test", verbose=0))
    yield
    reset_settings()
    set_reporter(None)


@pytest.fixture
def reporter() -> SystemReporter:
    """Quiet reporter for components under test."""
    return SystemReporter(name="diamondhands-test", verbose=0)


@pytest.fixture
def owner() -> Keypair:
    """Depositor keypair."""
    return Keypair()


@pytest.fixture
def mint() -> Pubkey:
    """Token mint."""
    return Pubkey.new_unique()


@pytest.fixture
def source_account(owner, mint) -> TokenAccount:
    """Depositor's token account holding 100 units."""
    return TokenAccount(
        address=get_associated_token_address(mint, owner.pubkey()),
        mint=mint,
        owner=owner.pubkey(),
        amount=100,
    )


@pytest.fixture
def lock_record(owner, mint) -> LockRecord:
    """Snapshot of the record derived for (owner, mint)."""
    record, record_nonce = derive_lock_record_address(owner.pubkey(), mint)
    authority, authority_nonce = derive_vault_authority(record)
    return LockRecord(
        owner=owner.pubkey(),
        record_address=record,
        record_nonce=record_nonce,
        vault_authority=authority,
        vault_authority_nonce=authority_nonce,
        vault=get_associated_token_address(mint, authority),
        released=False,
        unlock_timestamp=1_900_000_000,
    )


@pytest.fixture
def token_account_bytes():
    """Factory for raw SPL token account data."""

    def _build(mint: Pubkey, owner: Pubkey, amount: int) -> bytes:
        data = bytes(mint) + bytes(owner) + amount.to_bytes(8, "little")
        return data + bytes(TOKEN_ACCOUNT_SIZE - len(data))

    return _build


@pytest.fixture
def account_info():
    """Factory for get_account_info responses."""

    def _build(data: bytes = None, owner: Pubkey = TOKEN_PROGRAM_ID, lamports=2_039_280):
        if data is None:
            return SimpleNamespace(value=None)
        return SimpleNamespace(
            value=SimpleNamespace(data=data, owner=owner, lamports=lamports)
        )

    return _build


@pytest.fixture
def connection() -> AsyncMock:
    """Mocked solana-py AsyncClient."""
    return AsyncMock()


@pytest.fixture
def ledger(connection, reporter) -> LedgerClient:
    """LedgerClient over the mocked connection."""
    return LedgerClient(connection, commitment="confirmed", reporter=reporter)


@pytest.fixture
def mock_ledger() -> MagicMock:
    """LedgerClient double with async methods."""
    ledger = MagicMock(spec=LedgerClient)
    ledger.fetch_account = AsyncMock()
    ledger.fetch_lock_record = AsyncMock()
    ledger.fetch_token_account = AsyncMock()
    ledger.submit = AsyncMock(return_value="5" * 88)
    ledger.close = AsyncMock()
    return ledger


@pytest.fixture
def provider(mock_ledger) -> DiamondHandsProvider:
    """Provider over the ledger double."""
    return DiamondHandsProvider(ledger=mock_ledger, program_id=DIAMOND_HANDS_PROGRAM_ID)
