"""
Unit tests for instruction builders.

Usage:
    pytest tests/unit/infrastructure/test_instructions.py
"""

from solders.pubkey import Pubkey  # type: ignore

from diamondhands.infrastructure.blockchain.constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    DIAMOND_HANDS_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from diamondhands.infrastructure.blockchain.instructions import (
    build_create_lock_record_instruction,
    build_create_vault_instruction,
    build_release_lock_instruction,
)
from diamondhands.infrastructure.blockchain.layouts import (
    encode_create_lock_record,
    encode_release_lock,
)
from diamondhands.infrastructure.blockchain.token_accounts import (
    get_associated_token_address,
)


class TestLockInstructions:
    """Unit tests for create and release instructions."""

    def test_create_lock_record_accounts(self, lock_record, source_account):
        """Seven accounts in program order, owner signs."""
        ix = build_create_lock_record_instruction(
            record=lock_record.record_address,
            record_nonce=lock_record.record_nonce,
            vault_authority=lock_record.vault_authority,
            vault_authority_nonce=lock_record.vault_authority_nonce,
            vault=lock_record.vault,
            source_token_account=source_account.address,
            source_owner=source_account.owner,
            unlock_timestamp=1_900_000_000,
            amount=100,
        )

        assert ix.program_id == DIAMOND_HANDS_PROGRAM_ID
        assert [meta.pubkey for meta in ix.accounts] == [
            lock_record.record_address,
            lock_record.vault_authority,
            lock_record.vault,
            source_account.address,
            source_account.owner,
            TOKEN_PROGRAM_ID,
            SYSTEM_PROGRAM_ID,
        ]
        assert [meta.is_signer for meta in ix.accounts] == [
            False, False, False, False, True, False, False,
        ]
        assert [meta.is_writable for meta in ix.accounts] == [
            True, False, True, True, True, False, False,
        ]
        assert bytes(ix.data) == encode_create_lock_record(
            lock_record.record_nonce,
            lock_record.vault_authority_nonce,
            1_900_000_000,
            100,
        )

    def test_release_lock_accounts(self, lock_record, source_account):
        """Release uses the same account order with the destination account."""
        program_id = Pubkey.new_unique()
        ix = build_release_lock_instruction(
            record=lock_record.record_address,
            vault_authority=lock_record.vault_authority,
            vault=lock_record.vault,
            destination_token_account=source_account.address,
            destination_owner=source_account.owner,
            amount=25,
            program_id=program_id,
        )

        assert ix.program_id == program_id
        assert ix.accounts[3].pubkey == source_account.address
        assert ix.accounts[4].pubkey == source_account.owner
        assert ix.accounts[4].is_signer
        assert bytes(ix.data) == encode_release_lock(25)


class TestVaultInstruction:
    """Unit tests for vault creation."""

    def test_creates_associated_account_for_authority(self, lock_record, owner, mint):
        ix = build_create_vault_instruction(
            payer=owner.pubkey(),
            vault_authority=lock_record.vault_authority,
            mint=mint,
        )

        assert ix.program_id == ASSOCIATED_TOKEN_PROGRAM_ID
        assert ix.accounts[0].pubkey == owner.pubkey()
        assert ix.accounts[0].is_signer
        assert ix.accounts[1].pubkey == get_associated_token_address(
            mint, lock_record.vault_authority
        )
