"""
Instruction builders for the DiamondHands program.

Account order follows the program's account structs; both instructions
take the same seven accounts.
"""

from typing import List

from solders.instruction import AccountMeta, Instruction  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from spl.token.instructions import create_associated_token_account

from diamondhands.infrastructure.blockchain.constants import (
    DIAMOND_HANDS_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from diamondhands.infrastructure.blockchain.layouts import (
    encode_create_lock_record,
    encode_release_lock,
)


def _lock_accounts(
    record: Pubkey,
    vault_authority: Pubkey,
    vault: Pubkey,
    token_account: Pubkey,
    owner: Pubkey,
) -> List[AccountMeta]:
    return [
        AccountMeta(pubkey=record, is_signer=False, is_writable=True),
        AccountMeta(pubkey=vault_authority, is_signer=False, is_writable=False),
        AccountMeta(pubkey=vault, is_signer=False, is_writable=True),
        AccountMeta(pubkey=token_account, is_signer=False, is_writable=True),
        AccountMeta(pubkey=owner, is_signer=True, is_writable=True),
        AccountMeta(pubkey=TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(pubkey=SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
    ]


def build_create_lock_record_instruction(
    record: Pubkey,
    record_nonce: int,
    vault_authority: Pubkey,
    vault_authority_nonce: int,
    vault: Pubkey,
    source_token_account: Pubkey,
    source_owner: Pubkey,
    unlock_timestamp: int,
    amount: int,
    program_id: Pubkey = DIAMOND_HANDS_PROGRAM_ID,
) -> Instruction:
    """
    Build the create-lock-record instruction.

    Moves ``amount`` from the source token account into the vault and
    initializes the record at ``record``.

    Args:
        record: Lock record PDA (created by the program)
        record_nonce: Bump seed of the record PDA
        vault_authority: Vault authority PDA
        vault_authority_nonce: Bump seed of the vault authority PDA
        vault: Associated token account of (mint, vault_authority)
        source_token_account: Depositor's token account
        source_owner: Depositor wallet (signer and rent payer)
        unlock_timestamp: Seconds since the epoch
        amount: Base units to lock
        program_id: DiamondHands program id

    Returns:
        Instruction ready to be placed in a transaction
    """
    data = encode_create_lock_record(
        record_nonce=record_nonce,
        vault_authority_nonce=vault_authority_nonce,
        unlock_timestamp=unlock_timestamp,
        amount=amount,
    )
    accounts = _lock_accounts(
        record, vault_authority, vault, source_token_account, source_owner
    )
    return Instruction(program_id, data, accounts)


def build_release_lock_instruction(
    record: Pubkey,
    vault_authority: Pubkey,
    vault: Pubkey,
    destination_token_account: Pubkey,
    destination_owner: Pubkey,
    amount: int,
    program_id: Pubkey = DIAMOND_HANDS_PROGRAM_ID,
) -> Instruction:
    """
    Build the release instruction.

    Moves ``amount`` from the vault back to the destination token account.
    """
    data = encode_release_lock(amount)
    accounts = _lock_accounts(
        record, vault_authority, vault, destination_token_account, destination_owner
    )
    return Instruction(program_id, data, accounts)


def build_create_vault_instruction(
    payer: Pubkey, vault_authority: Pubkey, mint: Pubkey
) -> Instruction:
    """Associated token account creation for (mint, vault_authority)."""
    return create_associated_token_account(
        payer=payer, owner=vault_authority, mint=mint
    )
