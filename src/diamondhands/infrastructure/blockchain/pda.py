"""
Program-derived address helpers.

Seed order must match the program's own derivation:
- lock record:     [owner, mint]
- vault authority: [lock record]
"""

from typing import Tuple

from solders.pubkey import Pubkey  # type: ignore

from diamondhands.domain.exceptions import DerivationError
from diamondhands.infrastructure.blockchain.constants import DIAMOND_HANDS_PROGRAM_ID


def _find_program_address(
    seeds: list, program_id: Pubkey, description: str
) -> Tuple[Pubkey, int]:
    try:
        return Pubkey.find_program_address(seeds, program_id)
    except (KeyboardInterrupt, SystemExit):
        raise
    except BaseException as e:
        # solders reports an exhausted bump search as pyo3's PanicException,
        # which derives from BaseException
        raise DerivationError(description, str(e) or type(e).__name__) from e


def derive_lock_record_address(
    owner: Pubkey,
    mint: Pubkey,
    program_id: Pubkey = DIAMOND_HANDS_PROGRAM_ID,
) -> Tuple[Pubkey, int]:
    """
    Derive the lock record PDA for a depositor and token mint.

    Args:
        owner: Depositor wallet
        mint: Token mint
        program_id: DiamondHands program id

    Returns:
        Tuple of (record_address, bump_seed)

    Raises:
        DerivationError: If no valid bump exists

    Examples:
        >>> record, nonce = derive_lock_record_address(wallet, mint)
    """
    return _find_program_address(
        [bytes(owner), bytes(mint)],
        program_id,
        f"[owner={owner}, mint={mint}]",
    )


def derive_vault_authority(
    record_address: Pubkey,
    program_id: Pubkey = DIAMOND_HANDS_PROGRAM_ID,
) -> Tuple[Pubkey, int]:
    """
    Derive the vault authority PDA from a lock record address.

    Depends only on the record address, never on owner or mint directly.

    Args:
        record_address: Lock record PDA
        program_id: DiamondHands program id

    Returns:
        Tuple of (vault_authority, bump_seed)

    Raises:
        DerivationError: If no valid bump exists
    """
    return _find_program_address(
        [bytes(record_address)],
        program_id,
        f"[record={record_address}]",
    )
