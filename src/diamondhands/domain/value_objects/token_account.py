"""
TokenAccount value object - Snapshot of an SPL token account.
"""

from dataclasses import dataclass

from solders.pubkey import Pubkey  # type: ignore


@dataclass(frozen=True)
class TokenAccount:
    """
    SPL token account as read from the ledger.

    Business rules:
    - amount is in base units and never negative
    - Immutable; re-fetch to observe balance changes
    """

    address: Pubkey
    mint: Pubkey
    owner: Pubkey
    amount: int

    def __post_init__(self):
        """Validate token account on creation."""
        if self.amount < 0:
            raise ValueError("Token amount cannot be negative")
