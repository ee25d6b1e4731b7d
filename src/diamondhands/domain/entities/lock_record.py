"""
LockRecord entity - Local snapshot of an on-chain DiamondHands account.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from solders.pubkey import Pubkey  # type: ignore


@dataclass(frozen=True)
class LockRecord:
    """
    Read-only snapshot of a lock record as of the last fetch.

    Business rules:
    - record_address is derived from (owner, mint) under the program id
    - vault_authority is derived from record_address alone
    - vault is the associated token account of (mint, vault_authority)
    - Only the program mutates the record; a snapshot may be stale
    - Two snapshots describe the same record iff their record_address match
    """

    owner: Pubkey
    record_address: Pubkey
    record_nonce: int
    vault_authority: Pubkey
    vault_authority_nonce: int
    vault: Pubkey
    released: bool
    unlock_timestamp: int

    def __post_init__(self):
        """Validate snapshot fields."""
        for name in ("record_nonce", "vault_authority_nonce"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must fit in a byte, got {value}")

        if self.unlock_timestamp < 0:
            raise ValueError("unlock_timestamp cannot be negative")

    @property
    def unlocks_at(self) -> datetime:
        """Unlock time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.unlock_timestamp, tz=timezone.utc)

    def is_unlockable(self, now: Optional[datetime] = None) -> bool:
        """
        Check whether the program would accept a release at ``now``.

        Judged by the local clock; the program checks its own clock.
        """
        now = now or datetime.now(timezone.utc)
        return not self.released and now.timestamp() >= self.unlock_timestamp

    def same_record(self, other: "LockRecord") -> bool:
        """Whether both snapshots refer to the same on-chain record."""
        if not isinstance(other, LockRecord):
            return False
        return self.record_address == other.record_address

    def to_dict(self) -> dict:
        """Convert snapshot to dictionary representation."""
        return {
            "owner": str(self.owner),
            "record_address": str(self.record_address),
            "record_nonce": self.record_nonce,
            "vault_authority": str(self.vault_authority),
            "vault_authority_nonce": self.vault_authority_nonce,
            "vault": str(self.vault),
            "released": self.released,
            "unlock_timestamp": self.unlock_timestamp,
            "unlocks_at": self.unlocks_at.isoformat(),
        }
