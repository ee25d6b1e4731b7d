"""
LockOptions value object - Parameters of a create-lock request.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from diamondhands.domain.exceptions import ValidationError

DEFAULT_DAYS_TO_LOCK = 100
DEFAULT_UNLOCK_BUFFER_SECONDS = 10


@dataclass(frozen=True)
class LockOptions:
    """
    How long and how much to lock.

    Defaults:
    - unlock_date: None, meaning now + unlock_buffer_seconds + days_to_lock days
    - days_to_lock: 100 (ignored when unlock_date is set)
    - amount: None, meaning the full balance of the source token account
    - unlock_buffer_seconds: 10, headroom for transaction processing latency

    The buffer is measured on the client clock while the program checks
    against the ledger clock, so it is a tunable rather than a guarantee.
    """

    days_to_lock: int = DEFAULT_DAYS_TO_LOCK
    unlock_date: Optional[datetime] = None
    amount: Optional[int] = None
    unlock_buffer_seconds: int = DEFAULT_UNLOCK_BUFFER_SECONDS

    def __post_init__(self):
        """Validate options on creation."""
        if self.days_to_lock < 0:
            raise ValidationError("days_to_lock", "cannot be negative")

        if self.amount is not None and self.amount < 0:
            raise ValidationError("amount", "cannot be negative")

        if self.unlock_buffer_seconds < 0:
            raise ValidationError("unlock_buffer_seconds", "cannot be negative")

        if self.unlock_date is not None and self.unlock_date.timestamp() < 0:
            raise ValidationError("unlock_date", "must be after the Unix epoch")

    def resolve_unlock_timestamp(self, now: Optional[datetime] = None) -> int:
        """
        Unlock time in whole seconds since the epoch.

        Args:
            now: Reference time (defaults to current UTC time)

        Returns:
            unlock_date if given, else now + buffer + days_to_lock days,
            truncated to whole seconds
        """
        if self.unlock_date is not None:
            return int(self.unlock_date.timestamp())

        now = now or datetime.now(timezone.utc)
        unlock = now + timedelta(
            days=self.days_to_lock, seconds=self.unlock_buffer_seconds
        )
        return int(unlock.timestamp())

    def resolve_amount(self, balance: int) -> int:
        """Amount to lock given the source account balance."""
        return balance if self.amount is None else self.amount
