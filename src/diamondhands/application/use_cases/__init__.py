"""
DiamondHands use cases.
"""

from diamondhands.application.use_cases.check_lock_record_exists import (
    CheckLockRecordExists,
)
from diamondhands.application.use_cases.create_lock_record import CreateLockRecord
from diamondhands.application.use_cases.release_lock import ReleaseLock
from diamondhands.application.use_cases.resolve_lock_record import (
    ResolveLockRecord,
)

__all__ = [
    "CreateLockRecord",
    "ReleaseLock",
    "ResolveLockRecord",
    "CheckLockRecordExists",
]
