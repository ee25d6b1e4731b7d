"""Domain value objects."""

from diamondhands.domain.value_objects.lock_options import (
    DEFAULT_DAYS_TO_LOCK,
    DEFAULT_UNLOCK_BUFFER_SECONDS,
    LockOptions,
)
from diamondhands.domain.value_objects.record_ref import (
    ByAddress,
    BySnapshot,
    RecordRef,
    record_ref,
)
from diamondhands.domain.value_objects.token_account import TokenAccount

__all__ = [
    "LockOptions",
    "DEFAULT_DAYS_TO_LOCK",
    "DEFAULT_UNLOCK_BUFFER_SECONDS",
    "ByAddress",
    "BySnapshot",
    "RecordRef",
    "record_ref",
    "TokenAccount",
]
