"""
Reference to a lock record: either its address or a fetched snapshot.

Passing a snapshot lets callers skip a fetch at the price of possibly
stale state. Passing an address always reads the ledger.
"""

from dataclasses import dataclass
from typing import Union

from solders.pubkey import Pubkey  # type: ignore

from diamondhands.domain.entities.lock_record import LockRecord
from diamondhands.domain.exceptions import ValidationError


@dataclass(frozen=True)
class ByAddress:
    """Record identified by address; resolving it always fetches."""

    address: Pubkey

    @property
    def record_address(self) -> Pubkey:
        return self.address


@dataclass(frozen=True)
class BySnapshot:
    """Record already materialized; may be stale."""

    record: LockRecord

    @property
    def record_address(self) -> Pubkey:
        return self.record.record_address


RecordRef = Union[ByAddress, BySnapshot]


def record_ref(value: Union[RecordRef, LockRecord, Pubkey, str]) -> RecordRef:
    """
    Coerce an address, base58 string or snapshot into a RecordRef.

    Args:
        value: ByAddress, BySnapshot, LockRecord, Pubkey or base58 string

    Returns:
        RecordRef for the value

    Raises:
        ValidationError: If a string is not a valid address
    """
    if isinstance(value, (ByAddress, BySnapshot)):
        return value
    if isinstance(value, LockRecord):
        return BySnapshot(value)
    if isinstance(value, Pubkey):
        return ByAddress(value)
    if isinstance(value, str):
        try:
            return ByAddress(Pubkey.from_string(value))
        except ValueError as e:
            raise ValidationError("record", f"invalid address {value!r}: {e}")
    raise ValidationError("record", f"unsupported type {type(value).__name__}")
