"""
Unit tests for record references.

Usage:
    pytest tests/unit/domain/test_record_ref.py
"""

import pytest
from solders.pubkey import Pubkey  # type: ignore

from diamondhands.domain.exceptions import ValidationError
from diamondhands.domain.value_objects.record_ref import (
    ByAddress,
    BySnapshot,
    record_ref,
)


class TestRecordRef:
    """Unit tests for ByAddress, BySnapshot and record_ref."""

    def test_record_address_of_both_variants(self, lock_record):
        """Both variants expose the record address."""
        assert ByAddress(lock_record.record_address).record_address == (
            lock_record.record_address
        )
        assert BySnapshot(lock_record).record_address == lock_record.record_address

    def test_coerces_snapshot(self, lock_record):
        """A LockRecord becomes a BySnapshot."""
        ref = record_ref(lock_record)

        assert isinstance(ref, BySnapshot)
        assert ref.record is lock_record

    def test_coerces_pubkey_and_string(self):
        """Addresses become ByAddress."""
        address = Pubkey.new_unique()

        assert record_ref(address) == ByAddress(address)
        assert record_ref(str(address)) == ByAddress(address)

    def test_passes_refs_through(self, lock_record):
        """Existing refs are returned unchanged."""
        ref = ByAddress(lock_record.record_address)

        assert record_ref(ref) is ref

    def test_rejects_bad_string(self):
        """Invalid base58 is a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            record_ref("not-an-address")

        assert exc_info.value.field == "record"

    def test_rejects_unsupported_type(self):
        """Other types are refused."""
        with pytest.raises(ValidationError):
            record_ref(42)
