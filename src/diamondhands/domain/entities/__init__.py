"""Domain entities."""

from diamondhands.domain.entities.lock_record import LockRecord

__all__ = ["LockRecord"]
