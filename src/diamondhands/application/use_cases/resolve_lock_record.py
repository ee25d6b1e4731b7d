"""
Resolve Lock Record use case.

Turns a record reference into a LockRecord snapshot, fetching only when
needed or when asked to refresh.
"""

from typing import Optional

from diamondhands.domain.entities.lock_record import LockRecord
from diamondhands.domain.value_objects.record_ref import BySnapshot, RecordRef
from diamondhands.infrastructure.blockchain.provider import DiamondHandsProvider
from diamondhands.infrastructure.monitoring import SystemReporter, get_reporter


class ResolveLockRecord:
    """
    Resolve a lock record reference.

    Rules:
    - ByAddress always fetches
    - BySnapshot is returned unchanged unless force_refresh is set
    - force_refresh re-fetches by the snapshot's own record_address
    """

    def __init__(
        self,
        provider: DiamondHandsProvider,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize use case with dependencies.

        Args:
            provider: Ledger session bound to the program
            reporter: Optional reporter
        """
        self.provider = provider
        self.reporter = reporter or get_reporter()

    async def execute(self, ref: RecordRef, force_refresh: bool = False) -> LockRecord:
        """
        Resolve the reference to a snapshot.

        Args:
            ref: ByAddress or BySnapshot
            force_refresh: Re-fetch even when a snapshot was given

        Returns:
            LockRecord snapshot (possibly stale for BySnapshot without refresh)

        Raises:
            AccountNotFoundError: If the record does not exist
            AccountDecodeError: If the account is not a lock record
            TransportError: If the fetch fails
        """
        if isinstance(ref, BySnapshot) and not force_refresh:
            return ref.record

        self.reporter.debug(
            f"Fetching lock record {ref.record_address}",
            context="ResolveLockRecord",
        )
        return await self.provider.ledger.fetch_lock_record(ref.record_address)
