"""
Check Lock Record Exists use case.
"""

from typing import Optional

from diamondhands.application.use_cases.resolve_lock_record import (
    ResolveLockRecord,
)
from diamondhands.domain.exceptions import AccountNotFoundError
from diamondhands.domain.value_objects.record_ref import RecordRef
from diamondhands.infrastructure.blockchain.provider import DiamondHandsProvider
from diamondhands.infrastructure.monitoring import SystemReporter, get_reporter


class CheckLockRecordExists:
    """
    Check whether a lock record exists on-chain.

    Always reads the ledger, even for snapshots. Only a missing account
    yields False; transport and decode failures propagate.
    """

    def __init__(
        self,
        provider: DiamondHandsProvider,
        reporter: Optional[SystemReporter] = None,
    ):
        self.provider = provider
        self.reporter = reporter or get_reporter()
        self.resolver = ResolveLockRecord(provider, reporter=self.reporter)

    async def execute(self, ref: RecordRef) -> bool:
        """
        Check record existence.

        Args:
            ref: ByAddress or BySnapshot

        Returns:
            True if a lock record lives at the referenced address

        Raises:
            AccountDecodeError: If another kind of account lives there
            TransportError: If the fetch fails
        """
        try:
            await self.resolver.execute(ref, force_refresh=True)
        except AccountNotFoundError:
            return False
        return True
