"""
DiamondHands provider: one ledger session bound to one program id.
"""

from dataclasses import dataclass
from typing import Optional

from solders.pubkey import Pubkey  # type: ignore

from diamondhands.config.settings import DiamondHandsSettings
from diamondhands.infrastructure.blockchain.constants import DIAMOND_HANDS_PROGRAM_ID
from diamondhands.infrastructure.blockchain.ledger_client import LedgerClient
from diamondhands.infrastructure.monitoring import SystemReporter


@dataclass(frozen=True)
class DiamondHandsProvider:
    """
    Immutable session: ledger connection plus program id.

    Constructed once per session and shared by every use case. Signers are
    passed to each operation, never stored here.
    """

    ledger: LedgerClient
    program_id: Pubkey = DIAMOND_HANDS_PROGRAM_ID

    @classmethod
    def create(
        cls,
        rpc_url: str,
        program_id: Pubkey = DIAMOND_HANDS_PROGRAM_ID,
        commitment: str = "confirmed",
        timeout: float = 10.0,
        error_code_offset: int = 300,
        reporter: Optional[SystemReporter] = None,
    ) -> "DiamondHandsProvider":
        """
        Open a connection and bind it to the program.

        Args:
            rpc_url: Solana RPC endpoint URL
            program_id: DiamondHands program id
            commitment: Commitment level
            timeout: Connection timeout in seconds
            error_code_offset: First custom error code of the program
            reporter: Optional reporter

        Returns:
            DiamondHandsProvider instance
        """
        ledger = LedgerClient.connect(
            rpc_url,
            commitment=commitment,
            timeout=timeout,
            error_code_offset=error_code_offset,
            reporter=reporter,
        )
        return cls(ledger=ledger, program_id=program_id)

    @classmethod
    def from_settings(
        cls,
        settings: DiamondHandsSettings,
        reporter: Optional[SystemReporter] = None,
    ) -> "DiamondHandsProvider":
        """Build a provider from application settings."""
        return cls.create(
            rpc_url=settings.solana_rpc_url,
            program_id=Pubkey.from_string(settings.program_id),
            commitment=settings.commitment,
            timeout=settings.rpc_timeout,
            error_code_offset=settings.error_code_offset,
            reporter=reporter,
        )

    async def close(self) -> None:
        """Close the ledger connection."""
        await self.ledger.close()

    async def __aenter__(self) -> "DiamondHandsProvider":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
