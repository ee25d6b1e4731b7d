"""
Release Lock use case.

Moves tokens from a lock record's vault back to the owner once the
unlock time has passed.
"""

from typing import Optional

from solders.keypair import Keypair  # type: ignore

from diamondhands.application.use_cases.resolve_lock_record import (
    ResolveLockRecord,
)
from diamondhands.domain.entities.lock_record import LockRecord
from diamondhands.domain.exceptions import ProgramRejectionError, ValidationError
from diamondhands.domain.value_objects.record_ref import RecordRef
from diamondhands.domain.value_objects.token_account import TokenAccount
from diamondhands.infrastructure.blockchain.instructions import (
    build_release_lock_instruction,
)
from diamondhands.infrastructure.blockchain.provider import DiamondHandsProvider
from diamondhands.infrastructure.monitoring import SystemReporter, get_reporter


class ReleaseLock:
    """
    Release tokens from a lock record's vault.

    Business rules:
    - Amount defaults to the full current vault balance (always fetched)
    - The program rejects release before the unlock time; the rejection
      propagates unchanged and is never retried
    - The record is flagged released only when the whole vault is drained
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
        self.resolver = ResolveLockRecord(provider, reporter=self.reporter)

    async def execute(
        self,
        signer: Keypair,
        ref: RecordRef,
        token_account: TokenAccount,
        amount: Optional[int] = None,
    ) -> LockRecord:
        """
        Release tokens into ``token_account``.

        Args:
            signer: Record owner; signs and pays fees
            ref: Record address or snapshot (snapshot used as-is)
            token_account: Destination token account owned by the signer
            amount: Base units to release (defaults to whole vault balance)

        Returns:
            Freshly fetched LockRecord

        Raises:
            ValidationError: If amount is negative or signer does not own
                the destination
            AccountNotFoundError: If the record or vault does not exist
            TransportError: If an RPC call fails
            ProgramRejectionError: If the program refuses the release
        """
        if amount is not None and amount < 0:
            raise ValidationError("amount", "cannot be negative")

        if token_account.owner != signer.pubkey():
            raise ValidationError(
                "signer",
                f"{signer.pubkey()} does not own token account {token_account.address}",
            )

        # 1. Resolve record
        record = await self.resolver.execute(ref)

        # 2. Current vault balance
        vault = await self.provider.ledger.fetch_token_account(record.vault)
        amount = vault.amount if amount is None else amount
        self.reporter.info(
            f"Releasing {amount} of {vault.amount} from {record.vault}",
            context="ReleaseLock",
        )

        # 3. Submit
        instruction = build_release_lock_instruction(
            record=record.record_address,
            vault_authority=record.vault_authority,
            vault=record.vault,
            destination_token_account=token_account.address,
            destination_owner=token_account.owner,
            amount=amount,
            program_id=self.provider.program_id,
        )

        try:
            signature = await self.provider.ledger.submit([instruction], signer)
        except ProgramRejectionError as e:
            self.reporter.error(
                f"Release rejected for {record.record_address}: {e.message}",
                context="ReleaseLock",
            )
            raise

        self.reporter.info(f"Released: {signature}", context="ReleaseLock")

        # 4. Forced refresh
        return await self.provider.ledger.fetch_lock_record(record.record_address)
