"""
Create Lock Record use case.

Locks a token balance in a program-owned vault until the unlock time.
"""

from datetime import datetime, timezone
from typing import Optional

from solders.keypair import Keypair  # type: ignore

from diamondhands.domain.entities.lock_record import LockRecord
from diamondhands.domain.exceptions import ProgramRejectionError, ValidationError
from diamondhands.domain.value_objects.lock_options import LockOptions
from diamondhands.domain.value_objects.token_account import TokenAccount
from diamondhands.infrastructure.blockchain.constants import PROGRAM_MIN_LOCK_SECONDS
from diamondhands.infrastructure.blockchain.instructions import (
    build_create_lock_record_instruction,
    build_create_vault_instruction,
)
from diamondhands.infrastructure.blockchain.pda import (
    derive_lock_record_address,
    derive_vault_authority,
)
from diamondhands.infrastructure.blockchain.provider import DiamondHandsProvider
from diamondhands.infrastructure.blockchain.token_accounts import (
    resolve_vault_and_existence,
)
from diamondhands.infrastructure.monitoring import SystemReporter, get_reporter


class CreateLockRecord:
    """
    Create a lock record and move tokens into its vault.

    Business rules:
    - One record per (owner, mint); the program rejects a second creation
    - The vault is created in the same transaction when it does not exist
    - Amount defaults to the full balance of the source token account
    - Duplicates are not pre-checked; the program's rejection propagates
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

    async def execute(
        self,
        signer: Keypair,
        token_account: TokenAccount,
        options: Optional[LockOptions] = None,
        now: Optional[datetime] = None,
    ) -> LockRecord:
        """
        Lock tokens from ``token_account``.

        Args:
            signer: Owner of the token account; signs and pays fees
            token_account: Source token account
            options: Lock duration and amount (defaults to LockOptions())
            now: Reference time for the unlock computation

        Returns:
            Freshly fetched LockRecord

        Raises:
            ValidationError: If the signer does not own the token account
            DerivationError: If an address cannot be derived
            TransportError: If an RPC call fails
            ProgramRejectionError: If the program refuses the lock
        """
        options = options or LockOptions()
        owner = signer.pubkey()
        program_id = self.provider.program_id

        if token_account.owner != owner:
            raise ValidationError(
                "signer",
                f"{owner} does not own token account {token_account.address}",
            )

        # 1. Derive addresses
        record, record_nonce = derive_lock_record_address(
            owner, token_account.mint, program_id
        )
        vault_authority, vault_authority_nonce = derive_vault_authority(
            record, program_id
        )
        self.reporter.info(
            f"Lock record {record} (nonce {record_nonce}), "
            f"vault authority {vault_authority} (nonce {vault_authority_nonce})",
            context="CreateLockRecord",
        )

        # 2. Resolve vault
        resolution = await resolve_vault_and_existence(
            self.provider.ledger, token_account.mint, vault_authority
        )
        self.reporter.info(
            f"Vault {resolution.vault} "
            f"({'exists' if resolution.exists else 'will be created'})",
            context="CreateLockRecord",
        )

        # 3. Resolve options
        now = now or datetime.now(timezone.utc)
        unlock_timestamp = options.resolve_unlock_timestamp(now)
        if unlock_timestamp - int(now.timestamp()) < PROGRAM_MIN_LOCK_SECONDS:
            self.reporter.warning(
                f"Unlock at {unlock_timestamp} is under the program's 100 hour "
                "minimum; expect FreezeTimeTooShort",
                context="CreateLockRecord",
            )
        amount = options.resolve_amount(token_account.amount)
        self.reporter.info(
            f"Locking {amount} until {unlock_timestamp}",
            context="CreateLockRecord",
        )

        # 4. Build and submit
        instructions = []
        if resolution.needs_creation:
            instructions.append(
                build_create_vault_instruction(
                    payer=owner,
                    vault_authority=vault_authority,
                    mint=token_account.mint,
                )
            )
        instructions.append(
            build_create_lock_record_instruction(
                record=record,
                record_nonce=record_nonce,
                vault_authority=vault_authority,
                vault_authority_nonce=vault_authority_nonce,
                vault=resolution.vault,
                source_token_account=token_account.address,
                source_owner=token_account.owner,
                unlock_timestamp=unlock_timestamp,
                amount=amount,
                program_id=program_id,
            )
        )

        try:
            signature = await self.provider.ledger.submit(instructions, signer)
        except ProgramRejectionError as e:
            self.reporter.error(
                f"Lock rejected for {record}: {e.message}",
                context="CreateLockRecord",
            )
            raise

        self.reporter.info(f"Locked: {signature}", context="CreateLockRecord")

        # 5. Forced refresh
        return await self.provider.ledger.fetch_lock_record(record)
