"""
Ledger client: the only place that performs RPC calls.

Wraps solana-py's AsyncClient with:
- Explicit fetch outcomes (FOUND / NOT_FOUND) instead of catch-all absence
- Transport failures raised as TransportError
- Program failures raised as ProgramRejectionError, never retried
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.core import (
    RPCException,
    TransactionExpiredBlockheightExceededError,
    UnconfirmedTxError,
)
from solana.rpc.types import TxOpts
from solders.instruction import Instruction  # type: ignore
from solders.keypair import Keypair  # type: ignore
from solders.message import Message  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from solders.rpc.errors import SendTransactionPreflightFailureMessage  # type: ignore
from solders.transaction import Transaction  # type: ignore
from solders.transaction_status import (  # type: ignore
    InstructionErrorCustom,
    TransactionErrorInstructionError,
)

from diamondhands.domain.entities.lock_record import LockRecord
from diamondhands.domain.exceptions import (
    AccountDecodeError,
    AccountNotFoundError,
    ProgramErrorCode,
    ProgramRejectionError,
    TransportError,
)
from diamondhands.domain.value_objects.token_account import TokenAccount
from diamondhands.infrastructure.blockchain.constants import TOKEN_PROGRAM_ID
from diamondhands.infrastructure.blockchain.layouts import (
    decode_lock_record,
    decode_token_account_prefix,
)
from diamondhands.infrastructure.monitoring import SystemReporter, get_reporter

TRANSPORT_EXCEPTIONS = (
    SolanaRpcException,
    httpx.HTTPError,
    UnconfirmedTxError,
    TransactionExpiredBlockheightExceededError,
)


class FetchStatus(Enum):
    """Outcome of an account fetch."""

    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class AccountFetchResult:
    """Raw account bytes, or the explicit absence of an account."""

    address: Pubkey
    status: FetchStatus
    data: Optional[bytes] = None
    owner: Optional[Pubkey] = None
    lamports: int = 0

    @property
    def found(self) -> bool:
        return self.status is FetchStatus.FOUND


def _custom_error_code(err) -> Optional[int]:
    """Custom program error code from a transaction error, if there is one."""
    if isinstance(err, TransactionErrorInstructionError):
        if isinstance(err.err, InstructionErrorCustom):
            return err.err.code
    return None


class LedgerClient:
    """
    Async ledger access for the DiamondHands client.

    Holds one AsyncClient connection. No retries and no client-side
    timeout beyond the connection's own.
    """

    def __init__(
        self,
        connection: AsyncClient,
        commitment: str = "confirmed",
        error_code_offset: int = 300,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize ledger client.

        Args:
            connection: solana-py AsyncClient
            commitment: Commitment level for reads and confirmation
            error_code_offset: First custom error code of the program
            reporter: Optional reporter (defaults to process-wide reporter)
        """
        self.connection = connection
        self.commitment = commitment
        self.error_code_offset = error_code_offset
        self.reporter = reporter or get_reporter()

    @classmethod
    def connect(
        cls,
        rpc_url: str,
        commitment: str = "confirmed",
        timeout: float = 10.0,
        error_code_offset: int = 300,
        reporter: Optional[SystemReporter] = None,
    ) -> "LedgerClient":
        """Open an AsyncClient connection to ``rpc_url``."""
        connection = AsyncClient(rpc_url, commitment=commitment, timeout=timeout)
        return cls(
            connection,
            commitment=commitment,
            error_code_offset=error_code_offset,
            reporter=reporter,
        )

    # ================================================================
    # Reads
    # ================================================================

    async def fetch_account(self, address: Pubkey) -> AccountFetchResult:
        """
        Fetch raw account state.

        Args:
            address: Account address

        Returns:
            AccountFetchResult with FOUND or NOT_FOUND status

        Raises:
            TransportError: If the RPC call fails
        """
        self.reporter.debug(f"Fetching account {address}", context="LedgerClient")
        try:
            response = await self.connection.get_account_info(
                address, commitment=self.commitment
            )
        except RPCException as e:
            raise TransportError(
                f"RPC error fetching {address}: {e}",
                details={"address": str(address)},
            ) from e
        except TRANSPORT_EXCEPTIONS as e:
            raise TransportError(
                f"RPC connection error fetching {address}: {e}",
                details={"address": str(address)},
            ) from e

        account = response.value
        if account is None:
            return AccountFetchResult(address=address, status=FetchStatus.NOT_FOUND)

        return AccountFetchResult(
            address=address,
            status=FetchStatus.FOUND,
            data=bytes(account.data),
            owner=account.owner,
            lamports=account.lamports,
        )

    async def fetch_lock_record(self, address: Pubkey) -> LockRecord:
        """
        Fetch and decode a lock record.

        Raises:
            AccountNotFoundError: If no account exists at the address
            AccountDecodeError: If the account is not a lock record
            TransportError: If the RPC call fails
        """
        result = await self.fetch_account(address)
        if not result.found:
            raise AccountNotFoundError(str(address), account_type="Lock record")
        return decode_lock_record(str(address), result.data)

    async def fetch_token_account(self, address: Pubkey) -> TokenAccount:
        """
        Fetch and decode an SPL token account.

        Raises:
            AccountNotFoundError: If no account exists at the address
            AccountDecodeError: If the account is not owned by the token program
            TransportError: If the RPC call fails
        """
        result = await self.fetch_account(address)
        if not result.found:
            raise AccountNotFoundError(str(address), account_type="Token account")

        if result.owner != TOKEN_PROGRAM_ID:
            raise AccountDecodeError(
                str(address), f"owned by {result.owner}, not the token program"
            )

        fields = decode_token_account_prefix(str(address), result.data)
        return TokenAccount(address=address, **fields)

    # ================================================================
    # Writes
    # ================================================================

    async def submit(
        self, instructions: Sequence[Instruction], signer: Keypair
    ) -> str:
        """
        Sign with ``signer`` (also fee payer), send and confirm.

        Args:
            instructions: Instructions in execution order
            signer: Keypair signing and paying for the transaction

        Returns:
            Transaction signature (base58)

        Raises:
            ProgramRejectionError: If an instruction fails in preflight or
                execution
            TransportError: If the RPC call fails, confirmation times out, or
                the ledger refuses the transaction before any program runs
        """
        try:
            blockhash_resp = await self.connection.get_latest_blockhash(
                commitment=self.commitment
            )
            blockhash = blockhash_resp.value.blockhash
            message = Message.new_with_blockhash(
                list(instructions), signer.pubkey(), blockhash
            )
            transaction = Transaction([signer], message, blockhash)

            self.reporter.info(
                f"Submitting transaction with {len(instructions)} instruction(s)",
                context="LedgerClient",
            )
            response = await self.connection.send_transaction(
                transaction,
                opts=TxOpts(
                    skip_confirmation=False,
                    preflight_commitment=self.commitment,
                    last_valid_block_height=blockhash_resp.value.last_valid_block_height,
                ),
            )
            signature = response.value

            statuses = await self.connection.get_signature_statuses([signature])
        except RPCException as e:
            raise self._rejection_from_rpc_error(e) from e
        except TRANSPORT_EXCEPTIONS as e:
            raise TransportError(f"Transaction submission failed: {e}") from e

        status = statuses.value[0] if statuses.value else None
        if status is not None and status.err is not None:
            raise self._classify_failure(
                f"Transaction {signature} failed", status.err, logs=[]
            )

        self.reporter.info(
            f"Transaction confirmed: {signature}", context="LedgerClient"
        )
        return str(signature)

    def _classify_failure(
        self, message: str, err, logs: Optional[List[str]]
    ) -> Exception:
        """
        Only instruction errors mean a program refused the transaction.

        Ledger-level failures (expired blockhash, unfunded fee payer, ...)
        happen before any program runs and are reported as TransportError.
        """
        if isinstance(err, TransactionErrorInstructionError):
            return self._rejection(message, err, logs)
        return TransportError(
            f"{message}: {err}",
            details={"error": str(err), "logs": list(logs or [])},
        )

    def _rejection(
        self, message: str, err, logs: Optional[List[str]]
    ) -> ProgramRejectionError:
        code = _custom_error_code(err)
        error = (
            ProgramErrorCode.from_code(code, self.error_code_offset)
            if code is not None
            else None
        )
        return ProgramRejectionError(
            message, custom_code=code, error=error, logs=logs
        )

    def _rejection_from_rpc_error(self, exc: RPCException) -> Exception:
        payload = exc.args[0] if exc.args else None
        if isinstance(payload, SendTransactionPreflightFailureMessage):
            return self._classify_failure(
                payload.message, payload.data.err, logs=payload.data.logs
            )
        return TransportError(f"RPC error: {exc}")

    async def close(self) -> None:
        """Close the underlying connection."""
        await self.connection.close()
