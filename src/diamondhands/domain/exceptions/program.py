"""
Errors raised by the DiamondHands program itself.

The program numbers its custom errors consecutively, starting at the
framework's user error offset.
"""

from enum import Enum
from typing import List, Optional

from diamondhands.domain.exceptions.blockchain import BlockchainError


class ProgramErrorCode(Enum):
    """Custom errors of the DiamondHands program, in declaration order."""

    GENERAL_ERROR = ("GeneralError", "General Error")
    COULD_NOT_TX = ("CouldNotTX", "Could not transfer the Tokens from the vault")
    NOT_ENOUGH_TOKENS = ("NotEnoughTokens", "Not enough tokens in the owner's vault")
    FREEZE_TIME_TOO_SHORT = (
        "FreezeTimeTooShort",
        "You need to freeze your asset for at least 100 hours",
    )
    BAD_DHA_ADDRESS = (
        "BadDHAAddress",
        "The dha seed/nonce does not match or is not correct",
    )
    BAD_GATEKEEPER = (
        "BadGatekeeper",
        "The gatekeeper seed/nonce does not match or is not correct",
    )
    NOT_ENOUGH_TOKENS_IN_ACCOUNT = (
        "NotEnoughTokensInAccount",
        "The gatekeeper's token account does not have enough tokens",
    )
    STILL_FROZEN = ("StillFrozen", "The assets are still frozen")
    ALREADY_THAWED = (
        "AlreadyThawed",
        "The assets have already been thawed and retrieved",
    )

    @property
    def program_name(self) -> str:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]

    def code(self, offset: int) -> int:
        """Numeric custom error code for the given offset."""
        return offset + list(ProgramErrorCode).index(self)

    @classmethod
    def from_code(cls, code: int, offset: int) -> Optional["ProgramErrorCode"]:
        """Map a numeric custom error code back to its enum member."""
        index = code - offset
        members = list(cls)
        if 0 <= index < len(members):
            return members[index]
        return None


class ProgramRejectionError(BlockchainError):
    """
    Raised when the ledger refuses to execute a submitted transaction.

    Covers duplicate creation, premature release and balance or authority
    mismatches. Never retried by this client.
    """

    def __init__(
        self,
        message: str,
        custom_code: Optional[int] = None,
        error: Optional[ProgramErrorCode] = None,
        logs: Optional[List[str]] = None,
    ):
        """
        Initialize program rejection.

        Args:
            message: Rejection message from the RPC node
            custom_code: Numeric custom error code, if the program raised one
            error: Mapped program error, if the code is known
            logs: Program logs from the failed simulation or execution
        """
        if error is not None:
            message = f"{message} ({error.program_name}: {error.description})"
        super().__init__(message, code=error.program_name if error else None)
        self.custom_code = custom_code
        self.error = error
        self.logs = logs or []
