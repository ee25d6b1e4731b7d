"""
Blockchain-related exceptions.

Defines exceptions for address derivation, account fetches and RPC transport.
"""

from typing import Optional

from diamondhands.domain.exceptions.base import DiamondHandsException


class BlockchainError(DiamondHandsException):
    """Base exception for ledger interactions."""


class DerivationError(BlockchainError):
    """Raised when no valid program-derived address exists for the seeds."""

    def __init__(self, seeds_description: str, reason: str):
        """
        Initialize derivation error.

        Args:
            seeds_description: Human readable description of the seeds
            reason: Underlying failure
        """
        super().__init__(
            f"Failed to derive address from {seeds_description}: {reason}",
            code="DERIVATION_FAILED",
        )
        self.seeds_description = seeds_description


class AccountNotFoundError(BlockchainError):
    """Raised when the ledger holds no account at the address."""

    def __init__(self, address: str, account_type: str = "Account"):
        """
        Initialize account not found error.

        Args:
            address: Base58 account address
            account_type: Kind of account expected at the address
        """
        super().__init__(
            f"{account_type} not found: {address}",
            code="ACCOUNT_NOT_FOUND",
        )
        self.address = address
        self.account_type = account_type


class TransportError(BlockchainError):
    """Raised when an RPC call fails for reasons other than absence."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, code="TRANSPORT_ERROR")
        self.details = details or {}


class AccountDecodeError(TransportError):
    """Raised when account bytes do not match the expected layout."""

    def __init__(self, address: str, reason: str):
        """
        Initialize decode error.

        Args:
            address: Base58 account address
            reason: What did not match
        """
        super().__init__(
            f"Could not decode account {address}: {reason}",
            details={"address": address},
        )
        self.code = "ACCOUNT_DECODE_ERROR"
        self.address = address
