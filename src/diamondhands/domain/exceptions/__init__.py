"""
Domain exceptions package.
"""

# Base exceptions
from diamondhands.domain.exceptions.base import (
    DiamondHandsException,
    ValidationError,
)

# Blockchain exceptions
from diamondhands.domain.exceptions.blockchain import (
    AccountDecodeError,
    AccountNotFoundError,
    BlockchainError,
    DerivationError,
    TransportError,
)

# Program exceptions
from diamondhands.domain.exceptions.program import (
    ProgramErrorCode,
    ProgramRejectionError,
)

__all__ = [
    # Base
    "DiamondHandsException",
    "ValidationError",
    # Blockchain
    "BlockchainError",
    "DerivationError",
    "AccountNotFoundError",
    "TransportError",
    "AccountDecodeError",
    # Program
    "ProgramErrorCode",
    "ProgramRejectionError",
]
