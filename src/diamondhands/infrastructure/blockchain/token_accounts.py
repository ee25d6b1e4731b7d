"""
Associated token account helpers.

Provides vault address derivation and the vault existence check used to
decide whether a creation instruction is needed before locking.
"""

from dataclasses import dataclass

from solders.pubkey import Pubkey  # type: ignore
from spl.token.instructions import get_associated_token_address as _spl_ata

from diamondhands.infrastructure.blockchain.ledger_client import LedgerClient


@dataclass(frozen=True)
class VaultResolution:
    """Vault address and whether it already exists on-chain."""

    vault: Pubkey
    exists: bool

    @property
    def needs_creation(self) -> bool:
        return not self.exists


def get_associated_token_address(mint: Pubkey, owner: Pubkey) -> Pubkey:
    """
    Derive the associated token account for (mint, owner).

    Off-curve owners (PDAs such as the vault authority) are allowed.
    """
    return _spl_ata(owner, mint)


async def resolve_vault_and_existence(
    ledger: LedgerClient, mint: Pubkey, authority: Pubkey
) -> VaultResolution:
    """
    Compute the vault address and check whether it exists.

    Only a definite "no account at this address" counts as absent.

    Args:
        ledger: Ledger client
        mint: Token mint
        authority: Vault owner (the vault authority PDA)

    Returns:
        VaultResolution with the vault address and existence flag

    Raises:
        TransportError: If the existence check itself fails
    """
    vault = get_associated_token_address(mint, authority)
    result = await ledger.fetch_account(vault)
    return VaultResolution(vault=vault, exists=result.found)
