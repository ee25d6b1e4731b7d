"""
Test token minting for the smoke flow.

Creates a fresh mint owned by the payer, the payer's associated token
account for it, and mints an initial supply into that account.
"""

from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solders.keypair import Keypair  # type: ignore
from spl.token.async_client import AsyncToken

from diamondhands.domain.exceptions import TransportError
from diamondhands.domain.value_objects.token_account import TokenAccount
from diamondhands.infrastructure.blockchain.constants import TOKEN_PROGRAM_ID
from diamondhands.infrastructure.blockchain.ledger_client import (
    TRANSPORT_EXCEPTIONS,
    LedgerClient,
)


async def create_funded_token_account(
    ledger: LedgerClient,
    payer: Keypair,
    amount: int,
    decimals: int = 0,
) -> TokenAccount:
    """
    Mint ``amount`` units of a new token into the payer's associated account.

    Args:
        ledger: Ledger client (its connection pays and signs through ``payer``)
        payer: Fee payer, mint authority and token account owner
        amount: Initial supply in base units
        decimals: Mint decimals

    Returns:
        Freshly fetched TokenAccount holding ``amount``

    Raises:
        TransportError: If any of the setup transactions fail
    """
    opts = TxOpts(skip_confirmation=False, preflight_commitment=ledger.commitment)
    try:
        token = await AsyncToken.create_mint(
            ledger.connection,
            payer,
            payer.pubkey(),
            decimals,
            TOKEN_PROGRAM_ID,
        )
        ledger.reporter.info(f"Created mint {token.pubkey}", context="MintFactory")

        token_account = await token.create_associated_token_account(payer.pubkey())
        await token.mint_to(token_account, payer, amount, opts=opts)
    except (RPCException, *TRANSPORT_EXCEPTIONS) as e:
        raise TransportError(f"Failed to create test token: {e}") from e

    ledger.reporter.info(
        f"Minted {amount} to {token_account}", context="MintFactory"
    )
    return await ledger.fetch_token_account(token_account)
