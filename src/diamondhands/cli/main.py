"""
DiamondHands CLI.

Usage:
    diamondhands derive OWNER MINT
    diamondhands show RECORD
    diamondhands exists RECORD
    diamondhands lock TOKEN_ACCOUNT [--days N | --unlock-date ISO] [--amount N]
    diamondhands release RECORD TOKEN_ACCOUNT [--amount N]
    diamondhands smoke [--amount N]
"""

import asyncio
import json
import sys
from datetime import datetime, timezone

import click
from solders.pubkey import Pubkey  # type: ignore

from diamondhands.application.use_cases import (
    CheckLockRecordExists,
    CreateLockRecord,
    ReleaseLock,
    ResolveLockRecord,
)
from diamondhands.config import DiamondHandsSettings, load_config
from diamondhands.domain.exceptions import (
    DiamondHandsException,
    ProgramErrorCode,
    ProgramRejectionError,
)
from diamondhands.domain.value_objects import LockOptions, record_ref
from diamondhands.infrastructure.blockchain import (
    DiamondHandsProvider,
    derive_lock_record_address,
    derive_vault_authority,
    get_associated_token_address,
    load_keypair,
)
from diamondhands.infrastructure.blockchain.mint_factory import (
    create_funded_token_account,
)


def _pubkey(value: str, name: str) -> Pubkey:
    try:
        return Pubkey.from_string(value)
    except ValueError:
        raise click.BadParameter(f"not a valid address: {value}", param_hint=name)


def _signer(settings: DiamondHandsSettings):
    try:
        return load_keypair(settings.keypair_path)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))


def _echo_json(data: dict) -> None:
    click.echo(json.dumps(data, indent=2))


def _run(coro):
    try:
        return asyncio.run(coro)
    except DiamondHandsException as e:
        click.echo(f"Error [{e.code}]: {e.message}", err=True)
        sys.exit(1)


@click.group()
@click.option("--config-env", default=None, help="Config environment (config/<env>.yaml)")
@click.option("--rpc-url", default=None, help="Override Solana RPC URL")
@click.option("--keypair", default=None, help="Override keypair path")
@click.pass_context
def cli(ctx, config_env, rpc_url, keypair):
    """DiamondHands - lock tokens until a date."""
    settings = load_config(env=config_env)
    overrides = {}
    if rpc_url:
        overrides["solana_rpc_url"] = rpc_url
    if keypair:
        overrides["keypair_path"] = keypair
    if overrides:
        settings = DiamondHandsSettings(**{**settings.model_dump(), **overrides})
    ctx.obj = settings


@cli.command()
@click.argument("owner")
@click.argument("mint")
@click.pass_obj
def derive(settings: DiamondHandsSettings, owner, mint):
    """Print the addresses derived for OWNER and MINT."""
    owner_key = _pubkey(owner, "OWNER")
    mint_key = _pubkey(mint, "MINT")
    program_id = Pubkey.from_string(settings.program_id)

    record, record_nonce = derive_lock_record_address(owner_key, mint_key, program_id)
    authority, authority_nonce = derive_vault_authority(record, program_id)
    vault = get_associated_token_address(mint_key, authority)

    _echo_json(
        {
            "record_address": str(record),
            "record_nonce": record_nonce,
            "vault_authority": str(authority),
            "vault_authority_nonce": authority_nonce,
            "vault": str(vault),
        }
    )


@cli.command()
@click.argument("record")
@click.pass_obj
def show(settings: DiamondHandsSettings, record):
    """Fetch and print a lock record."""

    async def _show():
        async with DiamondHandsProvider.from_settings(settings) as provider:
            snapshot = await ResolveLockRecord(provider).execute(record_ref(record))
            _echo_json(snapshot.to_dict())

    _run(_show())


@cli.command()
@click.argument("record")
@click.pass_obj
def exists(settings: DiamondHandsSettings, record):
    """Print whether a lock record exists."""

    async def _exists():
        async with DiamondHandsProvider.from_settings(settings) as provider:
            found = await CheckLockRecordExists(provider).execute(record_ref(record))
            click.echo("true" if found else "false")

    _run(_exists())


@cli.command()
@click.argument("token_account")
@click.option("--days", type=int, default=None, help="Days to lock")
@click.option("--unlock-date", default=None, help="ISO 8601 unlock date")
@click.option("--amount", type=int, default=None, help="Base units (default: all)")
@click.pass_obj
def lock(settings: DiamondHandsSettings, token_account, days, unlock_date, amount):
    """Lock tokens held in TOKEN_ACCOUNT."""
    address = _pubkey(token_account, "TOKEN_ACCOUNT")
    unlock = None
    if unlock_date:
        try:
            unlock = datetime.fromisoformat(unlock_date)
        except ValueError:
            raise click.BadParameter(
                f"not an ISO 8601 date: {unlock_date}", param_hint="--unlock-date"
            )
        if unlock.tzinfo is None:
            unlock = unlock.replace(tzinfo=timezone.utc)

    options = LockOptions(
        days_to_lock=settings.default_days_to_lock if days is None else days,
        unlock_date=unlock,
        amount=amount,
        unlock_buffer_seconds=settings.unlock_buffer_seconds,
    )
    signer = _signer(settings)

    async def _lock():
        async with DiamondHandsProvider.from_settings(settings) as provider:
            source = await provider.ledger.fetch_token_account(address)
            record = await CreateLockRecord(provider).execute(signer, source, options)
            _echo_json(record.to_dict())

    _run(_lock())


@cli.command()
@click.argument("record")
@click.argument("token_account")
@click.option("--amount", type=int, default=None, help="Base units (default: all)")
@click.pass_obj
def release(settings: DiamondHandsSettings, record, token_account, amount):
    """Release tokens from RECORD into TOKEN_ACCOUNT."""
    address = _pubkey(token_account, "TOKEN_ACCOUNT")
    signer = _signer(settings)

    async def _release():
        async with DiamondHandsProvider.from_settings(settings) as provider:
            destination = await provider.ledger.fetch_token_account(address)
            snapshot = await ReleaseLock(provider).execute(
                signer, record_ref(record), destination, amount=amount
            )
            _echo_json(snapshot.to_dict())

    _run(_release())


@cli.command()
@click.option("--amount", type=int, default=100, help="Units to mint and lock")
@click.pass_obj
def smoke(settings: DiamondHandsSettings, amount):
    """Mint a test token, lock it, and check an early release is refused."""
    signer = _signer(settings)

    async def _smoke() -> bool:
        async with DiamondHandsProvider.from_settings(settings) as provider:
            ledger = provider.ledger

            click.echo("Creating test token...")
            source = await create_funded_token_account(ledger, signer, amount)

            click.echo("Locking...")
            options = LockOptions(
                days_to_lock=settings.default_days_to_lock,
                unlock_buffer_seconds=settings.unlock_buffer_seconds,
            )
            record = await CreateLockRecord(provider).execute(signer, source, options)
            _echo_json(record.to_dict())

            owner_balance = (await ledger.fetch_token_account(source.address)).amount
            vault_balance = (await ledger.fetch_token_account(record.vault)).amount
            click.echo(f"Owner's token count {owner_balance}")
            click.echo(f"Vault's token count {vault_balance}")

            await asyncio.sleep(settings.settle_delay_seconds)

            click.echo("Releasing early (should fail)...")
            try:
                await ReleaseLock(provider).execute(signer, record_ref(record), source)
            except ProgramRejectionError as e:
                if e.error is ProgramErrorCode.STILL_FROZEN:
                    click.echo(f"Rejected as expected: {e.message}")
                    return True
                click.echo(f"Rejected for another reason: {e.message}", err=True)
                return False

            click.echo("Early release was accepted", err=True)
            return False

    if not _run(_smoke()):
        sys.exit(1)


if __name__ == "__main__":
    cli()
