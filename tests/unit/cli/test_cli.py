"""
Unit tests for the DiamondHands CLI.

Usage:
    pytest tests/unit/cli/test_cli.py
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner
from solders.pubkey import Pubkey  # type: ignore

from diamondhands.cli.main import cli
from diamondhands.domain.exceptions import (
    AccountNotFoundError,
    ProgramErrorCode,
    ProgramRejectionError,
)
from diamondhands.infrastructure.blockchain.pda import (
    derive_lock_record_address,
    derive_vault_authority,
)
from diamondhands.infrastructure.blockchain.token_accounts import (
    get_associated_token_address,
)

CLI_MODULE = "diamondhands.cli.main"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_provider(mock_ledger):
    """Patch provider construction in the CLI with the ledger double."""
    provider = MagicMock()
    provider.ledger = mock_ledger
    provider.__aenter__ = AsyncMock(return_value=provider)
    provider.__aexit__ = AsyncMock(return_value=None)
    with patch(f"{CLI_MODULE}.DiamondHandsProvider") as mock_cls:
        mock_cls.from_settings.return_value = provider
        yield provider


class TestDerive:
    """Unit tests for the offline derive command."""

    def test_prints_derived_addresses(self, runner):
        owner, mint = Pubkey.new_unique(), Pubkey.new_unique()

        result = runner.invoke(cli, ["--config-env", "test", "derive", str(owner), str(mint)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        record, record_nonce = derive_lock_record_address(owner, mint)
        authority, _ = derive_vault_authority(record)
        assert data["record_address"] == str(record)
        assert data["record_nonce"] == record_nonce
        assert data["vault_authority"] == str(authority)
        assert data["vault"] == str(get_associated_token_address(mint, authority))

    def test_rejects_invalid_address(self, runner):
        result = runner.invoke(
            cli, ["--config-env", "test", "derive", "bogus", str(Pubkey.new_unique())]
        )

        assert result.exit_code == 2
        assert "not a valid address" in result.output


class TestLedgerCommands:
    """Unit tests for commands that read the ledger."""

    def test_show(self, runner, cli_provider, mock_ledger, lock_record):
        with patch(f"{CLI_MODULE}.ResolveLockRecord") as mock_uc:
            mock_uc.return_value.execute = AsyncMock(return_value=lock_record)
            result = runner.invoke(
                cli, ["--config-env", "test", "show", str(lock_record.record_address)]
            )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["vault"] == str(lock_record.vault)

    def test_exists_false(self, runner, cli_provider, mock_ledger, lock_record):
        mock_ledger.fetch_lock_record.side_effect = AccountNotFoundError("Addr")

        result = runner.invoke(
            cli, ["--config-env", "test", "exists", str(lock_record.record_address)]
        )

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "false"

    def test_domain_errors_exit_nonzero(self, runner, cli_provider, lock_record):
        with patch(f"{CLI_MODULE}.ResolveLockRecord") as mock_uc:
            mock_uc.return_value.execute = AsyncMock(
                side_effect=ProgramRejectionError("refused")
            )
            result = runner.invoke(
                cli, ["--config-env", "test", "show", str(lock_record.record_address)]
            )

        assert result.exit_code == 1
        assert "refused" in result.output

    def test_missing_keypair(self, runner, tmp_path, lock_record):
        result = runner.invoke(
            cli,
            [
                "--config-env",
                "test",
                "--keypair",
                str(tmp_path / "missing.json"),
                "release",
                str(lock_record.record_address),
                str(Pubkey.new_unique()),
            ],
        )

        assert result.exit_code == 1
        assert "Keypair not found" in result.output


class TestLockCommand:
    """Unit tests for lock argument parsing."""

    def test_rejects_invalid_unlock_date(self, runner, tmp_path):
        result = runner.invoke(
            cli,
            [
                "--config-env",
                "test",
                "--keypair",
                str(tmp_path / "missing.json"),
                "lock",
                str(Pubkey.new_unique()),
                "--unlock-date",
                "next-tuesday",
            ],
        )

        assert result.exit_code == 2
        assert "not an ISO 8601 date" in result.output
        assert not isinstance(result.exception, ValueError)


class TestSmoke:
    """Unit tests for the smoke flow outcome."""

    @pytest.fixture
    def smoke_env(
        self, cli_provider, mock_ledger, monkeypatch, owner, source_account, lock_record
    ):
        """Smoke flow with minting and both use cases stubbed."""
        monkeypatch.setenv("DIAMONDHANDS_SETTLE_DELAY_SECONDS", "0")
        mock_ledger.fetch_token_account.return_value = source_account
        with patch(f"{CLI_MODULE}.load_keypair", return_value=owner), patch(
            f"{CLI_MODULE}.create_funded_token_account",
            AsyncMock(return_value=source_account),
        ), patch(f"{CLI_MODULE}.CreateLockRecord") as create_uc, patch(
            f"{CLI_MODULE}.ReleaseLock"
        ) as release_uc:
            create_uc.return_value.execute = AsyncMock(return_value=lock_record)
            yield release_uc.return_value

    def test_still_frozen_passes(self, runner, smoke_env):
        smoke_env.execute = AsyncMock(
            side_effect=ProgramRejectionError(
                "simulation failed", custom_code=307, error=ProgramErrorCode.STILL_FROZEN
            )
        )

        result = runner.invoke(cli, ["--config-env", "test", "smoke"])

        assert result.exit_code == 0, result.output
        assert "Rejected as expected" in result.output

    def test_other_rejection_fails(self, runner, smoke_env):
        """Only the still-frozen refusal counts as the expected outcome."""
        smoke_env.execute = AsyncMock(
            side_effect=ProgramRejectionError(
                "simulation failed",
                custom_code=306,
                error=ProgramErrorCode.NOT_ENOUGH_TOKENS_IN_ACCOUNT,
            )
        )

        result = runner.invoke(cli, ["--config-env", "test", "smoke"])

        assert result.exit_code == 1
        assert "Rejected for another reason" in result.output

    def test_accepted_release_fails(self, runner, smoke_env, lock_record):
        smoke_env.execute = AsyncMock(return_value=lock_record)

        result = runner.invoke(cli, ["--config-env", "test", "smoke"])

        assert result.exit_code == 1
        assert "Early release was accepted" in result.output
