"""
DiamondHands client configuration.

Priority (highest to lowest):
1. Environment variables (DIAMONDHANDS_*, from .env.<env> or system)
2. Environment-specific YAML config file (development.yaml, test.yaml, ...)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from solders.pubkey import Pubkey  # type: ignore

DEFAULT_PROGRAM_ID = "46tA8eaHGusgNYdeLVmmUGofjJXTbgJUyiPjQFitVugV"

# src/diamondhands/config/settings.py -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"


class DiamondHandsSettings(BaseSettings):
    """
    Client settings with environment variable support.

    Keypair contents never live here, only the path to the keypair file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DIAMONDHANDS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Blockchain
    solana_rpc_url: str = Field(default="https://api.devnet.solana.com")
    solana_network: str = Field(default="devnet")
    commitment: str = Field(default="confirmed")
    program_id: str = Field(default=DEFAULT_PROGRAM_ID)
    keypair_path: str = Field(default="~/.config/solana/id.json")
    rpc_timeout: float = Field(
        default=10.0,
        gt=0.0,
        le=300.0,
        description="Connection timeout in seconds (no client-side retries)",
    )

    # Lock defaults
    default_days_to_lock: int = Field(default=100, ge=0)
    unlock_buffer_seconds: int = Field(
        default=10,
        ge=0,
        description="Headroom added to computed unlock times",
    )
    settle_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Pause between lock and early release in the smoke flow",
    )
    error_code_offset: int = Field(
        default=300,
        ge=0,
        description="First custom error code of the program",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_dir: Optional[str] = Field(default=None)
    verbose: int = Field(default=1, ge=0, le=3)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid log_level. Must be one of: {allowed}")
        return v_upper

    @field_validator("solana_network")
    @classmethod
    def validate_solana_network(cls, v: str) -> str:
        """Validate Solana network."""
        allowed = ["devnet", "testnet", "mainnet-beta", "localnet"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid solana_network. Must be one of: {allowed}")
        return v_lower

    @field_validator("commitment")
    @classmethod
    def validate_commitment(cls, v: str) -> str:
        """Validate commitment level."""
        allowed = ["processed", "confirmed", "finalized"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid commitment. Must be one of: {allowed}")
        return v_lower

    @field_validator("program_id")
    @classmethod
    def validate_program_id(cls, v: str) -> str:
        """Validate program id is a base58 public key."""
        try:
            Pubkey.from_string(v)
        except ValueError as e:
            raise ValueError(f"Invalid program_id: {e}")
        return v

    @field_validator("keypair_path")
    @classmethod
    def expand_keypair_path(cls, v: str) -> str:
        """Expand home directory in keypair path."""
        return os.path.expanduser(v)


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, "r") as f:
        loaded = yaml.safe_load(f)
    return loaded or {}


def load_config(
    env: Optional[str] = None,
    config_file: Optional[str] = None,
    config_dir: Optional[Path] = None,
) -> DiamondHandsSettings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        env: Environment name override (defaults to $ENV, then "development")
        config_file: YAML filename override (defaults to "<env>.yaml")
        config_dir: Directory holding the YAML files (defaults to ./config)

    Returns:
        DiamondHandsSettings instance

    Raises:
        pydantic.ValidationError: If a value is invalid
    """
    environment = env or os.getenv("ENV", "development")
    config_dir = config_dir or CONFIG_DIR

    env_file_path = PROJECT_ROOT / f".env.{environment}"
    if env_file_path.exists():
        load_dotenv(env_file_path, override=False)

    merged_config = _read_yaml(config_dir / "default.yaml")
    merged_config.update(_read_yaml(config_dir / (config_file or f"{environment}.yaml")))

    # Environment variables beat YAML: drop YAML keys that are set in the env
    for key in list(merged_config):
        if f"DIAMONDHANDS_{key.upper()}" in os.environ:
            del merged_config[key]

    return DiamondHandsSettings(**merged_config)


_settings: Optional[DiamondHandsSettings] = None


def get_settings() -> DiamondHandsSettings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: DiamondHandsSettings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
