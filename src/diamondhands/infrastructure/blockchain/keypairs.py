"""
Keypair loading for the Solana CLI JSON format.
"""

import json
from pathlib import Path

from solders.keypair import Keypair  # type: ignore


def load_keypair(keypair_path: str) -> Keypair:
    """
    Load Solana keypair from JSON file.

    Args:
        keypair_path: Path to keypair JSON file (64-byte array)

    Returns:
        Solana Keypair object

    Raises:
        FileNotFoundError: If the file does not exist

    Examples:
        >>> keypair = load_keypair("~/.config/solana/id.json")
        >>> print(keypair.pubkey())
    """
    path = Path(keypair_path).expanduser()

    if not path.exists():
        raise FileNotFoundError(f"Keypair not found: {keypair_path}")

    with open(path, "r") as f:
        secret_key = json.load(f)

    return Keypair.from_bytes(bytes(secret_key))

