"""
Well-known program ids and unit constants.
"""

from solders.pubkey import Pubkey  # type: ignore
from solders.system_program import ID as SYSTEM_PROGRAM_ID  # type: ignore
from spl.token.constants import ASSOCIATED_TOKEN_PROGRAM_ID, TOKEN_PROGRAM_ID

DIAMOND_HANDS_PROGRAM_ID = Pubkey.from_string(
    "46tA8eaHGusgNYdeLVmmUGofjJXTbgJUyiPjQFitVugV"
)

# Minimum lock enforced by the program (100 hours)
PROGRAM_MIN_LOCK_SECONDS = 60 * 60 * 100

__all__ = [
    "DIAMOND_HANDS_PROGRAM_ID",
    "TOKEN_PROGRAM_ID",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "SYSTEM_PROGRAM_ID",
    "PROGRAM_MIN_LOCK_SECONDS",
]
