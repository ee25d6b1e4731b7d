"""
Configuration module for the DiamondHands client.
"""

from diamondhands.config.settings import (
    DiamondHandsSettings,
    get_settings,
    load_config,
    override_settings,
    reset_settings,
)

__all__ = [
    "DiamondHandsSettings",
    "get_settings",
    "load_config",
    "override_settings",
    "reset_settings",
]
