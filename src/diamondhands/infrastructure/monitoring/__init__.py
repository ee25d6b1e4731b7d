"""Logging for the DiamondHands client."""

from diamondhands.infrastructure.monitoring.system_reporter import (
    SystemReporter,
    get_reporter,
    set_reporter,
)

__all__ = ["SystemReporter", "get_reporter", "set_reporter"]
