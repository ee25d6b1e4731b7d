"""
System Reporter - Centralized logging for the DiamondHands client.

Logs to stdout, and to a per-reporter file when a log directory is given.
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SystemReporter:
    """
    Logger with verbose filtering.

    Verbose Levels:
        0 = Critical only (always visible)
        1 = Important messages (default)
        2 = Detailed information
        3 = Debug/verbose
    """

    def __init__(
        self,
        name: str = "diamondhands",
        log_dir: Optional[str] = None,
        level: int = logging.INFO,
        verbose: int = 1,
    ) -> None:
        """
        Initialize SystemReporter.

        Args:
            name: Logger name (used for filename if log_dir provided)
            log_dir: Directory for log files. If None, logs to stdout only.
            level: Python logging level
            verbose: Verbosity filter (0-3)
        """
        self.name = name
        self.verbose = max(0, min(3, verbose))
        self.log_file: Optional[str] = None
        self._init_logger(name, log_dir, level)

    def _init_logger(self, name: str, log_dir: Optional[str], level: int) -> None:
        """
        Initialize logger with console and optional file handlers.

        Args:
            name: Logger name
            log_dir: Log directory path (None = stdout only)
            level: Python logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.handlers.clear()
        self.logger.propagate = False

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_dir:
            log_dir = os.path.abspath(os.path.expanduser(log_dir))
            os.makedirs(log_dir, exist_ok=True)
            self.log_file = os.path.join(log_dir, f"{name}.log")

            file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def set_verbose(self, level: int) -> None:
        """Update verbosity level."""
        self.verbose = max(0, min(3, level))
        self.info(
            f"Verbosity set to {self.verbose}",
            context="SystemReporter",
            verbose_level=0,
        )

    def _should_log(self, verbose_level: int) -> bool:
        """Check if message should be logged."""
        return self.verbose >= verbose_level

    # Core logging methods
    def debug(self, msg: str, context: str = "system", verbose_level: int = 3) -> None:
        """Log debug message."""
        if self._should_log(verbose_level):
            self.logger.debug(f"[{context}] {msg}")

    def info(self, msg: str, context: str = "system", verbose_level: int = 1) -> None:
        """Log info message."""
        if self._should_log(verbose_level):
            self.logger.info(f"[{context}] {msg}")

    def warning(
        self, msg: str, context: str = "system", verbose_level: int = 1
    ) -> None:
        """Log warning message."""
        if self._should_log(verbose_level):
            self.logger.warning(f"[{context}] {msg}")

    def error(self, msg: str, context: str = "system", verbose_level: int = 0) -> None:
        """Log error message."""
        if self._should_log(verbose_level):
            self.logger.error(f"[{context}] {msg}")

    def critical(
        self, msg: str, context: str = "system", verbose_level: int = 0
    ) -> None:
        """Log critical message."""
        if self._should_log(verbose_level):
            self.logger.critical(f"[{context}] {msg}")


_reporter: Optional[SystemReporter] = None


def get_reporter() -> SystemReporter:
    """Get or initialize the process-wide reporter from settings."""
    global _reporter
    if _reporter is None:
        from diamondhands.config import get_settings

        settings = get_settings()
        _reporter = SystemReporter(
            name="diamondhands",
            log_dir=settings.log_dir,
            level=logging.getLevelName(settings.log_level),
            verbose=settings.verbose,
        )
    return _reporter


def set_reporter(reporter: Optional[SystemReporter]) -> None:
    """Replace the process-wide reporter (None forces re-initialization)."""
    global _reporter
    _reporter = reporter
