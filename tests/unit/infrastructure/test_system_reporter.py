"""
Unit tests for SystemReporter.

Usage:
    pytest tests/unit/infrastructure/test_system_reporter.py
"""

import logging

from diamondhands.infrastructure.monitoring import SystemReporter


class TestSystemReporter:
    """Unit tests for verbose filtering and log destinations."""

    def test_verbose_filtering(self, capsys):
        reporter = SystemReporter(name="reporter-filter", level=logging.DEBUG, verbose=1)

        reporter.info("shown", context="Test")
        reporter.debug("hidden", context="Test")
        reporter.info("detail", context="Test", verbose_level=2)

        out = capsys.readouterr().out
        assert "[Test] shown" in out
        assert "hidden" not in out
        assert "detail" not in out

    def test_errors_visible_at_verbose_zero(self, capsys):
        reporter = SystemReporter(name="reporter-quiet", verbose=0)

        reporter.info("chatter")
        reporter.error("broken", context="Test")

        out = capsys.readouterr().out
        assert "chatter" not in out
        assert "ERROR" in out
        assert "[Test] broken" in out

    def test_verbose_is_clamped(self):
        reporter = SystemReporter(name="reporter-clamp", verbose=9)
        assert reporter.verbose == 3

        reporter.set_verbose(-4)
        assert reporter.verbose == 0

    def test_file_logging(self, tmp_path):
        reporter = SystemReporter(name="reporter-file", log_dir=str(tmp_path))

        reporter.warning("written", context="Test")
        for handler in reporter.logger.handlers:
            handler.flush()

        assert reporter.log_file == str(tmp_path / "reporter-file.log")
        assert "[Test] written" in (tmp_path / "reporter-file.log").read_text()
