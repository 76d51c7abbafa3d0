"""Unit tests for the leveled console logger (codegen.logger)."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from codegen.logger import LEVELS, Logger, normalize_level

pytestmark = pytest.mark.unit


def _logger(level: str) -> tuple[Logger, Console]:
    console = Console(file=io.StringIO(), force_terminal=False, width=200)
    return Logger(level, console=console), console


class TestNormalizeLevel:
    def test_known_levels(self):
        for level in LEVELS:
            assert normalize_level(level) == level

    def test_warning_alias_and_case(self):
        assert normalize_level("WARNING") == "warn"
        assert normalize_level("Info") == "info"

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            normalize_level("trace")


class TestLogger:
    def test_info_level_hides_debug(self):
        logger, console = _logger("info")
        logger.debug("hidden detail")
        logger.info("visible message")
        output = console.file.getvalue()
        assert "visible message" in output
        assert "hidden detail" not in output

    def test_debug_level_shows_everything(self):
        logger, console = _logger("debug")
        logger.error("e1")
        logger.warning("w1")
        logger.info("i1")
        logger.success("s1")
        logger.debug("d1")
        output = console.file.getvalue()
        for message in ("e1", "w1", "i1", "s1", "d1"):
            assert message in output

    def test_error_level_only_errors(self):
        logger, console = _logger("error")
        logger.warn("warned")
        logger.success("done")
        logger.error("broken")
        output = console.file.getvalue()
        assert "broken" in output
        assert "warned" not in output
        assert "done" not in output

    def test_markup_in_message_is_escaped(self):
        logger, console = _logger("info")
        logger.info("path [bold]literal[/bold]")
        assert "[bold]literal[/bold]" in console.file.getvalue()

    def test_set_level(self):
        logger, console = _logger("error")
        logger.set_level("debug")
        logger.debug("now visible")
        assert "now visible" in console.file.getvalue()
