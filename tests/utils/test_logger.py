"""
Tests for the structured console logger.
"""

import io
from datetime import datetime

import pytest

from models.enums import LogCategory, LogLevel
from utils.logger import Logger, configure_logger, get_category_logger, get_logger


@pytest.fixture
def logger():
    return Logger(min_level=LogLevel.DEBUG, use_colors=False)


class TestLoggerOutput:
    """Line format and detail rows."""

    def test_message_line(self, logger, capsys):
        logger.info(LogCategory.ANIMATION, "Glitch animation started")

        line = capsys.readouterr().out.strip()
        assert line.startswith("[")
        assert "ANIMATION" in line
        assert "✓ Glitch animation started" in line

    def test_kwargs_become_detail_rows(self, logger, capsys):
        logger.info(LogCategory.WATCHFACE, "Display mode changed", mode="AMBIENT", timer=False)

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 3
        assert lines[1].strip() == "├─ mode: AMBIENT"
        assert lines[2].strip() == "└─ timer: False"

    def test_details_list_comes_first(self, logger, capsys):
        logger.log(LogCategory.CONFIG, "Loaded", details=["glitch.yaml"], keys=2)

        lines = capsys.readouterr().out.splitlines()
        assert lines[1].strip() == "├─ glitch.yaml"
        assert lines[2].strip() == "└─ keys: 2"

    def test_level_symbols(self, logger, capsys):
        logger.debug(LogCategory.SYSTEM, "d")
        logger.warn(LogCategory.SYSTEM, "w")
        logger.error(LogCategory.SYSTEM, "e")

        out = capsys.readouterr().out
        assert "· d" in out
        assert "⚠ w" in out
        assert "✗ e" in out

    def test_no_ansi_codes_without_colors(self, logger, capsys):
        logger.error(LogCategory.API, "boom")
        assert "\033[" not in capsys.readouterr().out

    def test_colors(self, capsys):
        Logger(use_colors=True).info(LogCategory.API, "hello")
        assert "\033[" in capsys.readouterr().out


class TestLoggerLevels:
    """Filtering by minimum level."""

    def test_below_min_level_is_dropped(self, capsys):
        logger = Logger(min_level=LogLevel.WARN, use_colors=False)

        logger.debug(LogCategory.SYSTEM, "hidden")
        logger.info(LogCategory.SYSTEM, "hidden too")
        logger.warn(LogCategory.SYSTEM, "shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out


class TestBoundLogger:
    """Category-bound loggers."""

    def test_bound_category(self, logger, capsys):
        bound = logger.for_category(LogCategory.SCHEDULER)
        bound.info("tick", delay_ms=33)

        out = capsys.readouterr().out
        assert "SCHEDULER" in out
        assert "delay_ms: 33" in out

    def test_category_override(self, logger, capsys):
        bound = logger.for_category(LogCategory.SCHEDULER)
        bound.log("moved", LogLevel.INFO, category=LogCategory.SHUTDOWN)
        bound.with_category(LogCategory.CONFIG).warn("other")

        out = capsys.readouterr().out
        assert "SHUTDOWN" in out
        assert "CONFIG" in out
        assert "SCHEDULER" not in out


class TestLoggerSingleton:
    """configure_logger() mutates the shared instance."""

    def test_configure_keeps_bound_loggers_attached(self, capsys):
        singleton = get_logger()
        saved = (singleton.min_level, singleton.use_colors)
        bound = get_category_logger(LogCategory.WATCHFACE)
        try:
            configure_logger(LogLevel.ERROR, use_colors=False)
            assert get_logger() is singleton

            bound.warn("suppressed")
            bound.error("visible")

            out = capsys.readouterr().out
            assert "suppressed" not in out
            assert "visible" in out
        finally:
            configure_logger(*saved)


class TestLoggerFormatting:
    """format_lines(), explicit stream and clock."""

    def test_exception_detail(self, logger):
        lines = logger.format_lines(LogCategory.CONFIG, "Failed", LogLevel.ERROR,
                                    exception=ValueError("bad port"))

        assert lines[-1].strip() == "└─ error: ValueError: bad port"

    def test_clock_and_stream(self):
        stream = io.StringIO()
        logger = Logger(use_colors=False, stream=stream, clock=lambda: datetime(2024, 6, 7, 14, 23, 45))

        logger.info(LogCategory.WATCHFACE, "tick")

        assert stream.getvalue() == "[14:23:45] WATCHFACE ✓ tick\n"

    def test_filtered_message_writes_nothing(self):
        stream = io.StringIO()
        Logger(min_level=LogLevel.ERROR, stream=stream).info(LogCategory.API, "quiet")

        assert stream.getvalue() == ""
