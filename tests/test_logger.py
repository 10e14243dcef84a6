"""
Tests for the structured console logger
"""

import pytest

from neomatrix.models.enums import LogCategory, LogLevel
from neomatrix.utils.logger import configure_logger, get_category_logger, get_logger


@pytest.fixture(autouse=True)
def plain_logger():
    configure_logger(min_level=LogLevel.INFO, use_colors=False)
    yield
    configure_logger(min_level=LogLevel.INFO, use_colors=True)


class TestLoggerSingleton:

    def test_identity(self):
        assert get_logger() is get_logger()

    def test_configure_keeps_instance(self):
        original = get_logger()
        configure_logger(LogLevel.DEBUG, use_colors=False)
        assert get_logger() is original
        assert get_logger().min_level == LogLevel.DEBUG


class TestLoggerOutput:

    def test_message_with_details_tree(self, capsys):
        get_logger().log(LogCategory.GIF, "Encoded animation", frames=11, bytes=2048)
        lines = capsys.readouterr().out.splitlines()

        assert "GIF" in lines[0]
        assert "Encoded animation" in lines[0]
        assert lines[1].strip() == "├─ frames: 11"
        assert lines[2].strip() == "└─ bytes: 2048"

    def test_below_min_level_is_silent(self, capsys):
        get_logger().debug(LogCategory.EDITOR, "Pixel toggled")
        assert capsys.readouterr().out == ""

    def test_no_ansi_when_colors_disabled(self, capsys):
        get_logger().warn(LogCategory.STORAGE, "Autosave unreadable")
        assert "\033[" not in capsys.readouterr().out


class TestBoundLogger:

    def test_uses_bound_category(self, capsys):
        get_category_logger(LogCategory.CODEGEN).info("Generated module")
        assert "CODEGEN" in capsys.readouterr().out

    def test_with_category(self, capsys):
        log = get_category_logger(LogCategory.CODEGEN).with_category(LogCategory.HISTORY)
        log.error("Undo failed")
        out = capsys.readouterr().out
        assert "HISTORY" in out
        assert "✗" in out
