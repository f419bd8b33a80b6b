"""
Tests for small helpers: browser commands, prompts, logging levels, output.

Run with:
    pytest tests/test_utils.py -v
"""

import logging

import pytest

from zgit import output
from zgit.cli import utils
from zgit.errors import ZgitError
from zgit.logging_utils import resolve_level
from zgit.output import CROSS, print_error


class TestBrowserCommand:

    @pytest.mark.parametrize("platform, expected", [
        ("darwin", ["open", "https://x"]),
        ("linux", ["xdg-open", "https://x"]),
        ("win32", ["rundll32", "url.dll,FileProtocolHandler", "https://x"]),
    ])
    def test_per_platform(self, platform, expected):
        assert utils.browser_command("https://x", platform=platform) == expected

    def test_unsupported_platform(self):
        with pytest.raises(ZgitError, match="unsupported platform"):
            utils.browser_command("https://x", platform="plan9")

    def test_missing_opener(self, monkeypatch):
        def missing(*args, **kwargs):
            raise FileNotFoundError

        monkeypatch.setattr(utils.subprocess, "Popen", missing)
        monkeypatch.setattr(utils.sys, "platform", "linux")
        with pytest.raises(ZgitError, match="xdg-open not found"):
            utils.open_browser("https://x")


class TestConfirm:

    @pytest.mark.parametrize("answer, expected", [
        ("y", True), ("Yes", True), ("", False), ("n", False), ("yep", False),
    ])
    def test_answers(self, monkeypatch, answer, expected):
        monkeypatch.setattr("builtins.input", lambda prompt: answer)
        assert utils.confirm("Continue?") is expected


class TestResolveLevel:

    @pytest.mark.parametrize("value, expected", [
        (None, logging.WARNING),
        ("", logging.WARNING),
        ("0", logging.WARNING),
        ("1", logging.INFO),
        ("2", logging.DEBUG),
        ("info", logging.INFO),
        ("DEBUG", logging.DEBUG),
        ("nonsense", logging.WARNING),
    ])
    def test_levels(self, value, expected):
        assert resolve_level(value) == expected


def test_print_error_goes_to_stderr(capsys):
    print_error("boom")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert CROSS in captured.err
    assert "boom" in captured.err


class FakeStream:
    def __init__(self, tty):
        self.tty = tty

    def isatty(self):
        return self.tty


class TestColorSupport:

    @pytest.fixture(autouse=True)
    def plain_env(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setattr(output.sys, "platform", "linux")

    def test_decided_per_stream(self):
        assert output._supports_color(FakeStream(True)) is True
        assert output._supports_color(FakeStream(False), "stderr") is False

    def test_no_color_wins(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        assert output._supports_color(FakeStream(True)) is False

    def test_force_color(self, monkeypatch):
        monkeypatch.setenv("FORCE_COLOR", "1")
        assert output._supports_color(FakeStream(False)) is True

    def test_redirected_stderr_gets_no_escape_codes(self, monkeypatch, capsys):
        monkeypatch.setattr(output, "COLORS_ENABLED", True)
        monkeypatch.setattr(output, "STDERR_COLORS_ENABLED", False)

        print_error("boom")

        assert "\033[" not in capsys.readouterr().err

    def test_terminal_stderr_is_coloured(self, monkeypatch, capsys):
        monkeypatch.setattr(output, "COLORS_ENABLED", False)
        monkeypatch.setattr(output, "STDERR_COLORS_ENABLED", True)

        print_error("boom")

        assert output.Colors.RED in capsys.readouterr().err
