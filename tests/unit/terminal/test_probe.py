"""Unit tests for terminal probing."""

from __future__ import annotations

import io

import pytest

from hired.models import ColorTier
from hired.terminal.probe import DEFAULT_COLUMNS, probe_terminal

pytestmark = [pytest.mark.terminal, pytest.mark.unit]


class _TtyStream(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestProbeTerminal:
    """Test probe_terminal."""

    def test_pipe_defaults(self):
        """A non-terminal stream is non-interactive, 16-colour, 80 columns."""
        profile = probe_terminal(io.StringIO())
        assert profile.interactive is False
        assert profile.color_tier is ColorTier.BASIC
        assert profile.columns == DEFAULT_COLUMNS

    def test_columns_from_environment(self, monkeypatch):
        monkeypatch.setenv("COLUMNS", "120")
        assert probe_terminal(io.StringIO()).columns == 120

    @pytest.mark.parametrize("raw", ["abc", "0", "-5", ""])
    def test_bad_columns_fall_back(self, monkeypatch, raw):
        monkeypatch.setenv("COLUMNS", raw)
        assert probe_terminal(io.StringIO()).columns == DEFAULT_COLUMNS

    def test_no_color_disables_colour(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        assert probe_terminal(_TtyStream()).color_tier is ColorTier.NONE

    def test_truecolor_terminal(self, monkeypatch):
        monkeypatch.setenv("TERM", "xterm-256color")
        monkeypatch.setenv("COLORTERM", "truecolor")
        profile = probe_terminal(_TtyStream())
        assert profile.interactive is True
        assert profile.color_tier is ColorTier.TRUECOLOR
        assert profile.can_hide_cursor
