"""Pytest configuration and shared fixtures for hired tests."""

from __future__ import annotations

import logging
import os

import pytest

from hired.models import ColorTier, DisplayConfig, TerminalProfile
from hired.terminal.session import Terminal
from tests.utils.fakes import FakeClock, RecordingStream


def pytest_configure(config):
    """Register all project markers to avoid warnings when ini isn't loaded."""
    markers = [
        ("unit", "marks tests as unit tests"),
        ("integration", "marks tests as integration tests"),
        ("cli", "marks tests as CLI tests"),
        ("terminal", "marks tests as terminal output tests"),
        ("render", "marks tests as typing/animation tests"),
        ("config", "marks tests as configuration tests"),
        ("tools", "marks tests as external tool provider tests"),
        ("scene", "marks tests as scene tests"),
    ]
    for name, desc in markers:
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep the user's settings, config files and colour preferences out of tests."""
    for key in list(os.environ):
        if key.startswith("HIRED_"):
            monkeypatch.delenv(key, raising=False)
    for key in ("NO_COLOR", "FORCE_COLOR", "COLUMNS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    package_logger = logging.getLogger("hired")
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def stream() -> RecordingStream:
    return RecordingStream()


@pytest.fixture
def make_terminal(stream):
    """Build a terminal on the recording stream."""

    def _make(
        columns: int = 80,
        color_tier: ColorTier = ColorTier.EIGHT_BIT,
        interactive: bool = False,
    ) -> Terminal:
        profile = TerminalProfile(
            columns=columns,
            color_tier=color_tier,
            interactive=interactive,
        )
        return Terminal(stream, profile)

    return _make


@pytest.fixture
def terminal(make_terminal) -> Terminal:
    return make_terminal()


@pytest.fixture
def display_config() -> DisplayConfig:
    return DisplayConfig(name="Ada", company="Acme", role="Engineer", start="Monday")
