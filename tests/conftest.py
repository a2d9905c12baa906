"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from unittest.mock import patch

import pytest


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_log_dir(tmp_path):
    """Keep the rotating log file out of the real user log directory."""
    import focus_companion.utils.logger as logger_mod

    with patch("focus_companion.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    app_logger = logging.getLogger("focus_companion")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
    app_logger.propagate = True
    logger_mod._logger = None


@pytest.fixture()
def tmp_config(tmp_path, monkeypatch):
    """Provide a real ConfigManager backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only and
    resets the cached global manager so commands pick up this instance.
    """
    import focus_companion.config as config_mod

    monkeypatch.delenv(config_mod.API_URL_ENV_VAR, raising=False)
    monkeypatch.setattr(config_mod, "_config_manager", None)
    tmpdir = str(tmp_path)
    with patch("focus_companion.config.user_config_dir", return_value=tmpdir):
        with patch("focus_companion.config.user_data_dir", return_value=tmpdir):
            yield config_mod.get_config_manager("default")
    config_mod._config_manager = None


@pytest.fixture()
def logged_in_config(tmp_config):
    """A temporary config with a stored bearer token."""
    tmp_config.save_credentials("test-token")
    return tmp_config


# ---------------------------------------------------------------------------
# Deterministic time
# ---------------------------------------------------------------------------


class ManualTick:
    """Tick handle driven by the test instead of an event loop."""

    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTickScheduler:
    """TickScheduler whose ticks fire only when ``advance`` is called."""

    def __init__(self):
        self.ticks: list[ManualTick] = []

    def schedule_repeating(self, interval, callback):
        tick = ManualTick(callback)
        self.ticks.append(tick)
        return tick

    @property
    def active(self) -> list[ManualTick]:
        return [t for t in self.ticks if not t.cancelled]

    def advance(self, seconds: int) -> None:
        for _ in range(seconds):
            live = self.active
            if not live:
                return
            for tick in live:
                tick.callback()


@pytest.fixture()
def manual_scheduler() -> ManualTickScheduler:
    return ManualTickScheduler()


FIXED_NOW = datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_clock():
    """A clock returning a constant UTC datetime."""
    return lambda: FIXED_NOW
