"""Tests for environment-driven settings and logging setup."""

import logging

from comicrig.config import LOG_FORMAT, Settings, configure_logging


def test_defaults():
    config = Settings(_env_file=None)
    assert config.min_font_size < config.max_font_size
    assert config.reading_direction == "ltr"
    assert config.panel_margin == 2.5


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MAX_FONT_SIZE", "30")
    monkeypatch.setenv("READING_DIRECTION", "rtl")
    config = Settings(_env_file=None)
    assert config.max_font_size == 30.0
    assert config.reading_direction == "rtl"


def test_configure_logging_uses_configured_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    configure_logging(Settings(_env_file=None, comicrig_log_level="debug"))
    assert calls == [{"level": logging.DEBUG, "format": LOG_FORMAT}]


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    configure_logging(Settings(_env_file=None, comicrig_log_level="chatty"))
    assert calls[0]["level"] == logging.INFO
