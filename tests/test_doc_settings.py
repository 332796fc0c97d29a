"""Tests for settings and logging setup."""
import logging

import pytest

import doc_settings
from doc_settings import configure_logging, float_setting, log_level


def test_budget_constants():
    assert doc_settings.TARGET_WORDS == 2700
    assert doc_settings.CODE_LINE_WEIGHT == 15


def test_float_setting_default_when_unset(monkeypatch):
    monkeypatch.delenv("WATCH_INTERVAL", raising=False)

    assert float_setting("WATCH_INTERVAL", 1.0) == 1.0


def test_float_setting_blank_uses_default(monkeypatch):
    monkeypatch.setenv("WATCH_INTERVAL", "  ")

    assert float_setting("WATCH_INTERVAL", 1.0) == 1.0


def test_float_setting_reads_env(monkeypatch):
    monkeypatch.setenv("WATCH_INTERVAL", "0.25")

    assert float_setting("WATCH_INTERVAL", 1.0) == 0.25


def test_float_setting_rejects_garbage(monkeypatch):
    monkeypatch.setenv("WATCH_INTERVAL", "soon")

    with pytest.raises(ValueError, match="WATCH_INTERVAL"):
        float_setting("WATCH_INTERVAL", 1.0)


@pytest.mark.parametrize("name, expected", [
    ("DEBUG", logging.DEBUG),
    ("info", logging.INFO),
    (" error ", logging.ERROR),
    ("loud", logging.WARNING),
    ("", logging.WARNING),
    (logging.CRITICAL, logging.CRITICAL),
])
def test_log_level(name, expected):
    assert log_level(name) == expected


def test_configure_logging_unknown_level_does_not_raise():
    configure_logging("loud")
