"""Unit tests for per-category logging configuration."""

import logging

import pytest

from app.config import get_settings
from app.infrastructure.logging.log_config import _parse_level, setup_logging


@pytest.fixture
def fresh_settings(monkeypatch):
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


def test_parse_level():
    assert _parse_level("debug") == logging.DEBUG
    assert _parse_level("WARNING") == logging.WARNING
    assert _parse_level("nonsense") == logging.INFO


def test_setup_logging_applies_category_levels(fresh_settings):
    fresh_settings.setenv("LOG_LEVEL_CLONING", "DEBUG")
    fresh_settings.setenv("LOG_LEVEL_EVENTS", "ERROR")

    setup_logging()

    assert logging.getLogger("app.application.services.clone_service").level == logging.DEBUG
    assert logging.getLogger("app.infrastructure.events").level == logging.ERROR
