"""Tests for settings and logging setup."""

import logging

from src.core.config import Settings
from src.core.logger import ROOT_LOGGER_NAME, get_logger, setup_logging


def test_defaults():
    config = Settings()
    assert config.ASYNC_DATABASE_URL.startswith("sqlite+aiosqlite")
    assert config.AI_MODEL


def test_cors_origins_split():
    config = Settings(CORS_ORIGINS="http://a.test, http://b.test")
    assert config.cors_origins == ["http://a.test", "http://b.test"]


def test_ai_configured():
    assert Settings(OPENROUTER_API_KEY="k").ai_configured is True
    assert Settings(OPENROUTER_API_KEY="").ai_configured is False


def test_get_now_is_timezone_aware():
    assert Settings(TIME_ZONE="UTC").get_now().tzinfo is not None


def test_loggers_share_application_namespace():
    setup_logging("DEBUG")
    root = logging.getLogger(ROOT_LOGGER_NAME)
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG
    assert get_logger("src.apps.blog").name == "blogify.apps.blog"

    setup_logging("WARNING")
    assert len(root.handlers) == 1
