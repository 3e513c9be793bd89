"""Unit tests for per-category logging setup."""

import logging

from app.config import Settings
from app.infrastructure.logging.log_config import setup_logging


def test_category_levels_are_applied():
    settings = Settings(
        log_level="DEBUG",
        log_level_sql="ERROR",
        log_level_storage="warning",
        _env_file=None,
    )
    setup_logging(settings)

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.ERROR
    assert logging.getLogger("app.infrastructure.storage").level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    setup_logging(Settings(log_level_http="LOUD", _env_file=None))
    assert logging.getLogger("httpx").level == logging.INFO
