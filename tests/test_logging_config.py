"""
Tests for logging configuration.
"""
import logging

import pytest

from sweet_moment.logging_config import (
    DIAGNOSTICS_LOGGER,
    LIBRARY_LOGGERS,
    resolve_level,
    setup_logging,
)
from sweet_moment.services.diagnostics import CATALOG_DEFAULT_USED


@pytest.fixture(autouse=True)
def restore_levels():
    """setup_logging mutates global loggers; put them back after each test."""
    names = ("sweet_moment", DIAGNOSTICS_LOGGER) + LIBRARY_LOGGERS
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


class TestLevelResolution:
    def test_env_var_used_when_no_argument(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert resolve_level() == logging.WARNING

    def test_default_is_info(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert resolve_level() == logging.INFO

    def test_argument_beats_env_var(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert resolve_level("error") == logging.ERROR

    def test_unknown_name_is_info(self):
        assert resolve_level("VERBOSE") == logging.INFO


class TestSetupLogging:
    def test_package_logger_gets_level(self):
        assert setup_logging("ERROR") == logging.ERROR
        assert logging.getLogger("sweet_moment").level == logging.ERROR

    def test_library_loggers_quiet_outside_debug(self):
        setup_logging("INFO")
        for name in LIBRARY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_library_loggers_follow_debug(self):
        setup_logging("DEBUG")
        assert logging.getLogger("sqlalchemy.engine").level == logging.DEBUG
        assert logging.getLogger(DIAGNOSTICS_LOGGER).level == logging.DEBUG


class TestDiagnosticsVisibility:
    """Absorbed degradations are logged, even when the app runs quiet."""

    def test_recorder_warning_survives_error_level(self, recorder, caplog):
        setup_logging("ERROR")
        recorder.record(CATALOG_DEFAULT_USED, "No usable option source", catalog="size")

        records = [r for r in caplog.records if r.name == DIAGNOSTICS_LOGGER]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert CATALOG_DEFAULT_USED in records[0].getMessage()

    def test_other_warnings_follow_package_level(self, caplog):
        setup_logging("ERROR")
        logging.getLogger("sweet_moment.pricing").warning("not shown")
        assert not [r for r in caplog.records if r.name == "sweet_moment.pricing"]

    def test_cart_persist_failure_logged_at_error(self, caplog):
        from sweet_moment.schemas.cart import CartItem
        from sweet_moment.services.cart import CartStore

        class BrokenStorage:
            def get(self, key):
                return None

            def set(self, key, value):
                raise OSError("read-only file system")

        setup_logging("INFO")
        CartStore(BrokenStorage()).add(CartItem(id="Box", name="Box", price=10.0))

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert errors and "Failed to persist cart" in errors[0].getMessage()
