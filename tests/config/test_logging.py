"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
import logging.handlers

import pytest
import structlog

from krb5sync.config.logging import SYSLOG_ONLY, configure_logging
from krb5sync.config.models import LoggingConfig

_NO_SYSLOG = LoggingConfig(syslog=False)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, config=_NO_SYSLOG)
        assert logging.getLogger("krb5sync").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_default_keeps_info_for_syslog(self) -> None:
        configure_logging(verbose=False, config=_NO_SYSLOG)
        assert logging.getLogger("krb5sync").level == logging.INFO
        (handler,) = logging.getLogger().handlers
        assert handler.level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True, config=_NO_SYSLOG)
        log = structlog.get_logger("krb5sync.test")
        log.warning("json test", user="alice")
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["user"] == "alice"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "krb5sync.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True, config=_NO_SYSLOG)
        logging.getLogger("krb5sync.services.sync").info("AD status change for bob succeeded")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "AD status change for bob succeeded"
        assert parsed["level"] == "info"

    def test_info_hidden_from_stderr_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(config=_NO_SYSLOG)
        logging.getLogger("krb5sync.services.sync").info("quiet notice")
        assert capfd.readouterr().err == ""

    def test_syslog_only_records_skip_stderr(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, config=_NO_SYSLOG)
        logging.getLogger("krb5sync.commands").error("already printed", extra=SYSLOG_ONLY)
        assert capfd.readouterr().err == ""

    def test_udp_syslog_handler_added(self) -> None:
        configure_logging(config=LoggingConfig(syslog_address="127.0.0.1:5514", ident="krb5-sync"))
        handlers = [
            h for h in logging.getLogger().handlers if isinstance(h, logging.handlers.SysLogHandler)
        ]
        assert len(handlers) == 1
        (syslog,) = handlers
        assert syslog.facility == logging.handlers.SysLogHandler.LOG_AUTH
        assert syslog.address == ("127.0.0.1", 5514)
        assert syslog.ident.startswith("krb5-sync[")
        assert syslog.level == logging.INFO
        syslog.close()

    def test_missing_syslog_socket_skipped(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(config=LoggingConfig(syslog_address="/nonexistent/dev/log"))
        handlers = logging.getLogger().handlers
        assert not any(isinstance(h, logging.handlers.SysLogHandler) for h in handlers)
        assert "Syslog socket /nonexistent/dev/log not found" in capfd.readouterr().err

    def test_bad_port_skips_syslog(self) -> None:
        configure_logging(config=LoggingConfig(syslog_address="loghost:notaport"))
        handlers = logging.getLogger().handlers
        assert not any(isinstance(h, logging.handlers.SysLogHandler) for h in handlers)

    def test_unknown_facility_skips_syslog(self) -> None:
        configure_logging(config=LoggingConfig(syslog=True, facility="nonsense"))
        handlers = logging.getLogger().handlers
        assert not any(isinstance(h, logging.handlers.SysLogHandler) for h in handlers)

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, config=_NO_SYSLOG)
        configure_logging(verbose=True, log_json=True, config=_NO_SYSLOG)
        assert len(logging.getLogger().handlers) == 1
