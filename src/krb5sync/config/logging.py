"""structlog configuration for krb5-sync.

Two stderr output modes:
- Human (default): colored console output when stderr is a TTY
- JSON (--log-json): Structured JSON lines

Every record at INFO and above is also sent to syslog (LOG_AUTH by
default) so that it lands next to kadmind's own log lines.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

from krb5sync.config.models import LoggingConfig

# Pass as ``extra`` to send a record to syslog but not to stderr, for
# messages the CLI already prints itself.
SYSLOG_ONLY = {"krb5sync_syslog_only": True}


class _SkipSyslogOnly(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return not getattr(record, "krb5sync_syslog_only", False)


def _drop_timestamp(
    _logger: Any,
    _method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    # syslog stamps its own time.
    event_dict.pop("timestamp", None)
    return event_dict


def _build_syslog_handler(
    config: LoggingConfig,
    shared_processors: list[structlog.types.Processor],
) -> logging.Handler | None:
    facility = logging.handlers.SysLogHandler.facility_names.get(config.facility)
    if facility is None:
        logging.getLogger(__name__).warning("Unknown syslog facility %r", config.facility)
        return None
    # "/dev/log" style paths are unix sockets, anything else is host[:port] over UDP.
    unix_socket = config.syslog_address.startswith("/")
    if unix_socket and not Path(config.syslog_address).exists():
        logging.getLogger(__name__).warning(
            "Syslog socket %s not found, logging to stderr only", config.syslog_address
        )
        return None
    try:
        address: str | tuple[str, int] = config.syslog_address
        if not unix_socket:
            host, sep, port = config.syslog_address.partition(":")
            address = (host, int(port) if sep else logging.handlers.SYSLOG_UDP_PORT)
        handler = logging.handlers.SysLogHandler(address=address, facility=facility)
    except (OSError, ValueError) as exc:
        logging.getLogger(__name__).warning(
            "Syslog unavailable at %s: %s", config.syslog_address, exc
        )
        return None
    handler.ident = f"{config.ident}[{os.getpid()}]: "
    handler.setLevel(logging.INFO)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _drop_timestamp,
                structlog.dev.ConsoleRenderer(colors=False),
            ],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    config: LoggingConfig | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Show DEBUG-level output on stderr. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer on stderr.
        config: ``[logging]`` section; syslog routing is skipped when
            ``syslog`` is false.
    """
    config = config or LoggingConfig()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handler.addFilter(_SkipSyslogOnly())

    root_logger = logging.getLogger()
    for old in root_logger.handlers[:]:
        root_logger.removeHandler(old)
        if isinstance(old, logging.handlers.SysLogHandler):
            old.close()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    app_logger = logging.getLogger("krb5sync")
    app_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if config.syslog:
        syslog_handler = _build_syslog_handler(config, shared_processors)
        if syslog_handler is not None:
            root_logger.addHandler(syslog_handler)

    logging.getLogger("gssapi").setLevel(logging.WARNING)
