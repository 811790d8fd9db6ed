"""Optional logging setup for applications that use the client.

Library modules only call `structlog.get_logger(__name__)`. Nothing here runs
unless the application asks for it.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.stdlib import ProcessorFormatter

from tailscale_client.config.redact import redact_settings_dict

if TYPE_CHECKING:
    from tailscale_client.config.settings import Settings

_LOG_FORMATS = frozenset({"json", "human"})

# httpx/httpcore log every request line, URL included, at INFO/DEBUG.
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def _scrub_event_dict(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    return redact_settings_dict(event_dict)


def _pick_format(log_format: str | None, json_logs: bool) -> str:
    for candidate in (log_format, os.environ.get("LOG_FORMAT")):
        normalized = (candidate or "").strip().lower()
        if normalized in _LOG_FORMATS:
            return normalized
    return "json" if json_logs else "human"


def _pick_level(log_level: str) -> str:
    override = (os.environ.get("LOG_LEVEL") or "").strip()
    return (override or log_level).upper()


def _pre_chain() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _scrub_event_dict,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def configure_logging(
    *,
    log_level: str = "INFO",
    json_logs: bool = False,
    log_format: str | None = None,
) -> None:
    """
    Route structlog and stdlib records through one stdout handler.

    `log_format` ("json" or "human") wins over LOG_FORMAT, which wins over
    `json_logs`. LOG_LEVEL overrides `log_level`. Secrets are scrubbed from
    every event before rendering, and the transport loggers stay at WARNING.
    """
    pre_chain = _pre_chain()
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if _pick_format(log_format, json_logs) == "json"
        else structlog.dev.ConsoleRenderer()
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(_pick_level(log_level))
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging_from_settings(settings: Settings) -> None:
    observability = settings.observability
    configure_logging(
        log_level=observability.log_level,
        json_logs=observability.json_logs,
        log_format=observability.log_format,
    )
