"""structlog setup shared by the API and the admin script.

Events are key/value pairs (``logger.info("user_deleted", user_id=3)``).
Request-scoped values such as ``request_id`` arrive through
``structlog.contextvars`` and are merged into every line. Credential
material is masked before rendering, whatever the caller passed.
"""

import logging
import sys
from typing import Any, Literal

import structlog

REDACTED = "***"
SENSITIVE_KEYS = frozenset({"password", "password_hash", "access_token", "token"})

# Chatty third-party loggers held at WARNING
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "sqlalchemy.engine")


def redact_secrets(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging(
    log_level: str = "INFO",
    log_format: Literal["json", "console"] = "json",
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Level name such as ``INFO`` or ``DEBUG``. Unknown names
            fall back to ``INFO``.
        log_format: ``json`` for one JSON object per line, ``console`` for
            coloured output during local development.
    """
    level = logging.getLevelNamesMapping().get(log_level.upper(), logging.INFO)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_secrets,
    ]
    if log_format == "json":
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(log_format))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to *name*."""
    return structlog.get_logger(name)
