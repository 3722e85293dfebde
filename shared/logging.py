"""
Structured logging for linklens.

Sets up structlog with:
- Environment-based configuration (dev vs production)
- JSON formatting for production, pretty console for development
- IP hashing for GDPR compliance in production
- Sampling rates for high-frequency events (analytics queries, click tracking)

setup_logging() is called once from create_app(); modules only ever call
get_logger(__name__).
"""

from __future__ import annotations

import hashlib
import logging
import random
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import EventDict, Processor

if TYPE_CHECKING:
    from config import LoggingSettings


# Sampling rates for high-frequency events, overwritten by setup_logging()
SAMPLING_RATES: dict[str, float] = {
    "link_analytics": 0.20,
    "click_tracked": 0.05,
}

# Sensitive fields to redact from logs
REDACTED_FIELDS = {
    "password",
    "token",
    "authorization",
    "cookie",
    "access_token",
    "secret",
}

_state = {"production": False}


def get_logger(name: str) -> BoundLogger:
    """Return a structlog logger bound to *name* (typically ``__name__``)."""
    return structlog.get_logger(name)


def should_sample(event_type: str) -> bool:
    """Decide whether a high-frequency event should be logged.

    Events without a configured rate are always logged.
    """
    sample_rate = SAMPLING_RATES.get(event_type, 1.0)
    if sample_rate >= 1.0:
        return True
    if sample_rate <= 0.0:
        return False
    return random.random() < sample_rate


def hash_ip(ip_address: Optional[str]) -> Optional[str]:
    """Hash an IP address for logging.

    Production: first 16 hex chars of its SHA-256.
    Development: the IP unchanged for easier debugging.
    """
    if ip_address is None:
        return None
    if _state["production"] and ip_address:
        return hashlib.sha256(ip_address.encode()).hexdigest()[:16]
    return ip_address


def add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def redact_sensitive_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    for key in list(event_dict.keys()):
        if key in ("level", "event", "timestamp", "logger"):
            continue
        lowered = key.lower()
        if lowered in REDACTED_FIELDS or any(
            sensitive in lowered for sensitive in ("password", "token", "secret")
        ):
            event_dict[key] = "***REDACTED***"
    return event_dict


def configure_structlog(log_format: str) -> None:
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        redact_sensitive_fields,
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            pad_event=15,
            sort_keys=False,
        )

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_stdlib_logging(log_level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    # Silence pymongo debug logs (connection pool, server monitoring, etc.)
    for noisy in ("pymongo", "pymongo.connection", "pymongo.topology", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def setup_logging(settings: Optional["LoggingSettings"] = None) -> None:
    """Initialise stdlib logging and structlog from *settings*."""
    if settings is None:
        from config import LoggingSettings

        settings = LoggingSettings()

    _state["production"] = settings.is_production
    SAMPLING_RATES["link_analytics"] = settings.sample_rate_analytics
    SAMPLING_RATES["click_tracked"] = settings.sample_rate_click

    configure_stdlib_logging(settings.log_level)
    configure_structlog(settings.log_format)

    get_logger(__name__).info(
        "logging_initialized",
        env=settings.env,
        log_level=settings.log_level,
        log_format=settings.log_format,
    )
