"""structlog setup for the calculation engine and the CLI.

Events are rendered by structlog and handed to the stdlib root logger, which
writes to stderr so ``gst-billing calculate --json`` keeps stdout parseable.
The calculator binds ``document_type`` for the duration of each calculation,
so every event it (or the split and tax-code helpers) emits carries it.
"""

import logging
import sys
from decimal import Decimal
from typing import Any, ContextManager

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from gst_billing.config import Settings, get_settings


def _stringify_decimals(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Render Decimal amounts as plain strings instead of their repr."""
    for key, value in event_dict.items():
        if isinstance(value, Decimal):
            event_dict[key] = str(value)
    return event_dict


def _app_context(settings: Settings) -> Processor:
    def add_app_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("app", settings.app_name)
        event_dict.setdefault("version", settings.app_version)
        event_dict.setdefault("environment", settings.environment.value)
        return event_dict

    return add_app_context


def build_processors(settings: Settings) -> list[Processor]:
    """Processor chain for ``settings.log_format``.

    JSON output carries the application context and formatted tracebacks for
    log shippers. Console output stays short and is colored only on a TTY.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _stringify_decimals,
    ]
    if settings.log_format == "json":
        processors += [
            _app_context(settings),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib bridge from ``settings``.

    Call once at startup, before the container builds any service.
    """
    if settings is None:
        settings = get_settings()

    log_level = getattr(logging, settings.log_level.value)

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure logging between cases
        cache_logger_on_first_use=not settings.is_testing,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)

    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        logging.getLogger().addHandler(file_handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Example:
        logger = get_logger(__name__)
        logger.info("document_calculated", line_count=3, grand_total=Decimal("1692"))
    """
    return structlog.stdlib.get_logger(name)


def log_context(**kwargs: Any) -> ContextManager[None]:
    """Bind ``kwargs`` to every event logged inside the ``with`` block.

    Example:
        with log_context(actor="Admin User", source="quote.json"):
            service.calculate(document)
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
