import logging
import os
import sys
from typing import Optional

import structlog


def json_logs_enabled() -> bool:
    return os.getenv("JSON_LOGS", "0").lower() in {"1", "true", "yes"}


def configure_logging(
    level: str = "INFO",
    json_logs: Optional[bool] = None,
) -> None:
    """
    Configure structlog on top of the stdlib ``logging`` module.

    With ``json_logs`` the final renderer emits one JSON object per line,
    otherwise a coloured console renderer is used for development.
    ``json_logs`` defaults to the ``JSON_LOGS`` environment variable.
    Must be called before any module creates its loggers.
    """

    if json_logs is None:
        json_logs = json_logs_enabled()

    # Shared by structlog and by foreign (stdlib / Django) log records
    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    final_processor = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)
        ),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=final_processor,
        foreign_pre_chain=pre_chain,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.captureWarnings(True)
