"""structlog setup for the command line.

The library modules only call ``structlog.get_logger``; configuring output is
left to the entry point.
"""

import logging
import os
from typing import Optional

import structlog


def configure_logging(level: str = "INFO", json_logs: Optional[bool] = None) -> None:
    """Configure stdlib logging and the structlog processor chain.

    Args:
        level: Log level name, e.g. "DEBUG"; unknown names fall back to INFO
        json_logs: Render JSON instead of console output. Defaults to True
            when APP_ENV is "production".
    """
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO))

    if json_logs is None:
        json_logs = os.getenv("APP_ENV", os.getenv("ENVIRONMENT", "development")).lower() == "production"

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
