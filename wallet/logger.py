"""
Ledger Logging

Every mutation of the ledger emits one structured event, and every
refused operation emits a warning naming the error kind.

The events go through structlog on top of the stdlib "wallet" logger,
so embedding applications can route or silence them with plain
logging configuration.
"""

import logging
from typing import Optional

import structlog

from wallet.config import WalletSettings, get_settings


ROOT_LOGGER_NAME = "wallet"


def configure_logging(
    settings: Optional[WalletSettings] = None,
    attach_handler: bool = False,
) -> None:
    """
    Configure structlog and the stdlib "wallet" logger.

    Handlers are left to the embedding application unless attach_handler
    is set, in which case a single stderr handler is added.
    Safe to call more than once; the last call wins.
    """
    settings = settings or get_settings()

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

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
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(settings.log_level)
    if attach_handler and not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)


def get_logger(name: str = ROOT_LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to a stdlib logger under "wallet"."""
    return structlog.get_logger(name)


configure_logging()
