"""Mini README: Logging helpers shared by the Farm Ledger modules.

Structure:
    * get_logger - module logger factory; every ledger, store and report module
      holds ``LOGGER = get_logger(__name__)``.
    * configure_root_logger - installs the single stream handler and sets the
      level chosen by ``FarmLedgerSettings.log_level``.

Usage:
    The CLI ``run`` command and ``create_application`` call
    ``configure_root_logger`` with the configured level. Repeated calls only
    adjust the level, so the reloading development server never stacks
    handlers. Ledger mutations log at INFO, skipped operations on missing
    entities at DEBUG or WARNING, and corrupt stores at WARNING.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False


def configure_root_logger(level: int = logging.INFO) -> None:
    """Configure the root logger with a readable, timestamped formatter."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        logging.getLogger().setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
