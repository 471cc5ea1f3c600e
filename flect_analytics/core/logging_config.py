import logging
import sys
from typing import Optional

from flect_analytics.core.config import settings

CONSOLE_HANDLER_NAME = "flect_console"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure logging for the analytics library.

    Library modules only create loggers; the host application decides whether
    to call this to attach a console handler.
    """
    logger = logging.getLogger("flect_analytics")
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    # Called more than once: keep the existing console handler
    if any(h.get_name() == CONSOLE_HANDLER_NAME for h in logger.handlers):
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)
