"""
Logging setup shared by the API and the CLI
"""
import logging
import sys
from typing import Optional

from storefront.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the `storefront` logger hierarchy.

    - One console handler (stderr) with a timestamped format
    - Level from the argument, or from settings (LOG_LEVEL / ENVIRONMENT)
    - Safe to call more than once: handlers are only installed the first time
    """
    logger = logging.getLogger("storefront")
    logger.setLevel((level or settings.get_log_level()).upper())

    # Avoid duplicate handlers if configure_logging() is called again
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    # Keep uvicorn/httpx chatter out of debug runs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger.debug("Logging configured")
    return logger
