"""Configure application logging using the Python standard library.

A single console handler is installed on the root logger; modules log
through ``logging.getLogger(__name__)``.
"""

import logging
from typing import Optional, Union

from retail_orders.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """Configure the root logger with a plain console handler.

    Args:
        level: Logging level for the root logger. Defaults to
            ``settings.LOG_LEVEL``.
    """
    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root = logging.getLogger()
    root.setLevel(level)
    # Remove any default handlers (e.g. from basicConfig)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler.setLevel(level)
    root.addHandler(console_handler)

    # SQL echo goes through settings.DATABASE_ECHO, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
