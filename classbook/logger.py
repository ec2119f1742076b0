"""
Logging setup for classbook.

The CLI calls configure_logging once; every other module only asks for a
named logger and never touches handlers.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send classbook records to stdout at the given level (e.g. "DEBUG")."""
    root = logging.getLogger()
    root.handlers.clear()

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(stream)
    root.setLevel(level.upper())

    # echo_sql decides SQL output
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
