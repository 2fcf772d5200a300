"""
Logging setup for the supervisor process.

Registers a NOTICE level between INFO and WARNING, used for health
transitions, and maps configured level names onto logging levels.
"""

import logging
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'NOTICE': NOTICE,
    'WARN': logging.WARNING,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'FATAL': logging.CRITICAL,
}


def parse_level(level_name: str) -> int:
    """Map a configured level name to a logging level."""
    try:
        return LEVELS[str(level_name).upper()]
    except KeyError:
        raise ConfigurationError(f"Log level not understood: {level_name}")


def configure_logging(level_name: str = 'INFO', log_file: Optional[str] = None) -> int:
    """
    Configure root logging.

    Args:
        level_name: Configured level name
        log_file: Optional file to log into as well as the console

    Returns:
        The numeric level applied
    """
    level = parse_level(level_name)

    logging.basicConfig(level=level, format=LOG_FORMAT)
    root = logging.getLogger()
    root.setLevel(level)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    return level
