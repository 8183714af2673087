"""Logging setup for the nova CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers. Handlers
are attached here once per CLI invocation: stderr always, plus a log file when
``logging.file`` is configured.
"""

import logging
import sys
from typing import List, Optional

DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _attach(root_logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def setup_logging(
    log_level: int = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = None
) -> List[logging.Handler]:
    """Replaces the root logger's handlers with nova's.

    Args:
        log_level: Minimum level for the root logger and every handler.
        log_format: ``logging.Formatter`` format string.
        log_file: Optional path of a file that also receives the records.

    Returns:
        The handlers now attached to the root logger.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(log_format)
    # stdout carries command output
    _attach(root_logger, logging.StreamHandler(sys.stderr), log_level, formatter)

    if log_file:
        try:
            _attach(root_logger, logging.FileHandler(log_file, encoding='utf-8'), log_level, formatter)
        except OSError as e:
            root_logger.error(f"Cannot write log file {log_file}: {e}", exc_info=True)
        else:
            root_logger.info(f"Logging to file: {log_file}")

    root_logger.debug(f"Logging ready at level {logging.getLevelName(log_level)}")
    return list(root_logger.handlers)


def parse_log_level(name: str, default: int = DEFAULT_LOG_LEVEL) -> int:
    """Maps a level name such as 'debug' to its logging constant."""
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else default
