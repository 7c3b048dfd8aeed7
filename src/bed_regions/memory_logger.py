import logging
import os
import sys

from typing import IO, Optional

import psutil

DEFAULT_FORMAT = "[%(asctime)s - %(levelname)s - %(memory_usage).2f MB] %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# marks handlers installed by configure_memory_logger
_MANAGED_ATTR = "_bed_regions_memory_handler"


def get_memory_usage() -> float:
    """Get current memory usage in MB"""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024  # Convert bytes to MB


class MemoryUsageFilter(logging.Filter):
    """Attaches `memory_usage` to records that do not already carry it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "memory_usage"):
            record.memory_usage = get_memory_usage()
        return True


def configure_memory_logger(
    logger: logging.Logger,
    stream: Optional[IO[str]] = None,
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    replace_managed_handlers: bool = False,
) -> list[logging.Handler]:
    """Add handlers whose records include the resident memory of the process.

    **Arguments:**

    - `logger`: Logger to configure.
    - `stream`: Text stream for a `StreamHandler`; skipped if `None`.
    - `log_file`: Path for a `FileHandler`; skipped if `None`.
    - `level`: Level set on the logger.
    - `fmt`: Format string; may reference `%(memory_usage)`.
    - `replace_managed_handlers`: Remove handlers added by a previous call first.

    **Returns:**

    - The handlers that were added.
    """
    if replace_managed_handlers:
        remove_managed_memory_handlers(logger)

    formatter = logging.Formatter(fmt=fmt, datefmt=DEFAULT_DATE_FORMAT)
    handlers: list[logging.Handler] = []
    if stream is not None:
        handlers.append(logging.StreamHandler(stream))
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(MemoryUsageFilter())
        setattr(handler, _MANAGED_ATTR, True)
        logger.addHandler(handler)

    logger.setLevel(level)
    return handlers


def remove_managed_memory_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _MANAGED_ATTR, False):
            logger.removeHandler(handler)
            handler.close()


class MemoryLogger:
    """Thin wrapper over a `logging.Logger` that stamps records with memory usage.

    If the wrapped logger has no handlers yet, a console handler is installed (plus a file
    handler when `log_file` is given); a preconfigured logger is used as is.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        log_file: Optional[str] = None,
    ):
        if logger is None:
            logger = logging.getLogger(name)
        self.logger = logger

        if not self.logger.handlers:
            configure_memory_logger(self.logger, stream=sys.stderr, log_file=log_file)

    def _log(self, level: int, message: str) -> None:
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(level, message, extra={"memory_usage": get_memory_usage()})

    def debug(self, message: str) -> None:
        """Log debug message with memory usage"""
        self._log(logging.DEBUG, message)

    def info(self, message: str) -> None:
        """Log info message with memory usage"""
        self._log(logging.INFO, message)

