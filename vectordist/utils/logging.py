"""
Logging utilities for vectordist.

Metric kernels never log; logging is reserved for the registry,
gradient checks and configuration loading. Module loggers are children
of the "vectordist" logger and inherit its handlers.
"""

import logging
import sys
from typing import List, Optional, Union


ROOT_LOGGER = "vectordist"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Names of loggers that carry handlers installed by setup_logger
_configured: set = set()


def _parse_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper())


def _make_handlers(
    formatter: logging.Formatter,
    log_file: Optional[str],
) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logger(
    name: str = ROOT_LOGGER,
    level: Union[str, int] = "INFO",
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up and configure a logger.

    Calling this again for the same name replaces the previous handlers.

    Args:
        name: Logger name
        level: Log level name (DEBUG, INFO, ...) or numeric level
        format_string: Custom format string
        log_file: Optional file to mirror console output to

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(_parse_level(level))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string or LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in _make_handlers(formatter, log_file):
        logger.addHandler(handler)

    _configured.add(name)
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get a logger by name.

    The package logger is configured with defaults on first use, so
    module loggers such as "vectordist.distance.registry" always have
    somewhere to propagate to.
    """
    if ROOT_LOGGER not in _configured:
        setup_logger(ROOT_LOGGER)
    return logging.getLogger(name)


class LogContext:
    """
    Temporarily change a logger's level.

    Example:
        >>> with LogContext("vectordist", "DEBUG"):
        ...     register_metric("mine", fn)
    """

    def __init__(self, logger: Union[str, logging.Logger], level: Union[str, int]):
        if isinstance(logger, str):
            logger = logging.getLogger(logger)
        self.logger = logger
        self.level = _parse_level(level)
        self._saved = logger.level

    def __enter__(self) -> logging.Logger:
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(self, *args) -> None:
        self.logger.setLevel(self._saved)


def configure_logging(settings=None) -> logging.Logger:
    """
    Configure the package logger from Settings.

    Args:
        settings: config.Settings instance (default: load_config())

    Returns:
        The configured "vectordist" logger
    """
    if settings is None:
        from config.settings import load_config
        settings = load_config()

    return setup_logger(ROOT_LOGGER, level=settings.log_level, log_file=settings.log_file)
