"""
Logging System for Symbolic Calculus

One package-wide logger behind a verbosity switch. Parsing, differentiation
and registry bookkeeping report through `log_debug`; registry conflicts
through `log_warning`. Output goes to stderr.
"""

import logging
import sys
from typing import Optional
from enum import Enum


class LogLevel(Enum):
    """Verbosity of the package logger"""
    SILENT = 0      # Nothing at all
    MINIMAL = 1     # Warnings
    MODERATE = 2
    DETAILED = 3
    VERBOSE = 4     # Warnings and debug traces


class CalculusLogger:
    """Filters messages by verbosity before handing them to `logging`"""

    def __init__(self, log_level: LogLevel = LogLevel.MODERATE):
        self.log_level = log_level

        self.logger = logging.getLogger('symbolic_calculus')
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        self.logger.handlers.clear()

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
        self.logger.addHandler(handler)

    def enabled(self, required_level: LogLevel) -> bool:
        if self.log_level == LogLevel.SILENT:
            return False
        return self.log_level.value >= required_level.value

    def warning(self, message: str):
        if self.enabled(LogLevel.MINIMAL):
            self.logger.warning(message)

    def debug(self, message: str):
        if self.enabled(LogLevel.VERBOSE):
            self.logger.debug(message)


_global_logger: Optional[CalculusLogger] = None


def get_logger() -> CalculusLogger:
    global _global_logger
    if _global_logger is None:
        _global_logger = CalculusLogger()
    return _global_logger


def set_log_level(level: LogLevel):
    """Change the verbosity of the existing logger, creating it if needed"""
    get_logger().log_level = level


def configure_logging(log_level: LogLevel = LogLevel.MODERATE) -> CalculusLogger:
    """Replace the package logger, reattaching its stderr handler"""
    global _global_logger
    _global_logger = CalculusLogger(log_level=log_level)
    return _global_logger


def debug_enabled() -> bool:
    """True when debug messages would be emitted; guards costly message building"""
    return get_logger().enabled(LogLevel.VERBOSE)


def log_warning(message: str):
    get_logger().warning(message)


def log_debug(message: str):
    get_logger().debug(message)
