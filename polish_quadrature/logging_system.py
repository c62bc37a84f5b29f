"""
Logging System for Prefix Formula Quadrature

Centralized logger with verbosity levels, so that long integrations can
report progress without cluttering the terminal by default.
"""

import logging
import sys
from typing import Any, Dict, List, Optional
from enum import Enum
import time
from datetime import datetime


class LogLevel(Enum):
    """Verbosity levels"""
    SILENT = 0      # No output except critical errors
    MINIMAL = 1     # Results, warnings and critical info
    MODERATE = 2    # Progress updates and key milestones
    DETAILED = 3    # Per-integration summaries
    VERBOSE = 4     # All information including debug details

    @classmethod
    def from_name(cls, name: str) -> 'LogLevel':
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None


class QuadratureLogger:
    """
    Leveled wrapper around the 'polish_quadrature' standard logger
    """

    # Handlers installed by any QuadratureLogger; handlers attached by the
    # application are never touched
    _installed_handlers: List[logging.Handler] = []

    def __init__(self, log_level: LogLevel = LogLevel.MINIMAL,
                 log_to_file: bool = False, log_file_path: Optional[str] = None,
                 stream=None):
        self.log_level = log_level
        self.log_to_file = log_to_file
        self.stream = stream
        self.start_time = time.time()
        self.last_progress_time = 0.0

        if log_to_file and log_file_path is None:
            log_file_path = f"polish_quadrature_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        self.log_file_path = log_file_path

        self.logger = logging.getLogger('polish_quadrature')
        self.logger.setLevel(logging.DEBUG)
        self._install_handlers()

    def _install_handlers(self):
        for handler in QuadratureLogger._installed_handlers:
            self.logger.removeHandler(handler)
            handler.close()
        QuadratureLogger._installed_handlers = []

        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )
        handlers: List[logging.Handler] = []

        if self.log_level != LogLevel.SILENT:
            handlers.append(logging.StreamHandler(self.stream or sys.stderr))

        if self.log_to_file:
            handlers.append(logging.FileHandler(self.log_file_path))

        for handler in handlers:
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        QuadratureLogger._installed_handlers = handlers

    def set_level(self, log_level: LogLevel):
        was_silent = self.log_level == LogLevel.SILENT
        self.log_level = log_level
        if was_silent != (log_level == LogLevel.SILENT):
            self._install_handlers()

    def is_enabled(self, required_level: LogLevel) -> bool:
        return self._should_log(required_level)

    def _should_log(self, required_level: LogLevel) -> bool:
        return self.log_level.value >= required_level.value

    def critical(self, message: str):
        """Always logged - critical errors and failures"""
        if self.log_level != LogLevel.SILENT:
            self.logger.error(f"CRITICAL: {message}")

    def info(self, message: str, required_level: LogLevel = LogLevel.MINIMAL):
        if self._should_log(required_level):
            self.logger.info(message)

    def progress(self, message: str, force: bool = False):
        """Progress updates - throttled to one every 2 seconds unless forced"""
        if not self._should_log(LogLevel.MODERATE):
            return

        current_time = time.time()
        if force or (current_time - self.last_progress_time) >= 2.0:
            self.logger.info(f"PROGRESS: {message}")
            self.last_progress_time = current_time

    def milestone(self, message: str):
        if self.log_level != LogLevel.SILENT:
            self.logger.info(f"MILESTONE: {message}")

    def warning(self, message: str):
        if self._should_log(LogLevel.MINIMAL):
            self.logger.warning(message)

    def debug(self, message: str):
        if self._should_log(LogLevel.VERBOSE):
            self.logger.debug(f"DEBUG: {message}")

    def result_summary(self, results: Dict[str, Any]):
        if not self._should_log(LogLevel.DETAILED):
            return

        self.logger.info("=" * 60)
        self.logger.info("INTEGRATION RESULT:")
        self.logger.info("=" * 60)

        for key, value in results.items():
            if isinstance(value, float):
                self.logger.info(f"{key:.<30} {value:.12g}")
            else:
                self.logger.info(f"{key:.<30} {value}")


_global_logger: Optional[QuadratureLogger] = None


def get_logger() -> QuadratureLogger:
    """Get or create the global logger instance"""
    global _global_logger
    if _global_logger is None:
        _global_logger = QuadratureLogger()
    return _global_logger


def set_log_level(level: LogLevel):
    global _global_logger
    if _global_logger is None:
        _global_logger = QuadratureLogger(log_level=level)
    else:
        _global_logger.set_level(level)


def configure_logging(log_level: LogLevel = LogLevel.MINIMAL,
                      log_to_file: bool = False,
                      log_file_path: Optional[str] = None,
                      stream=None) -> QuadratureLogger:
    """Configure the global logging system"""
    global _global_logger
    _global_logger = QuadratureLogger(
        log_level=log_level,
        log_to_file=log_to_file,
        log_file_path=log_file_path,
        stream=stream
    )
    return _global_logger


def log_info(message: str, level: LogLevel = LogLevel.MINIMAL):
    get_logger().info(message, level)


def log_progress(message: str, force: bool = False):
    get_logger().progress(message, force)


def log_milestone(message: str):
    get_logger().milestone(message)


def log_warning(message: str):
    get_logger().warning(message)


def log_debug(message: str):
    get_logger().debug(message)
