import os
import traceback
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def rank(self) -> int:
        return list(LogLevel).index(self)


class Slogger:
    """File logger shared by the app, its services and its screens.

    Lines look like ``2025-01-15 10:30:00 - INFO - Navigating to /members | route=/members``.
    When the file grows past ``max_bytes`` it is moved to ``<path>.1`` and a new one is started.
    """

    log_path = os.environ.get("GYM_DASHBOARD_LOG", "logs/gym_dashboard.log")
    min_level = LogLevel.DEBUG
    max_bytes = 2 * 1024 * 1024

    @classmethod
    def configure(
        cls,
        path: Optional[str] = None,
        min_level: Optional[LogLevel] = None,
        max_bytes: Optional[int] = None,
    ) -> None:
        if path:
            cls.log_path = path
        if min_level is not None:
            cls.min_level = min_level
        if max_bytes is not None:
            cls.max_bytes = max_bytes

    @classmethod
    def _open(cls):
        log_dir = os.path.dirname(cls.log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        if cls.max_bytes and os.path.exists(cls.log_path) and os.path.getsize(cls.log_path) > cls.max_bytes:
            os.replace(cls.log_path, cls.log_path + ".1")
        return open(cls.log_path, "a", encoding="utf-8")

    @staticmethod
    def _stamp(level: LogLevel) -> str:
        return f"{datetime.now().strftime('%Y-%m-%d %H:%M:%S')} - {level.value} - "

    @classmethod
    def log(cls, message: str, level: LogLevel = LogLevel.INFO, context: Optional[Dict[str, Any]] = None):
        """
        Append one line to the log file.

        Args:
            message: What happened
            level: Dropped when below ``min_level``
            context: Rendered as ``key=value`` pairs after the message
        """
        if level.rank < cls.min_level.rank:
            return

        line = cls._stamp(level) + message
        if context:
            line += " | " + " | ".join(f"{k}={v}" for k, v in context.items())

        with cls._open() as f:
            f.write(line + "\n")

    @classmethod
    def debug(cls, message: str, context: Optional[Dict[str, Any]] = None):
        cls.log(message, LogLevel.DEBUG, context)

    @classmethod
    def info(cls, message: str, context: Optional[Dict[str, Any]] = None):
        cls.log(message, LogLevel.INFO, context)

    @classmethod
    def warning(cls, message: str, context: Optional[Dict[str, Any]] = None):
        cls.log(message, LogLevel.WARNING, context)

    @classmethod
    def error(cls, message: str, context: Optional[Dict[str, Any]] = None):
        cls.log(message, LogLevel.ERROR, context)

    @classmethod
    def exception(cls, e: Exception, message: str = "Exception occurred", context: Optional[Dict[str, Any]] = None):
        """Log ``e`` at ERROR level, followed by its traceback."""
        details = dict(context or {})
        details["exception_type"] = type(e).__name__
        details["exception_message"] = str(e)
        cls.error(f"{message}: {type(e).__name__} - {e}", details)

        if LogLevel.ERROR.rank < cls.min_level.rank:
            return
        # works outside an except block too, unlike format_exc()
        frames = "".join(traceback.format_exception(type(e), e, e.__traceback__))
        with cls._open() as f:
            f.write(f"{cls._stamp(LogLevel.ERROR)}TRACEBACK:\n{frames}\n")
