"""
Process-wide logging for the AfriSight services.

Every component asks `LoggerManager` for a named logger once, at import
time. Each logger writes colored lines to stdout and plain text (or JSON
lines, see `JsonLogFormatter`) to ``<log_dir>/<name>.log``. `create_app`
calls `LoggerManager.configure` with the log directory and level from
`Settings`.

Structured fields go through ``extra={"extra_data": {...}}``; only the
JSON formatter renders them.
"""

import json
import logging
import os
import sys
from typing import Dict, Optional

from colorlog import ColoredFormatter

LINE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


class JsonLogFormatter(logging.Formatter):
    """
    One JSON object per record, e.g.::

        {"timestamp": "2025-05-07 13:12:01", "level": "INFO",
         "logger": "chat_sessions", "message": "Created chat session",
         "session_id": "chat_66a..._1714..."}

    Keys from ``extra_data`` are merged at the top level; a traceback is
    added under ``exception``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "extra_data", None) or {})
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _line_formatter(color: bool) -> logging.Formatter:
    if color:
        return ColoredFormatter(
            fmt="%(log_color)s" + LINE_FORMAT, datefmt=DATE_FORMAT, log_colors=LEVEL_COLORS
        )
    return logging.Formatter(LINE_FORMAT, DATE_FORMAT)


class LoggerManager:
    """
    Registry of configured loggers, one per component name.

    Loggers do not propagate, so uvicorn's root handlers never print an
    AfriSight record a second time.
    """

    _loggers: Dict[str, logging.Logger] = {}
    _default_log_dir = "logs"
    _default_level = "INFO"

    @classmethod
    def configure(cls, log_dir: Optional[str] = None, level: Optional[str] = None) -> None:
        """
        Set the log directory and level for the whole process.

        A new level also applies to every logger (and handler) created so
        far; a new directory only affects loggers created afterwards.
        """
        if log_dir:
            cls._default_log_dir = log_dir
        if not level:
            return
        cls._default_level = level.upper()
        for logger in cls._loggers.values():
            logger.setLevel(cls._default_level)
            for handler in logger.handlers:
                handler.setLevel(cls._default_level)

    @classmethod
    def get_logger(
        cls,
        name: str,
        log_file: Optional[str] = None,
        level: Optional[str] = None,
        use_json: bool = False,
        use_color: bool = True,
    ) -> logging.Logger:
        """
        Return the logger for ``name``, creating its handlers on first use.

        Args:
            name (str): Component name, e.g. ``"api.chat"`` or ``"user_directory"``.
            log_file (Optional[str]): File path; defaults to ``<log_dir>/<name>.log``.
            level (Optional[str]): Threshold; defaults to the configured level.
            use_json (bool): Write the file as JSON lines.
            use_color (bool): Color the stdout output.

        Returns:
            logging.Logger: The shared logger for ``name``.
        """
        existing = cls._loggers.get(name)
        if existing is not None:
            return existing

        level = (level or cls._default_level).upper()
        log_file = log_file or os.path.join(cls._default_log_dir, f"{name}.log")
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JsonLogFormatter() if use_json else _line_formatter(color=False))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(_line_formatter(color=use_color))

        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        for handler in (file_handler, console_handler):
            handler.setLevel(level)
            logger.addHandler(handler)

        cls._loggers[name] = logger
        return logger
