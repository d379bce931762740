from __future__ import annotations

import logging
import sys
import time
from typing import Optional

from asset_transfer.config import settings

_RESET = "\033[0m"
_DIM = "\033[2m"

_LEVEL_COLOR = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}

APP_NAMESPACE = "asset_transfer"


def _level_from_str(value: str) -> int:
    level = logging.getLevelName((value or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


class LevelFormatter(logging.Formatter):
    """
    Single-line formatter with UTC timestamps.
    Example:
      2026-10-18 01:36:22.123+0000 DEBUG    asset_transfer.resolver - [RESOLVER][REGISTRY] symbol=usdt id=1984
    """

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color
        self.converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        ct = self.converter(record.created)
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", ct) + f".{int(record.msecs):03d}+0000"
        level_name = record.levelname.upper()
        message = record.getMessage()

        if self.use_color:
            color = _LEVEL_COLOR.get(level_name, "")
            line = f"{_DIM}{timestamp}{_RESET} {color}{level_name:<8}{_RESET} {record.name} {_DIM}-{_RESET} {message}"
        else:
            line = f"{timestamp} {level_name:<8} {record.name} - {message}"

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def init_logging(level: Optional[str] = None) -> None:
    """Install one stderr handler on the 'asset_transfer' logger and tame httpx."""
    app_logger = logging.getLogger(APP_NAMESPACE)
    app_logger.setLevel(_level_from_str(level or settings.LOG_LEVEL))

    if not any(getattr(h, "_asset_transfer_handler", False) for h in app_logger.handlers):
        use_color = sys.stderr.isatty() and not settings.NO_COLOR
        handler = logging.StreamHandler(stream=sys.stderr)
        handler._asset_transfer_handler = True  # type: ignore[attr-defined]
        handler.setLevel(logging.NOTSET)
        handler.setFormatter(LevelFormatter(use_color=use_color))
        app_logger.addHandler(handler)

    logging.getLogger("httpx").setLevel(_level_from_str(settings.LOG_LEVEL_LIB_HTTPX))
    logging.getLogger("httpcore").setLevel(_level_from_str(settings.LOG_LEVEL_LIB_HTTPCORE))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger in the 'asset_transfer.*' namespace."""
    base = name or APP_NAMESPACE
    if base != APP_NAMESPACE and not base.startswith(APP_NAMESPACE + "."):
        base = f"{APP_NAMESPACE}.{base}"
    return logging.getLogger(base)
