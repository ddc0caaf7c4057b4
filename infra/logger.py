"""Logging setup shared by the launcher, the API and library modules."""

from __future__ import annotations

import json as jsonlib
import logging
import logging.handlers
import time
from typing import Any, Dict

from infra.paths import LOG_DIR, STORAGE_DIR

__all__ = ["STORAGE_DIR", "LOG_DIR", "JsonFormatter", "configure_logging", "get_logger"]

_TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return jsonlib.dumps(payload, ensure_ascii=False)


def configure_logging(level: str = "INFO", json: bool = False, log_file: bool = True) -> None:
    """
    Configure the root logger once at startup (console + optional file).

    Args:
        level: Root log level name
        json: Emit JSON lines instead of plain text
        log_file: Also write to storage/logs/skirmish.log (rotated)
    """
    formatter: logging.Formatter = JsonFormatter() if json else logging.Formatter(_TEXT_FORMAT)

    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            LOG_DIR / "skirmish.log",
            maxBytes=2_000_000,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
