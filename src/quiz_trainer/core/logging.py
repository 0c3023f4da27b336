"""Logging helpers for the quiz trainer shell."""

from __future__ import annotations

import json
import logging
import sys
import tempfile
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

__all__ = [
    "JsonLogFormatter",
    "configure_logger",
]

_FILE_MARKER = "_quiz_trainer_file"
_CONSOLE_MARKER = "_quiz_trainer_console"


class JsonLogFormatter(logging.Formatter):
    """Emit log records as structured JSON lines."""

    _RESERVED = frozenset(
        logging.LogRecord(
            "", logging.INFO, "", 0, "", None, None
        ).__dict__.keys()
    ) | {"message", "asctime", "taskName"}

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extras = {
            key: _coerce_value(value)
            for key, value in record.__dict__.items()
            if key not in self._RESERVED
        }
        if extras:
            payload["extra"] = extras
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = record.stack_info
        return json.dumps(payload, ensure_ascii=True)


def configure_logger(
    name: str,
    *,
    log_dir: Path,
    level: str = "INFO",
    verbose: bool = False,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3,
    filename: str | None = None,
) -> tuple[logging.Logger, Path]:
    """Configure ``name`` with a JSON file handler and return it.

    Calling this again for the same logger reuses the existing handlers, so
    the shell can be restarted in one process (tests do) without duplicate
    output. ``verbose`` mirrors records to stderr.
    """

    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(logging.DEBUG)

    file_level = logging.DEBUG if verbose else _coerce_level(level)
    log_name = filename or f"{name.rsplit('.', 1)[-1]}.log"
    handler = _find_handler(logger, _FILE_MARKER)
    if handler is None:
        handler = _open_file_handler(
            log_dir, log_name, max_bytes=max_bytes, backup_count=backup_count
        )
        logger.addHandler(handler)
    handler.setLevel(file_level)

    console = _find_handler(logger, _CONSOLE_MARKER)
    if verbose and console is None:
        console = logging.StreamHandler(stream=sys.stderr)
        console.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        setattr(console, _CONSOLE_MARKER, True)
        logger.addHandler(console)
    elif not verbose and console is not None:
        logger.removeHandler(console)
        console.close()

    return logger, Path(handler.baseFilename)


def _coerce_level(level: str) -> int:
    numeric = logging.getLevelName(level.upper())
    if isinstance(numeric, int):
        return numeric
    return logging.INFO


def _find_handler(
    logger: logging.Logger, marker: str
) -> Any | None:
    for handler in logger.handlers:
        if getattr(handler, marker, False):
            return handler
    return None


def _open_file_handler(
    log_dir: Path, filename: str, *, max_bytes: int, backup_count: int
) -> RotatingFileHandler:
    for directory in (log_dir, _fallback_log_dir()):
        try:
            directory.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                directory / filename,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        except PermissionError:
            continue
        handler.setFormatter(JsonLogFormatter())
        setattr(handler, _FILE_MARKER, True)
        return handler
    raise PermissionError(f"Cannot open log file {filename} in {log_dir}")


def _fallback_log_dir() -> Path:
    return Path(tempfile.gettempdir()) / "quiz-trainer-logs"


def _coerce_value(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(key): _coerce_value(val) for key, val in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_coerce_value(item) for item in value]
    return repr(value)
