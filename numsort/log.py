"""Logging utilities for numsort.

The library itself only emits records through module loggers below
``numsort``; handlers are attached by :func:`configure_logging`, which the
command line front end calls once.
"""

from __future__ import annotations

import datetime
import json
import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path
from typing import Any

LOG_DIR_ENV = "NUMSORT_LOG_DIR"
_DEFAULT_HOME_DIR = ".numsort"
_DEFAULT_LOG_SUBDIR = "logs"
_TEXT_LOG_NAME = "numsort.log"
_JSON_LOG_NAME = "numsort.jsonl"
_ROTATION_BACKUPS = 5
_TEXT_LOG_MAX_BYTES = 1024 * 1024
_JSON_LOG_MAX_BYTES = 1024 * 1024

logger = logging.getLogger("numsort")


def _utc_now_iso() -> str:
    return datetime.datetime.now(datetime.UTC).isoformat(timespec="seconds")


class ConsoleFormatter(logging.Formatter):
    """Console formatter that surfaces structured payloads when available."""

    def __init__(self) -> None:
        super().__init__("%(levelname)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        """Render *record* optionally appending the structured payload."""
        base = super().format(record)
        payload = _extract_console_payload(record)
        if payload is None:
            return base
        try:
            payload_text = json.dumps(payload, ensure_ascii=False)
        except TypeError:
            payload_text = json.dumps(str(payload), ensure_ascii=False)
        return f"{base} {payload_text}"


def _extract_console_payload(record: logging.LogRecord) -> Any | None:
    """Return payload that should be appended to console output.

    Only records whose message is exactly the event name carry their payload
    to the console, so messages that already embed the data are left alone.
    """
    extra_json = getattr(record, "json", None)
    if not isinstance(extra_json, dict):
        return None
    event_name = extra_json.get("event")
    raw_message = record.msg
    if not (isinstance(raw_message, str) and isinstance(event_name, str)):
        return None
    if raw_message.strip() != event_name.strip():
        return None
    return extra_json.get("payload")


class JsonFormatter(logging.Formatter):
    """Convert log records into JSON strings."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        payload: Any = getattr(record, "json", None)
        if payload is None:
            data: dict[str, Any] = {
                "message": record.message,
                "level": record.levelname,
            }
        elif isinstance(payload, dict):
            data = dict(payload)
            data.setdefault("message", record.message)
            data.setdefault("level", record.levelname)
        else:
            data = {
                "message": record.message,
                "level": record.levelname,
                "data": payload,
            }
        data.setdefault("logger", record.name)
        if "timestamp" not in data:
            data["timestamp"] = _utc_now_iso()
        if record.exc_info and "exc_info" not in data:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


class JsonlHandler(RotatingFileHandler):
    """Write log records as JSON lines with built-in rotation."""

    def __init__(self, filename: Path | str) -> None:
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(
            path,
            maxBytes=_JSON_LOG_MAX_BYTES,
            backupCount=_ROTATION_BACKUPS,
            encoding="utf-8",
        )
        self.setFormatter(JsonFormatter())


def _default_log_dir() -> Path:
    return Path.home() / _DEFAULT_HOME_DIR / _DEFAULT_LOG_SUBDIR


def _resolve_log_dir(log_dir: str | Path | None) -> Path:
    """Resolve effective log directory creating it if necessary."""
    if log_dir is not None:
        path = Path(log_dir).expanduser()
    else:
        env_dir = os.environ.get(LOG_DIR_ENV)
        path = Path(env_dir).expanduser() if env_dir else _default_log_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def _file_handlers(directory: Path) -> list[logging.Handler]:
    text_handler = RotatingFileHandler(
        directory / _TEXT_LOG_NAME,
        encoding="utf-8",
        maxBytes=_TEXT_LOG_MAX_BYTES,
        backupCount=_ROTATION_BACKUPS,
    )
    text_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    handlers: list[logging.Handler] = [text_handler, JsonlHandler(directory / _JSON_LOG_NAME)]
    for handler in handlers:
        handler.setLevel(logging.DEBUG)
    return handlers


def configure_logging(
    level: int = logging.WARNING, *, log_dir: str | Path | None = None
) -> Path | None:
    """Attach console and file handlers to the ``numsort`` logger once.

    The console handler uses *level*; the text and JSONL files always
    record debug output.  Returns the log directory, or ``None`` when the
    logger was already configured.
    """
    if logger.handlers:
        return None

    directory = _resolve_log_dir(log_dir).resolve()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(ConsoleFormatter())
    logger.addHandler(stream_handler)
    for handler in _file_handlers(directory):
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return directory


__all__ = [
    "ConsoleFormatter",
    "JsonFormatter",
    "JsonlHandler",
    "configure_logging",
    "logger",
]
