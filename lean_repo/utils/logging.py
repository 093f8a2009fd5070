"""Logging configuration for lean_repo.

The library itself only ever calls logging.getLogger(__name__). These
helpers are for applications (and create_engine) that want the
lean_repo loggers wired to a handler:
- text or JSON-lines output
- ISO timestamps
- console and/or file handlers
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union


TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord has; anything else came in through `extra`
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Format log records as JSON lines, keeping `extra` fields.

    The engine passes its per-call stats as extra={"sync_stats": {...}},
    which ends up as a nested object in the output line.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS:
                continue
            try:
                json.dumps(value)
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        return json.dumps(log_data)


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def _build_handlers(
    level: int,
    json_output: bool,
    log_file: Optional[Path],
    console: bool,
) -> List[logging.Handler]:
    formatter = JsonFormatter() if json_output else logging.Formatter(TEXT_FORMAT, DATE_FORMAT)

    handlers: List[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def get_logger(
    name: str = "lean_repo",
    level: Union[int, str] = logging.INFO,
    json_output: bool = False,
    log_file: Optional[Path] = None,
    console: bool = True
) -> logging.Logger:
    """Get a configured logger instance.

    Handlers are only attached the first time a given name is configured.

    Args:
        name: Logger name. "lean_repo" covers every module in the package.
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, use JSON lines. If False, use text.
        log_file: Optional path to log file
        console: If True, also log to stderr

    Returns:
        Configured logger instance

    Example:
        >>> logger = get_logger("lean_repo", level="DEBUG")
        >>> json_logger = get_logger("lean_repo", json_output=True)
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    level = _coerce_level(level)
    logger.setLevel(level)
    for handler in _build_handlers(level, json_output, log_file, console):
        logger.addHandler(handler)

    return logger


def configure_root_logger(
    level: Union[int, str] = logging.INFO,
    json_output: bool = False,
    log_file: Optional[Path] = None
) -> None:
    """Configure the root logger for the entire application.

    Replaces any handlers already on the root logger.

    Args:
        level: Default logging level
        json_output: If True, use JSON lines globally
        log_file: Optional path to log file
    """
    root_logger = logging.getLogger()

    level = _coerce_level(level)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    for handler in _build_handlers(level, json_output, log_file, console=True):
        root_logger.addHandler(handler)
