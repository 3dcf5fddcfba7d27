"""Package loggers.

Every module gets its logger from `setup_logger`, which attaches a stderr
handler and, when LOG_DIR is set, a file handler rotated at midnight.
Loggers are created once per name and do not propagate to the root logger.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from horror_catalog.settings import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"
BACKUP_DAYS = 7

_LOGGERS_CACHE: dict[str, logging.Logger] = {}


def setup_logger(
    name: str,
    level: int | str | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Return the package logger for `name`, creating it on first use.

    Args:
        name: Dotted logger name (e.g. 'catalog.transport').
        level: Logging level. Defaults to LOG_LEVEL.
        log_dir: Directory for log files. Defaults to LOG_DIR;
            console only when neither is set.
    """
    cached = _LOGGERS_CACHE.get(name)
    if cached is not None:
        return cached

    level = level if level is not None else settings.logging.level
    if log_dir is None and settings.logging.log_dir:
        log_dir = Path(settings.logging.log_dir)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    for handler in _build_handlers(name, log_dir):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _LOGGERS_CACHE[name] = logger
    return logger


def set_level(level: int | str) -> None:
    """Change the level of every logger created so far."""
    for logger in _LOGGERS_CACHE.values():
        logger.setLevel(level)


def _build_handlers(name: str, log_dir: Path | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_dir is not None:
        file_handler = _create_file_handler(name, log_dir)
        if file_handler is not None:
            handlers.append(file_handler)
    return handlers


def _create_file_handler(name: str, log_dir: Path) -> logging.Handler | None:
    """Create a midnight-rotated file handler, or None if the directory is unusable."""
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        return TimedRotatingFileHandler(
            log_file_path(name, log_dir),
            when="midnight",
            backupCount=BACKUP_DAYS,
            encoding="utf-8",
        )
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)
        return None


def log_file_path(name: str, log_dir: Path) -> Path:
    """File of a logger: dots in its name become underscores."""
    return log_dir / f"{name.replace('.', '_').replace('/', '_')}.log"
