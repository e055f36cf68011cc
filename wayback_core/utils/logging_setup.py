"""
Logging configuration for the World Imagery Wayback client.

Console output goes to stderr so that the ``wayback-changes`` command can keep
stdout for its JSON result. Production runs log one JSON object per line;
development runs use a plain text layout. An optional log directory adds a
rotating ``wayback_{environment}.log`` file with the same layout.
"""

import functools
import json
import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Optional


PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
JSON_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5

# Chatty third-party loggers
QUIET_LOGGERS = ("arcgis", "urllib3", "requests")

# LogRecord attributes that are not user supplied extras
_RESERVED_RECORD_KEYS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'exc_info', 'exc_text', 'stack_info',
    'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'getMessage',
    'taskName', 'message', 'asctime',
}


class JSONFormatter(logging.Formatter):
    """JSON formatter; fields passed through ``extra=`` become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def _build_formatter(environment: str) -> logging.Formatter:
    if environment == "production":
        return JSONFormatter(datefmt=JSON_DATE_FORMAT)
    return logging.Formatter(PLAIN_FORMAT)


def setup_logging(environment: str = "development",
                  log_level: str = "INFO",
                  log_dir: Optional[str] = None) -> None:
    """
    Configure the root logger for the wayback client.

    Args:
        environment: Environment name (development/production)
        log_level: Logging level (DEBUG/INFO/WARNING/ERROR)
        log_dir: Directory for a rotating log file (optional, created if missing)
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, log_level.upper()))

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(_build_formatter(environment))
    logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path / f"wayback_{environment}.log",
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT
        )
        file_handler.setFormatter(_build_formatter(environment))
        logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the logger of the given (module) name."""
    return logging.getLogger(name)


def log_performance(func):
    """
    Decorator logging the start, duration and failure of a query step.

    The duration is attached as the ``duration_seconds`` extra, so production
    JSON logs carry it as a separate field.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start_time = time.perf_counter()

        logger.info(f"Starting {func.__name__}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(f"Failed {func.__name__} after {duration:.3f}s: {e}",
                         extra={"duration_seconds": round(duration, 3)})
            raise

        duration = time.perf_counter() - start_time
        logger.info(f"Completed {func.__name__} in {duration:.3f}s",
                    extra={"duration_seconds": round(duration, 3)})
        return result

    return wrapper
