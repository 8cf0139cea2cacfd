"""Logging for Tally.

Everything logs under the ``tally`` logger. By default records go to a
daily JSON file (plus an errors-only file) and never to the terminal, so
they stay out of the chat. ``--verbose`` adds a colored stderr stream.
"""
import logging
import json
import sys
import time
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Optional

ROOT_LOGGER = 'tally'

# Attributes callers may attach with ``extra=``; copied into JSON output
EXTRA_FIELDS = ('command', 'operation', 'duration_ms', 'task_count')

CONSOLE_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


class JSONFormatter(logging.Formatter):
    """One JSON object per record"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'where': f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update({key: getattr(record, key) for key in EXTRA_FIELDS if hasattr(record, key)})
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class ColoredFormatter(logging.Formatter):
    """Level names in ANSI color for the --verbose stream"""

    LEVEL_COLORS = {
        logging.DEBUG: 36,
        logging.INFO: 32,
        logging.WARNING: 33,
        logging.ERROR: 31,
        logging.CRITICAL: 35,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        # Other handlers share the record, so color a copy
        tinted = logging.makeLogRecord(record.__dict__)
        tinted.levelname = f"\033[{color}m{record.levelname}\033[0m"
        return super().format(tinted)


def _json_file_handler(path: Path, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(
    log_dir: Optional[Path] = None,
    level: Optional[int] = None,
    json_output: Optional[bool] = None,
    console_output: bool = False
) -> logging.Logger:
    """
    (Re)configure the ``tally`` logger.

    Unset arguments fall back to ``Config`` (LOG_DIR, LOG_LEVEL, LOG_JSON).
    Calling it again replaces the previous handlers.
    """
    from config import Config

    level = Config.get_log_level() if level is None else level
    json_output = Config.LOG_JSON if json_output is None else json_output

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    while logger.handlers:
        old = logger.handlers.pop()
        old.close()

    if console_output:
        stream = logging.StreamHandler(sys.stderr)
        stream.setLevel(level)
        stream.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
        logger.addHandler(stream)

    if json_output:
        directory = Path(Config.LOG_DIR if log_dir is None else log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        day = f"{datetime.now():%Y%m%d}"
        logger.addHandler(_json_file_handler(directory / f'tally_{day}.log', level))
        logger.addHandler(_json_file_handler(directory / f'errors_{day}.log', logging.ERROR))

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')


class LogTimer:
    """Times a block and logs how it ended; exceptions pass through"""

    def __init__(self, logger: logging.Logger, operation: str, **extra):
        self.logger = logger
        self.operation = operation
        self.extra = extra
        self._started = None

    def __enter__(self):
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed_ms = round((time.perf_counter() - self._started) * 1000, 2)
        extra = dict(self.extra, operation=self.operation, duration_ms=elapsed_ms)
        if exc_type is None:
            self.logger.debug(f"{self.operation} took {elapsed_ms}ms", extra=extra)
        else:
            self.logger.warning(f"{self.operation} failed after {elapsed_ms}ms: {exc_val}", extra=extra)
        return False


def log_call(logger: Optional[logging.Logger] = None):
    """Wrap a function in a LogTimer named after it"""
    def decorator(func):
        target = logger or get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            with LogTimer(target, func.__qualname__):
                return func(*args, **kwargs)
        return wrapper
    return decorator
