import json
import logging
import logging.handlers
import socket
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import LoggingSettings, get_settings

# Third-party loggers that are noisy at INFO
QUIET_LOGGERS = ("aiosqlite", "asyncio")


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    ``extra_fields`` passed through ``extra=`` are merged into the top level;
    values stamped by ``ContextFilter`` are grouped under ``context``.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        try:
            self.hostname = socket.gethostname()
        except OSError:
            self.hostname = "unknown"

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}:{record.funcName}:{record.lineno}",
            "hostname": self.hostname,
            "pid": record.process,
        }

        context = getattr(record, "context", None)
        if context:
            entry["context"] = context

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            entry.update(extra_fields)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class ContextFilter(logging.Filter):
    """Stamp fixed context values (service name, operation) on every record."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.context = dict(context or {})

    def filter(self, record: logging.LogRecord) -> bool:
        merged = dict(getattr(record, "context", None) or {})
        merged.update(self.context)
        record.context = merged
        return True


def _build_handlers(settings: LoggingSettings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if settings.file:
        path = Path(settings.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            filename=path,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding="utf-8",
        ))

    formatter: logging.Formatter
    if settings.json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=settings.format, datefmt="%Y-%m-%d %H:%M:%S")

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure the root logger from settings.

    Replaces any handlers already on the root logger. SQL statements are
    logged only when ``database_echo`` is enabled.
    """
    settings = settings or get_settings().logging

    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.level.upper(), logging.INFO))
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in _build_handlers(settings):
        root.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if get_settings().database_echo else logging.WARNING
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str, context: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Get a named logger, optionally stamping ``context`` on its records.

    Loggers are shared per name, so a context filter is attached only once;
    a second call with a different context replaces the first.
    """
    logger = logging.getLogger(name)

    if context:
        for existing in [f for f in logger.filters if isinstance(f, ContextFilter)]:
            logger.removeFilter(existing)
        logger.addFilter(ContextFilter(context))

    return logger
