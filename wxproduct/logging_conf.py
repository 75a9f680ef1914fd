"""Logging setup: stdlib handlers with JSON records, structlog on top."""

from __future__ import annotations

import logging.config
from pathlib import Path
from typing import Any, Iterable

import structlog

_LOGGING_INITIALISED = False

# handler name -> (file name, minimum level)
LOG_FILES = {
    "app_file": ("wxproduct.log", "INFO"),
    "error_file": ("error.log", "ERROR"),
}


def _default_log_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "logs"


def _logging_dict(log_dir: Path, verbose: bool) -> dict[str, Any]:
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            # stdout stays clean for product text
            "stream": "ext://sys.stderr",
            "level": "DEBUG" if verbose else "WARNING",
            "formatter": "json",
        },
    }
    for name, (filename, level) in LOG_FILES.items():
        handlers[name] = {
            "class": "logging.FileHandler",
            "filename": str(log_dir / filename),
            "encoding": "utf-8",
            "level": level,
            "formatter": "json",
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            }
        },
        "handlers": handlers,
        "loggers": {
            "wxproduct": {
                "handlers": list(handlers),
                "level": "DEBUG" if verbose else "INFO",
                "propagate": False,
            },
        },
    }


def configure_logging(verbose: bool = False, log_dir: Path | None = None) -> structlog.BoundLogger:
    """Install the handlers once per process and return the package logger.

    Later calls only make sure ``log_dir`` exists.
    """

    global _LOGGING_INITIALISED
    log_dir = log_dir or _default_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    if not _LOGGING_INITIALISED:
        logging.config.dictConfig(_logging_dict(log_dir, verbose))
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger("wxproduct")


def tail_log(path: Path, line_count: int = 100) -> list[str]:
    if not path.exists():
        return []
    with path.open("r", encoding="utf-8", errors="ignore") as stream:
        return stream.readlines()[-line_count:]


def available_logs(log_dir: Path | None = None) -> Iterable[Path]:
    log_dir = log_dir or _default_log_dir()
    if not log_dir.exists():
        return []
    return sorted(log_dir.glob("*.log"))


__all__ = ["LOG_FILES", "available_logs", "configure_logging", "tail_log"]
