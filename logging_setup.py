# logging_setup.py
from __future__ import annotations
import logging
import logging.config
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, List, Optional

DEFAULT_IGNORED_ACCESS_PATHS: List[str] = [
    "/favicon.ico",
    "/robots.txt",
    "/.well-known/",
]

class IgnorePathsFilter(logging.Filter):
    """Drops log lines that mention one of the given paths."""
    def __init__(self, ignored_paths: Optional[Iterable[str]] = None):
        super().__init__()
        self.ignored_paths = list(ignored_paths or [])

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        return not any(p in msg for p in self.ignored_paths)

def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | str = "logs",
    log_file_name: str = "sitemap.log",
    ignored_access_paths: Optional[Iterable[str]] = None,
    file_max_bytes: int = 5 * 1024 * 1024,  # 5MB
    file_backup_count: int = 3,
) -> None:
    """
    Configure logging for the sitemap CLI and the FastAPI/Uvicorn service:
    - colored console output (colorlog)
    - rotating log file
    - noisy access paths filtered out of uvicorn.access
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = str(log_dir / log_file_name)

    fmt_plain = "%(levelname)s | %(asctime)s | %(name)s | %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    formatters = {
        "plain": {
            "format": fmt_plain,
            "datefmt": datefmt,
        },
        "color": {
            "()": "colorlog.ColoredFormatter",
            "format": "%(log_color)s%(levelname)-8s%(reset)s | %(asctime)s | %(name)s | %(message)s",
            "datefmt": datefmt,
            "log_colors": {
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        },
    }

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level,
            "filters": ["ignore_paths"],
            "formatter": "color",
        },
        "file": {
            "()": RotatingFileHandler,
            "level": "INFO",
            "filename": log_file,
            "maxBytes": file_max_bytes,
            "backupCount": file_backup_count,
            "encoding": "utf-8",
            "formatter": "plain",
        },
    }

    ignored_paths = list(ignored_access_paths or DEFAULT_IGNORED_ACCESS_PATHS)
    filters = {
        "ignore_paths": {
            "()": IgnorePathsFilter,
            "ignored_paths": ignored_paths,
        }
    }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "filters": filters,
        "formatters": formatters,
        "handlers": handlers,
        "loggers": {
            # HTTP request lines (GET /sitemap.xml 200 OK)
            "uvicorn.access": {
                "level": log_level,
                "handlers": ["console", "file"],
                "propagate": False,
            },
            "uvicorn.error": {
                "level": "ERROR",
                "handlers": ["console", "file"],
                "propagate": False,
            },
            # sitemap, sitemap.emitter, sitemap.pages, sitemap.routes ...
            "sitemap": {
                "level": log_level,
                "handlers": ["console", "file"],
                "propagate": False,
            },
            "asyncio": {"level": "WARNING"},
            "httpx": {"level": "WARNING"},
        },
        "root": {
            "level": log_level,
            "handlers": ["console", "file"],
        },
    })

    logging.getLogger("sitemap").debug("Logging configured")

def get_app_logger(name: str = "sitemap") -> logging.Logger:
    """Return a logger for application code."""
    return logging.getLogger(name)
