# app/logging_config.py
from __future__ import annotations
import os, logging, logging.config
from pathlib import Path
from rich.console import Console
from rich.logging import RichHandler

def _rich_console_handler(stderr: bool = False) -> RichHandler:
    return RichHandler(console=Console(stderr=stderr), rich_tracebacks=True)

def setup_logging(console_stderr: bool = False) -> None:
    """
    Configure rich console + rotating file logging using dictConfig.
    console_stderr=True keeps stdout free (stdio transports speak the protocol there).
    Tunables via env:
      LOG_LEVEL=INFO|DEBUG|...
      LOG_FILE=logs/calendar_mcp.log
      LOG_MAX_BYTES=5242880 (5MB)
      LOG_BACKUPS=3
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_file = Path(os.getenv("LOG_FILE", "logs/calendar_mcp.log"))
    log_file.parent.mkdir(parents=True, exist_ok=True)
    max_bytes = int(os.getenv("LOG_MAX_BYTES", "5242880"))
    backups = int(os.getenv("LOG_BACKUPS", "3"))

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "rich": {
                "format": "%(name)s | %(message)s",
                "datefmt": "[%X]",
            },
        },
        "handlers": {
            "console": {
                "()": _rich_console_handler,
                "stderr": console_stderr,
                "level": level,
                "formatter": "rich",
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(log_file),
                "maxBytes": max_bytes,
                "backupCount": backups,
                "encoding": "utf-8",
                "level": "DEBUG",
                "formatter": "plain",
            },
        },
        "loggers": {
            "aiohttp.access": {"handlers": ["console", "file"], "level": level, "propagate": False},
            "gateway": {"handlers": ["console", "file"], "level": level, "propagate": False},
            "backend": {"handlers": ["console", "file"], "level": level, "propagate": False},
            "llm": {"handlers": ["console", "file"], "level": level, "propagate": False},
        },
        "root": {"handlers": ["console", "file"], "level": level},
    }
    logging.config.dictConfig(config)
