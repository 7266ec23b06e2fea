"""Logging helpers for the URL corpus generator."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _file_handler(log_path: str | Path) -> logging.FileHandler:
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    return handler


def configure_logging(level: int = logging.WARNING, log_path: str | Path | None = None) -> None:
    """
    Configure root logging if no handlers are present.

    Records go to stderr so that the URL echo on stdout stays clean. An
    optional `log_path` adds a file handler alongside, also when the root
    logger was already configured elsewhere.
    """
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        if log_path:
            root.addHandler(_file_handler(log_path))
        return
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_path:
        handlers.append(_file_handler(log_path))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=handlers,
    )
