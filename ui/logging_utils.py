"""Logging setup shared by the API and the CLI."""
from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# pypdf warns once per malformed object; a broken corpus file would flood the log.
_NOISY_LOGGERS = ("pypdf",)


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Configure the root logger once per process.

    ``level`` and ``log_file`` fall back to ``TECHCONTEXT_LOG_LEVEL`` and
    ``TECHCONTEXT_LOG_FILE``. An empty log file name logs to the console only.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    level_name = (level or os.getenv("TECHCONTEXT_LOG_LEVEL", "INFO")).upper()
    if log_file is None:
        log_file = os.getenv("TECHCONTEXT_LOG_FILE", "techcontext.log")

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)


__all__ = ["setup_logging"]
