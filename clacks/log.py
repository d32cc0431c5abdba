"""Process-wide logging setup driven by the ``logging`` config section."""

from __future__ import annotations

import logging
from pathlib import Path
import sys

from clacks.config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILENAME = "clacks.log"


def configure_logging(config: LoggingConfig) -> Path:
    """Log to stderr and to ``<log_dir>/clacks.log``; return the log file path."""
    level = logging.getLevelName(config.level)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{config.level}'")

    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILENAME

    formatter = logging.Formatter(LOG_FORMAT)
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(formatter)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
    root.addHandler(stream_handler)
    root.addHandler(file_handler)
    # werkzeug logs every request at INFO
    logging.getLogger("werkzeug").setLevel(max(level, logging.WARNING))
    return log_path


__all__ = ["LOG_FILENAME", "LOG_FORMAT", "configure_logging"]
