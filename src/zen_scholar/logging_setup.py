# src/zen_scholar/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

APP_LOGGER = "zen_scholar"
LOG_FILE_NAME = "zen.log"

# Chatty HTTP stacks behind the assistant call.
_QUIET_LOGGERS = ("httpx", "httpcore", "openai")


class _ConsoleNoiseFilter(logging.Filter):
    """Let zen_scholar records through; everything else (warnings included) only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == APP_LOGGER or record.name.startswith(APP_LOGGER + "."):
            return True
        return record.levelno >= logging.ERROR


def parse_level(name: str | int, default: int = logging.WARNING) -> int:
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    *,
    log_dir: str | Path = ".local/zen_scholar",
    console_level: str | int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route logs to stderr (filtered, so the REPL stays readable) and to a
    rotating DEBUG file under `log_dir`. Returns the log file path.

    Call once, before the first log line.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(parse_level(console_level))
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_file
