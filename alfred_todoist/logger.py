from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from loguru import logger

# log_level setting -> loguru level, None disables output
LOG_LEVELS: dict[str, str | None] = {
    "trace": "TRACE",
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "error": "ERROR",
    "silent": None,
}


def setup_logging(level: str = "error", log_dir: Path | str | None = None, sink: Any = None) -> None:
    """Route loguru output according to the workflow's ``log_level`` setting.

    Alfred shows stderr in its debugger, so that is the default sink. When
    ``log_dir`` is given (usually the workflow cache directory) a daily log
    file is written there as well.
    """
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}, expected one of {', '.join(LOG_LEVELS)}")

    logger.remove()
    loguru_level = LOG_LEVELS[level]
    if loguru_level is None:
        return

    logger.add(sink if sink is not None else sys.stderr, level=loguru_level)
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "{time:YYYY-MM-DD}.log",
            rotation="12:00",
            retention="7 days",
            enqueue=True,
            level=loguru_level,
        )


__all__ = ["logger", "setup_logging", "LOG_LEVELS"]
