"""
Centralized logging configuration for Label Print Panel.

The spooler transport delivers its events on a background thread, so every
record carries the thread name:

    2026-10-19 10:15:30 [INFO    ] [MainThread] label_print_panel.service - Panel started
    2026-10-19 10:15:31 [INFO    ] [sato-ws] label_print_panel.channel - Spooler connection open

Usage:
    from label_print_panel.logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.DEBUG)
    logger = get_logger(__name__)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

APP_NAME = "label_print_panel"


def setup_logging(
    log_level: Union[int, str] = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = False,
) -> logging.Logger:
    """
    Configure the ``label_print_panel`` logger.

    Args:
        log_level: Minimum log level, as an int or a level name
        log_dir: Directory for the rotating log file
        enable_file_logging: Whether to also write to ``log_dir``

    Returns:
        Configured package logger
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    logger = logging.getLogger(APP_NAME)
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(threadName)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if enable_file_logging:
        log_dir = Path(log_dir) if log_dir else Path.home() / ".label_print_panel" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=log_dir / f"{APP_NAME}.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8"
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger under the ``label_print_panel`` namespace.

    Example:
        get_logger("channel")  # -> label_print_panel.channel
    """
    if not name.startswith(APP_NAME):
        name = f"{APP_NAME}.{name}"
    return logging.getLogger(name)
