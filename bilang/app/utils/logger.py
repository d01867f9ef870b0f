import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from .config import LoggingConfig, get_config


def _handlers(log_config: LoggingConfig) -> List[logging.Handler]:
    # stdout carries command output (rendered HTML, redirect targets)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_config.file_path:
        log_path = Path(log_config.file_path).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_path,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding="utf-8",
        ))

    return handlers


def setup_logging(
    name: str = "bilang",
    log_config: Optional[LoggingConfig] = None,
    level: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    ``level`` overrides the configured level, e.g. from a ``--verbose`` flag.
    Calling this again replaces the handlers installed before.
    """
    if log_config is None:
        log_config = get_config().logging

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, (level or log_config.level).upper()))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_config.format)
    for handler in _handlers(log_config):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"bilang.{name}")
