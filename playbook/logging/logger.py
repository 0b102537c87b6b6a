import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from playbook.config.settings import LOG_DIR, LOG_LEVEL


# Global set to track configured loggers and prevent duplicate handlers
_configured_loggers = set()

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(
    name: str,
    log_file: Optional[Union[str, Path]] = None,
    level: Optional[Union[int, str]] = None,
    console: bool = True,
    file: bool = True
) -> logging.Logger:
    """
    Setup a logger with rotating file handler and console handler.

    Args:
        name: Logger name (will write to <LOG_DIR>/<name>.log by default)
        log_file: Optional custom log file path
        level: Logging level (defaults to config.settings.LOG_LEVEL)
        console: Whether to add console handler
        file: Whether to add the rotating file handler

    Returns:
        Configured logger instance
    """
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent adding duplicate handlers if logger was already configured
    if name in _configured_loggers:
        return logger

    logger.propagate = False
    formatter = logging.Formatter(_FORMAT)

    if file:
        if log_file is None:
            log_file = Path(LOG_DIR) / f"{name}.log"
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            str(log_file),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    _configured_loggers.add(name)

    return logger
