import os
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

DEFAULT_PREFIX = 'wall-clock'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FORMAT_NO_TIME = '%(name)s - %(levelname)s - %(message)s'

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}

# Loggers that belong to the card, configured together under one policy
CARD_LOGGERS = ('card', 'weather', 'backoff')


def get_log_level_from_string(level: Optional[str]) -> int:
    """Map a configured level name to a logging level, defaulting to INFO."""
    if not level:
        return logging.INFO
    return LOG_LEVELS.get(level.strip().lower(), logging.INFO)


def configure_logging(
    level: int = logging.INFO,
    prefix: str = DEFAULT_PREFIX,
    enable_source_tracking: bool = True,
    enable_timestamps: bool = True,
    log_to_console: bool = True,
    log_to_file: bool = False,
    logs_dir: str = 'logs',
) -> logging.Logger:
    """Apply the card's logging policy.

    The prefix logger and the card's package loggers share the same
    handlers and level. Calling this again replaces the handlers installed
    by the previous call.
    """
    loggers = [logging.getLogger(name) for name in (prefix,) + CARD_LOGGERS]
    for target in loggers:
        target.setLevel(level)
        for handler in list(target.handlers):
            if getattr(handler, '_card_handler', False):
                target.removeHandler(handler)
                handler.close()

    log_format = LOG_FORMAT if enable_timestamps else LOG_FORMAT_NO_TIME
    if not enable_source_tracking:
        log_format = log_format.replace('%(name)s - ', '')
    formatter = logging.Formatter(log_format)

    handlers = []
    if log_to_console:
        handlers.append(logging.StreamHandler())
    if log_to_file:
        if not os.path.exists(logs_dir):
            os.makedirs(logs_dir)
        # Rotating file handler
        handlers.append(RotatingFileHandler(
            os.path.join(logs_dir, f'{prefix}.log'),
            maxBytes=1024*1024,  # 1MB
            backupCount=5
        ))

    for handler in handlers:
        handler._card_handler = True
        handler.setLevel(level)
        handler.setFormatter(formatter)
        for target in loggers:
            target.addHandler(handler)

    logger = loggers[0]
    logger.debug(f"Logging configured: level={logging.getLevelName(level)}, console={log_to_console}, file={log_to_file}")
    return logger
