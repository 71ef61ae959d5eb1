"""Centralized logging configuration for the fantasy advisor."""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_LEVEL_ENV = 'FFADVISOR_LOG_LEVEL'

# Third-party loggers that flood DEBUG output with one line per HTTP request
NOISY_LOGGERS = ('urllib3', 'requests')


def resolve_level(level: Optional[int | str] = None) -> int:
    """
    Resolve a logging level from an argument or the FFADVISOR_LOG_LEVEL env var.

    Accepts ints or level names ('DEBUG', 'info'); unknown names fall back to INFO.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, 'INFO')
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    log_dir: Optional[Path] = None,
    level: Optional[int | str] = None,
    log_to_file: bool = False,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure logging for the advisor.

    Console output goes to stderr so that JSON printed by the CLI on stdout
    stays clean. A timestamped log file is written only when requested.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Logging level or level name (default: FFADVISOR_LOG_LEVEL or INFO)
        log_to_file: Whether to log to file (default: False)
        log_to_console: Whether to log to console (default: True)

    Returns:
        Configured 'ffadvisor' logger

    Example:
        from ffadvisor.logging_config import setup_logging
        logger = setup_logging(level='DEBUG')
        logger.info("Loading player directory")
    """
    level = resolve_level(level)

    logger = logging.getLogger('ffadvisor')
    logger.setLevel(level)
    logger.handlers = []

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')

    if log_to_file:
        if log_dir is None:
            log_dir = Path('logs')
        log_dir.mkdir(exist_ok=True)

        log_file = log_dir / f'ffadvisor_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logger


def get_logger(name: str = 'ffadvisor') -> logging.Logger:
    """Get a logger under the 'ffadvisor' namespace."""
    if name != 'ffadvisor' and not name.startswith('ffadvisor.'):
        name = f'ffadvisor.{name}'
    return logging.getLogger(name)
