"""Logging for the frcscout package.

Every module logs through get_logger(__name__), so all records land under
the 'frcscout' logger. setup_logging() attaches handlers there once and can
raise or lower individual modules, e.g. debug output from prediction while
keeping picklist at warnings only.
"""

import logging
import sys
from pathlib import Path
from typing import Mapping, Optional

PACKAGE_LOGGER = 'frcscout'

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
SIMPLE_FORMAT = '%(levelname)s [%(name)s]: %(message)s'


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Get a logger inside the package namespace.

    Accepts a module's __name__ ('frcscout.picklist') or a bare module
    name ('picklist'); both return the same logger.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + '.'):
        name = f'{PACKAGE_LOGGER}.{name}'
    return logging.getLogger(name)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path | str] = None,
    log_to_console: bool = True,
    module_levels: Optional[Mapping[str, int]] = None,
) -> logging.Logger:
    """
    Configure handlers for the package logger.

    Calling this again replaces the previous handlers rather than adding
    duplicates.

    Args:
        level: Level for the package logger (default: INFO)
        log_file: Optional file to append detailed records to
        log_to_console: Whether to echo records to stdout (default: True)
        module_levels: Per-module overrides, e.g. {'picklist': logging.WARNING}

    Returns:
        The package logger

    Example:
        from frcscout.logging_config import setup_logging
        setup_logging(logging.WARNING, module_levels={'data_loader': logging.INFO})
    """
    logger = get_logger()
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
        logger.addHandler(console_handler)

    for module, module_level in (module_levels or {}).items():
        get_logger(module).setLevel(module_level)

    return logger
