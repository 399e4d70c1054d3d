"""
Logging Configuration Module.

Every module logs through a child of the "invoice_fields" logger, so one
call to setup_logger() (or setup_logger_from_config()) configures the
whole package. Console output goes to stderr with level colors; an
optional rotating file handler keeps plain text.

Usage:
    from invoice_fields.utils.logger import setup_logger_from_config, get_logger

    setup_logger_from_config()          # once, at startup
    logger = get_logger(__name__)       # in any module
    logger.info("Extracting fields...")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

import colorama
from colorama import Fore, Style

colorama.init()

# Root of the logger hierarchy used by every module in the package
LOGGER_NAMESPACE = "invoice_fields"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """
    Formatter that wraps each console line in its level color.

    Colors:
        - DEBUG: Cyan
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Red (bold)
    """

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }
    RESET = Style.RESET_ALL

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, '')
        return f"{color}{super().format(record)}{self.RESET}"


def _level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper())


def _console_handler(level: int, log_format: str, date_format: str, colorize: bool) -> logging.Handler:
    # stdout carries CLI results
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    formatter_cls = ColoredFormatter if colorize else logging.Formatter
    handler.setFormatter(formatter_cls(log_format, datefmt=date_format))
    return handler


def _file_handler(
    log_file: Union[str, Path],
    level: int,
    log_format: str,
    date_format: str,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    return handler


def setup_logger(
    level: Union[str, int] = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 10485760,  # 10 MB
    backup_count: int = 5,
    colorize: bool = True
) -> logging.Logger:
    """
    Configure the package logger, replacing any earlier handlers.

    Args:
        level: Logging level name or number.
        log_format: Record format; DEFAULT_FORMAT when None.
        date_format: Timestamp format; DEFAULT_DATE_FORMAT when None.
        log_file: Path to a rotating log file. None disables file logging.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files to keep.
        colorize: Whether console lines are colored.

    Returns:
        The package logger.

    Example:
        >>> setup_logger(level="DEBUG", log_file="logs/invoice_fields.log")
    """
    log_format = log_format or DEFAULT_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT
    numeric_level = _level(level)

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(numeric_level)
    package_logger.handlers.clear()
    package_logger.propagate = False

    package_logger.addHandler(_console_handler(numeric_level, log_format, date_format, colorize))

    if log_file:
        package_logger.addHandler(_file_handler(
            log_file, numeric_level, log_format, date_format, max_bytes, backup_count
        ))

    package_logger.debug(f"Logging configured at {logging.getLevelName(numeric_level)}")
    return package_logger


def set_level(level: Union[str, int]) -> None:
    """Change the level of the package logger and all of its handlers."""
    numeric_level = _level(level)
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(numeric_level)
    for handler in package_logger.handlers:
        handler.setLevel(numeric_level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the package namespace.

    Args:
        name: Usually __name__; names outside the package are nested
            under it so they share its handlers.

    Example:
        >>> get_logger("main").name
        'invoice_fields.main'
    """
    if name == LOGGER_NAMESPACE or name.startswith(LOGGER_NAMESPACE + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def setup_logger_from_config() -> logging.Logger:
    """
    Configure logging from the `logging` section of the settings.

    Returns:
        The package logger.
    """
    from config import ConfigurationManager

    settings = ConfigurationManager().get_section("logging")
    file_settings = settings.get('file') or {}
    console_settings = settings.get('console') or {}

    return setup_logger(
        level=settings.get('level', "INFO"),
        log_format=settings.get('format'),
        date_format=settings.get('date_format'),
        log_file=file_settings.get('path') if file_settings.get('enabled') else None,
        max_bytes=file_settings.get('max_bytes', 10485760),
        backup_count=file_settings.get('backup_count', 5),
        colorize=console_settings.get('colorize', True)
    )
