"""Logging configuration for litedb."""

import logging
import logging.handlers
import sys
from pathlib import Path

import colorlog

PLAIN_FORMAT = "%(asctime)s %(levelname)8s %(message)s (%(name)s@%(lineno)d)"
COLOR_FORMAT = (
    "%(asctime)s %(log_color)s%(levelname)8s%(reset)s %(message)s "
    "\033[90m(%(name)s@%(lineno)d)\033[0m"
)
DATE_FORMAT = "%m-%d %H:%M:%S"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def setup_logging(
    level: int | str = logging.INFO,
    use_colors: bool = True,
    enable_file_logging: bool = False,
    log_dir: Path | None = None,
    is_test_env: bool = False,
) -> None:
    """Configure the root logger for litedb.

    Args:
        level: Logging level, as a number or a level name
        use_colors: Whether console output is colored
        enable_file_logging: Whether to also write a log file
        log_dir: Directory for log files (defaults to ./logs or ./logs/test)
        is_test_env: Write ``test.log`` afresh instead of rotating ``litedb.log``
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handlers = [_console_handler(use_colors)]
    if enable_file_logging:
        if log_dir is None:
            log_dir = Path("logs") / "test" if is_test_env else Path("logs")
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(_file_handler(log_dir, is_test_env))

    logging.basicConfig(level=level, handlers=handlers, force=True)


def _console_handler(use_colors: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if use_colors:
        handler.setFormatter(
            colorlog.ColoredFormatter(
                COLOR_FORMAT, datefmt=DATE_FORMAT, log_colors=LOG_COLORS
            )
        )
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(log_dir: Path, is_test_env: bool) -> logging.Handler:
    """Tests overwrite a single file; other runs rotate at 5 MB."""
    handler: logging.Handler
    if is_test_env:
        handler = logging.FileHandler(log_dir / "test.log", mode="w")
    else:
        handler = logging.handlers.RotatingFileHandler(
            log_dir / "litedb.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=4,
            encoding="utf-8",
        )
    handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance, typically for ``__name__``."""
    return logging.getLogger(name)


def setup_test_logging(level: int | str = logging.DEBUG) -> None:
    """Setup logging for tests, overwriting logs/test/test.log on each run."""
    setup_logging(level=level, enable_file_logging=True, is_test_env=True)
