"""Logging configuration for the task API."""

import logging
import logging.handlers
import sys
from typing import Optional

from ..config import Settings

REQUEST_LOGGER_NAME = "task_api.requests"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Format log record with colors for console output."""
        # Other handlers share the record, so color a copy
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = (
                f"{self.COLORS[record.levelname]}{record.levelname}"
                f"{self.COLORS['RESET']}"
            )

        return super().format(record)


def _is_own_handler(handler: logging.Handler) -> bool:
    return getattr(handler, "_task_api", False)


def setup_logging(settings: Settings) -> None:
    """Setup logging for the application.

    Safe to call more than once: handlers installed by an earlier call are
    replaced, handlers installed by anyone else are left alone.

    Args:
        settings: Application settings containing logging configuration
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in [h for h in root_logger.handlers if _is_own_handler(h)]:
        root_logger.removeHandler(handler)
        handler.close()

    # Console handler with colors
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        ColoredFormatter(
            fmt='[%(asctime)s] [%(levelname)s] %(name)s - %(message)s',
            datefmt='%Y-%m-%dT%H:%M:%S'
        )
    )
    console_handler._task_api = True
    root_logger.addHandler(console_handler)

    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=settings.log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                fmt='[%(asctime)s] [%(levelname)s] %(name)s - %(funcName)s:%(lineno)d - %(message)s',
                datefmt='%Y-%m-%dT%H:%M:%S'
            )
        )
        file_handler._task_api = True
        root_logger.addHandler(file_handler)

    configure_module_loggers(settings)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured with level: {settings.log_level.upper()}")
    if settings.log_file is not None:
        logger.info(f"Log file: {settings.log_file.absolute()}")


def configure_module_loggers(settings: Settings) -> None:
    """Configure logging levels for specific modules.

    Args:
        settings: Application settings
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    for logger_name in ('task_api', REQUEST_LOGGER_NAME):
        logging.getLogger(logger_name).setLevel(level)

    # Every request is already logged through log_operation
    third_party_loggers = {
        'uvicorn': logging.INFO,
        'uvicorn.access': logging.WARNING,
        'fastapi': logging.INFO,
        'httpx': logging.WARNING,
    }

    for logger_name, third_party_level in third_party_loggers.items():
        logging.getLogger(logger_name).setLevel(third_party_level)


def log_operation(
    method: str,
    path: str,
    status_code: int,
    message: str,
    error: bool = False,
) -> None:
    """Log the outcome of one request.

    Args:
        method: HTTP method
        path: Request path without the query string
        status_code: Status code sent to the client
        message: What happened
        error: Log at ERROR instead of INFO
    """
    logger = logging.getLogger(REQUEST_LOGGER_NAME)
    level = logging.ERROR if error else logging.INFO
    logger.log(level, "%s %s -> %d - %s", method, path, status_code, message)


def log_startup_info(settings: Settings, task_count: Optional[int] = None):
    """Log application startup information.

    Args:
        settings: Application settings
        task_count: Number of tasks the store starts with
    """
    logger = logging.getLogger("task_api.startup")

    logger.info("=" * 60)
    logger.info("Task API Starting")
    logger.info("=" * 60)
    logger.info(f"Listening on: http://{settings.app_host}:{settings.app_port}")
    logger.info(f"Documentation: http://{settings.app_host}:{settings.app_port}/")
    logger.info(f"Log Level: {settings.log_level.upper()}")
    if task_count is not None:
        logger.info(f"Tasks in store: {task_count}")
    logger.info("=" * 60)


def log_shutdown_info():
    """Log application shutdown information."""
    logger = logging.getLogger("task_api.shutdown")

    logger.info("=" * 60)
    logger.info("Task API Shutting Down")
    logger.info("=" * 60)


__all__ = [
    'REQUEST_LOGGER_NAME',
    'setup_logging',
    'log_operation',
    'log_startup_info',
    'log_shutdown_info',
]
