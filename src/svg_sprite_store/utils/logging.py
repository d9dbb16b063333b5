"""Logging configuration module for the SVG sprite store.

Provides structured logging setup with support for console and file output
in both JSON and human-readable formats. Library modules only ever call
``logging.getLogger(__name__)``; this setup is applied by the command line
entry point or by a build integration that wants the same output.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

import structlog
from structlog.stdlib import ProcessorFormatter

from svg_sprite_store.models.config import LoggingConfig
from svg_sprite_store.utils.early_error_handler import handle_startup_error
from svg_sprite_store.utils.file_utils import ensure_dir_exists, normalize_path

BYTES_PER_MEGABYTE = 1024 * 1024


def setup_logging(config: LoggingConfig, name: str) -> logging.Logger:
    """Set up logging with the specified configuration.

    Args:
        config: Logging configuration.
        name: Logger name.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Clear existing handlers
    logger.handlers = []

    level = getattr(logging, config.level.upper(), logging.INFO)
    logger.setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if config.format.lower() == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    formatter = ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )

    if config.file:
        try:
            log_path = normalize_path(config.file)
            ensure_dir_exists(log_path.parent)

            file_handler = RotatingFileHandler(
                log_path,
                maxBytes=config.max_size_mb * BYTES_PER_MEGABYTE,
                backupCount=config.backup_count,
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(level)
            logger.addHandler(file_handler)
        except OSError as e:
            error_msg = f"Failed to set up file logging: {e}"
            handle_startup_error("LOGGING_FILE_ERROR", error_msg, {"log_file": str(config.file)})

            # Fall back to console logging if file logging fails
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            console_handler.setLevel(level)
            logger.addHandler(console_handler)

            logger.error(error_msg)
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    return logger
