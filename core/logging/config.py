"""Structlog configuration: JSON file logs plus a coloured console stream."""

import logging
import logging.handlers
import os
import time
from pathlib import Path

import structlog

from core.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
)

DEFAULT_LOG_FILE = "./logs/medprep-api.log"


def setup_logging() -> None:
    """Configure structlog and the stdlib root logger.

    File output (skipped when ``LOG_FILE_ENABLED`` is false):
    - JSON with timestamp, level, logger, request_id, service metadata
    - Rotating handler, 50MB per file

    Console output:
    - ``[LEVEL] timestamp | request_id | logger_name | message``
    - Always enabled, which is what the hosting platform collects

    Environment Variables:
    - LOG_FILE_PATH: Path to log file (default: ./logs/medprep-api.log)
    - LOG_FILE_ENABLED: Write the JSON file (default: true)
    - LOG_LEVEL: Logging level (default: INFO)
    - SERVICE_NAME: Service name for metadata (default: medprep-api)
    - ENVIRONMENT: Deployment environment (default: development)
    """
    log_file_path = os.getenv("LOG_FILE_PATH", DEFAULT_LOG_FILE)
    log_file_enabled = os.getenv("LOG_FILE_ENABLED", "true").lower() == "true"
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(format="%(message)s", level=level, handlers=[])

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_request_context,
            add_service_context,
            add_process_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    if log_file_enabled:
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file_path,
            maxBytes=50 * 1024 * 1024,
            backupCount=20,
            encoding="utf-8",
        )
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=[
                    # For logs from libraries that don't use structlog
                    structlog.stdlib.add_log_level,
                    structlog.stdlib.add_logger_name,
                    structlog.processors.TimeStamper(fmt="iso", utc=True),
                    add_request_context,
                    add_service_context,
                    add_process_info,
                ],
            )
        )
        handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                add_request_context,
            ],
        )
    )
    handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        root_logger.addHandler(handler)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_file=log_file_path if log_file_enabled else None,
        log_level=log_level,
    )


def cleanup_old_logs(
    log_file_path: str | None = None, retention_days: int = 10
) -> int:
    """Remove rotated log files older than the retention period.

    Args:
        log_file_path: Path to the main log file. If None, uses LOG_FILE_PATH.
        retention_days: Number of days to retain logs (default: 10).

    Returns:
        Number of files deleted.
    """
    if log_file_path is None:
        log_file_path = os.getenv("LOG_FILE_PATH", DEFAULT_LOG_FILE)

    log_dir = Path(log_file_path).parent
    log_name = Path(log_file_path).name
    retention_seconds = retention_days * 24 * 60 * 60
    current_time = time.time()
    logger = structlog.get_logger(__name__)

    deleted_count = 0
    for log_file in log_dir.glob(f"{log_name}.*"):
        if current_time - log_file.stat().st_mtime <= retention_seconds:
            continue
        try:
            log_file.unlink()
            deleted_count += 1
        except OSError as e:
            logger.warning(
                "Failed to delete old log file",
                file=str(log_file),
                error=str(e),
            )

    if deleted_count:
        logger.info(
            "Cleaned up old log files",
            deleted_count=deleted_count,
            retention_days=retention_days,
        )
    return deleted_count
