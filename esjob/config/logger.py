"""
Logging configuration using loguru.

Pretty-printed output when running jobs interactively and JSON output
when job launches are collected by a log shipper.
"""

import sys

from loguru import logger

from esjob.config.settings import AppSettings, settings


def _text_formatter(record: dict) -> str:
    """Format log record for text output, conditionally showing extras.

    Only includes the {extra} section if it contains data, preventing
    empty braces from appearing in logs.
    """
    base_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    if record["extra"]:
        base_format += " | {extra}"

    return base_format + "\n{exception}"


def setup_logging(app_settings: AppSettings | None = None, sink=sys.stderr) -> None:
    """Configure loguru logger.

    Sets up logging based on ESJOB_LOG_LEVEL and ESJOB_LOG_FORMAT:
    - text format: Pretty-printed colorful logs
    - json format: JSON-formatted logs, one record per line

    Logs go to stderr by default so they never mix with streaming job output.

    Args:
        app_settings: Settings to read level/format from (defaults to the global instance)
        sink: Where log records are written
    """
    app_settings = app_settings or settings

    # Remove default logger
    logger.remove()

    level = app_settings.log_level.upper()

    if app_settings.log_format == "text":
        logger.add(
            sink,
            format=_text_formatter,
            level=level,
            colorize=True,
        )
    else:
        logger.add(
            sink,
            format="{message}",
            level=level,
            serialize=True,  # JSON output
        )

    logger.debug(f"Logging configured (level={level}, format={app_settings.log_format})")
