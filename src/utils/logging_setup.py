"""Loguru sink setup shared by the build scripts."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from src.utils.config import LoggingConfig

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"


def setup_logging(
    config: LoggingConfig | None = None,
    *,
    level: str | None = None,
    base_dir: Path | None = None,
) -> None:
    """Replace Loguru's default handler with the console (and optional file) sinks.

    Args:
        config: Logging section of the configuration
        level: Console level override (e.g. from ``--log-level``)
        base_dir: Directory a relative ``config.file`` resolves against
    """
    config = config or LoggingConfig()
    level = (level or config.level).upper()

    logger.remove()  # Remove default handler
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if config.file:
        log_file = Path(config.file)
        if base_dir is not None and not log_file.is_absolute():
            log_file = Path(base_dir) / log_file
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation=config.rotation,
            retention=config.retention,
            level="DEBUG",
        )
