"""Loguru sink setup for applications embedding the extraction engine."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from noteparse.utils.config import LoggingConfig

_TEXT_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | <level>{message}</level> | {extra}"
)


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Replace the default Loguru sink with the configured stderr/file sinks."""
    config = config or LoggingConfig()
    level = config.level.upper()
    serialize = config.format == "json"

    logger.remove()
    if serialize:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_TEXT_FORMAT)

    if config.file:
        target = Path(config.file)
        target.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(target),
            level=level,
            rotation=f"{config.max_size_mb} MB",
            retention=config.backup_count,
            serialize=serialize,
        )
