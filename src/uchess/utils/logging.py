"""Logging configuration utilities."""

import sys
from pathlib import Path

from loguru import logger


def setup_logging(
    level: str = "WARNING",
    log_file: str | Path | None = None,
    file_level: str = "DEBUG",
    rotation: str = "10 MB",
    retention: str = "1 week",
) -> None:
    """Configure loguru for the interactive client.

    The console sink defaults to WARNING so engine chatter does not
    interleave with the board; the file sink keeps the detail. Use
    ``file_level="TRACE"`` to record raw UCI traffic.

    Args:
        level: Minimum level shown on stderr.
        log_file: Optional path to a log file.
        file_level: Minimum level written to the log file.
        rotation: When to rotate the log file.
        retention: How long to keep old log files.
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        colorize=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level=file_level,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}",
            rotation=rotation,
            retention=retention,
            compression="gz",
        )

    logger.debug(f"Logging configured: console={level}, file={log_file or '-'}")
