"""
Logging setup
"""
import sys

from loguru import logger

from . import LOG_FILE_NAME, log_dir


def setup_logger(verbose: bool = False, log_file: bool = True) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<level>{level: <8}</level> | {message}",
        colorize=None,
    )
    if not log_file:
        return
    d = log_dir()
    try:
        d.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.debug("File logging disabled, cannot create {}: {}", d, e)
        return
    logger.add(
        d / LOG_FILE_NAME,
        rotation="10 MB",
        retention="1 week",
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}",
        encoding="utf-8",
    )

__all__ = ["logger", "setup_logger"]
