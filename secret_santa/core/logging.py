import sys
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <8}</level> | {message}"
FILE_FORMAT = "{time} | {level} | {module}:{function}:{line} | {message}"


def setup_logging(level: str, log_path: Optional[str]) -> None:
    """Console output at ``level``; every run is also appended to ``log_path`` at DEBUG.

    An empty ``log_path`` keeps output on the console only.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)
    if not log_path:
        return
    logger.add(
        log_path,
        level="DEBUG",
        format=FILE_FORMAT,
        rotation="1 MB",
        retention=5,
        encoding="utf-8",
    )
