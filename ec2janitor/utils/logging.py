"""Logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

FILE_LOG_FORMAT = "%(asctime)s %(threadName)s %(name)s:%(lineno)d %(levelname)s %(message)s"


def setup_logging(level: str = "INFO", verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure the ec2janitor logger.

    Console output goes to stderr through rich. When log_file is given, the
    same records are also written there with timestamps and thread names.

    Args:
        level: Log level name (e.g. "INFO", "ERROR")
        verbose: Show module paths and log DEBUG from boto libraries too
        log_file: Path of a log file to write (optional, truncated per run)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger("ec2janitor")
    root.setLevel(log_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setLevel(log_level)
    root.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        file_handler.setLevel(log_level)
        root.addHandler(file_handler)

    # boto libraries are noisy below WARNING unless explicitly requested
    boto_level = logging.DEBUG if verbose else logging.WARNING
    for name in ("boto3", "botocore", "urllib3"):
        logging.getLogger(name).setLevel(boto_level)
