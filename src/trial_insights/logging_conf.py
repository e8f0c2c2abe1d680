"""Logging configuration for Trial Insights"""
from __future__ import annotations

from rich.console import Console
from rich.logging import RichHandler
import logging


def setup_logging(level: int | str = logging.INFO) -> None:
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )
