"""Logging setup shared by the API process."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def configure_logging(log_path: Path | None = None, level: int | str = logging.INFO) -> None:
    """Configure root logging handlers and formatting.

    Args:
        log_path: Optional file that receives a copy of every record.
        level: Logging level, as an int or a level name such as "DEBUG".
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
    )
