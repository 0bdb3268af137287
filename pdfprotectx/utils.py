"""Utilities shared by pdfprotectx modules."""

from __future__ import annotations

import logging
from pathlib import Path


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def configure_logging(level: str | int) -> None:
    """Apply ``level`` to every ``pdfprotectx`` logger created so far."""

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    for name in list(logging.root.manager.loggerDict):
        if name == "pdfprotectx" or name.startswith("pdfprotectx."):
            logging.getLogger(name).setLevel(level)
    logging.getLogger("pdfprotectx").setLevel(level)


def resolve_path(path: str | Path | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    resolved = Path(path).expanduser().resolve()
    return resolved


def strip_extension(filename: str) -> str:
    """Drop the last extension of ``filename``.

    Names without a dot, or whose only dot is the leading one (``.pdf``),
    are returned unchanged.
    """

    index = filename.rfind(".")
    if index <= 0:
        return filename
    return filename[:index]


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500.0 KB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"
