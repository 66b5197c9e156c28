"""Path and display helpers."""

import os
from datetime import datetime
from pathlib import Path
from typing import Union


def normalize_path(path: Union[str, os.PathLike]) -> Path:
    """
    Make a path absolute without touching the filesystem.

    `~` is expanded and `.`/`..` components are collapsed lexically. Symlinks
    are not resolved since the file to restore usually does not exist anymore.

    Args:
        path: Path string to normalize

    Returns:
        Normalized absolute Path object
    """
    return Path(os.path.abspath(os.path.expanduser(os.fspath(path))))


def format_size(size: int) -> str:
    """Format a byte count with decimal units."""
    value = float(size)
    for unit in ('B', 'kB', 'MB', 'GB', 'TB'):
        if value < 1000 or unit == 'TB':
            return f"{int(value)} {unit}" if unit == 'B' else f"{value:.1f} {unit}"
        value /= 1000
    return f"{size} B"


def format_mtime(mtime_ns: int) -> str:
    """Format a nanosecond timestamp as local time."""
    return datetime.fromtimestamp(mtime_ns / 1e9).strftime('%Y-%m-%d %H:%M:%S')

