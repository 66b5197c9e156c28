"""Logging for lookups and restores."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from . import config

LOGGER_NAME = 'ZfsUndelete'


class UndeleteLogger:
    """Logger with console, GUI and file output."""

    def __init__(self, log_to_file: bool = False, log_file: Optional[Path] = None,
                 level: int = logging.INFO):
        """
        Initialize the logger.

        Args:
            log_to_file: Whether to write logs to a file
            log_file: Path to log file (if None, auto-generates based on timestamp)
            level: Minimum level passed to the handlers
        """
        self.log_entries: List[str] = []
        self.log_to_file = log_to_file or log_file is not None
        self.log_file = log_file or (config.LOG_DIR / f"undelete_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(level)
        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

        # One console and at most one file handler at a time on the shared logger
        for handler in list(self.logger.handlers):
            if getattr(handler, '_undelete_console', False) or getattr(handler, '_undelete_file', False):
                self.logger.removeHandler(handler)
                handler.close()

        # Console handler, stdout is reserved for prompts and results
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        console_handler._undelete_console = True
        self.logger.addHandler(console_handler)

        if self.log_to_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            file_handler._undelete_file = True
            self.logger.addHandler(file_handler)

        self.debug(f"zfs-undelete initialized on {config.PLATFORM_NAME} {config.PLATFORM_VERSION}")

    def _record(self, level_name: str, message: str):
        timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        self.log_entries.append(f"[{timestamp}] {level_name}: {message}")

    def debug(self, message: str):
        """Log a debug message. Not kept for GUI display."""
        self.logger.debug(message)

    def info(self, message: str):
        """Log an info message."""
        self._record("INFO", message)
        self.logger.info(message)

    def warning(self, message: str):
        """Log a warning message."""
        self._record("WARNING", message)
        self.logger.warning(message)

    def error(self, message: str):
        """Log an error message."""
        self._record("ERROR", message)
        self.logger.error(message)

    def get_log_text(self) -> str:
        """Get all logs as a single string for display."""
        return '\n'.join(self.log_entries)
