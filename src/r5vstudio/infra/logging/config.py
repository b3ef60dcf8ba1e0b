from __future__ import annotations

"""
Logging Configuration Model.

Holds the immutable description of how the logging subsystem should be
wired and the table that maps level names to numeric levels. The model can
be derived directly from the application settings dictionary.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

LEVEL_BY_NAME: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    How the root logger should be wired.

    Attributes:
        level: Level name; unknown names resolve to INFO.
        console: Mirror records to stderr.
        log_file: Optional rotating log file.
        max_bytes: Rotation threshold for the log file.
        backup_count: Rotated segments kept next to the log file.
        console_fmt: Format of stderr lines.
        file_fmt: Format of log file lines.
        datefmt: Timestamp format of log file lines.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @property
    def level_number(self) -> int:
        return LEVEL_BY_NAME.get(str(self.level or "").strip().upper(), logging.INFO)

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any], log_file: Optional[str] = None) -> "LoggingConfig":
        """
        Build the logging setup from a validated settings dictionary.

        Args:
            settings: Application settings (`log_level` is read).
            log_file: Log file to attach, if any.
        """
        return cls(level=str(settings.get("log_level", "INFO")), console=True, log_file=log_file)
