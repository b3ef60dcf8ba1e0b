from __future__ import annotations

"""
Logging Handler Factories.

Builds the sinks drained by the queue listener. Every handler created here
is marked as owned by the application, so a reconfiguration removes exactly
these handlers and leaves those added by pytest or embedding hosts alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from r5vstudio.infra.logging.config import LoggingConfig

_HANDLER_TAG_ATTR: str = "_r5vstudio_handler"


# ==============================================================================
# OWNERSHIP MARKERS
# ==============================================================================

def mark_owned(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def is_owned(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


# ==============================================================================
# SINK FACTORIES
# ==============================================================================

def build_sinks(cfg: LoggingConfig) -> List[logging.Handler]:
    """
    Create the stderr and file sinks requested by `cfg`.

    A log file that cannot be opened is reported on stderr and skipped; the
    console sink still works.

    Returns:
        List[logging.Handler]: Sinks in attachment order (may be empty).
    """
    sinks: List[logging.Handler] = []
    level = cfg.level_number

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(cfg.console_fmt))
        console.setLevel(level)
        sinks.append(mark_owned(console))

    if cfg.log_file:
        rotating = _open_rotating_file(cfg)
        if rotating is not None:
            rotating.setLevel(level)
            sinks.append(mark_owned(rotating))

    return sinks


def _open_rotating_file(cfg: LoggingConfig) -> Optional[RotatingFileHandler]:
    """Open the rotating log file, creating its directory first."""
    target = os.path.abspath(str(cfg.log_file))
    try:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        handler = RotatingFileHandler(
            target,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{target}': {e}\n")
        return None

    handler.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    return handler
