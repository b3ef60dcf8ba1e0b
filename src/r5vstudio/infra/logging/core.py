from __future__ import annotations

"""
Logging Lifecycle.

Wires the root logger once per process: records go through a QueueHandler
and a QueueListener thread drains them into the sinks built by
`handlers.build_sinks`, so a slow disk never stalls a save or a tree build.
Reconfiguration and shutdown only touch handlers owned by the application.
"""

import atexit
import logging
import os
import queue
import sys
from collections import deque
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from r5vstudio.infra.fs import get_user_data_dir
from r5vstudio.infra.logging.config import LoggingConfig
from r5vstudio.infra.logging.handlers import build_sinks, is_owned, mark_owned

_CONFIGURED_FLAG_ATTR: str = "_r5vstudio_configured"
_QUEUE_LISTENER_ATTR: str = "_r5vstudio_queue_listener"

DEFAULT_LOG_FILENAME = "r5vstudio.log"
LOG_DIR_NAME = "logs"

_atexit_registered = False


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = DEFAULT_LOG_FILENAME) -> str:
    """Log file location inside the per-user data directory."""
    return os.path.join(get_user_data_dir(), LOG_DIR_NAME, file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach the queue-based logging pipeline to the root logger.

    Repeated calls are no-ops unless `force` is set, in which case the
    previous pipeline is shut down and rebuilt from `cfg`.

    Args:
        cfg: Desired logging setup.
        force: Rebuild even if logging was already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    shutdown_logging()
    root.setLevel(cfg.level_number)

    try:
        sinks = build_sinks(cfg)
        if not sinks:
            return root

        records: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        listener = QueueListener(records, *sinks, respect_handler_level=True)
        listener.start()
    except (OSError, ValueError, RuntimeError) as e:
        _install_emergency_console(root, e)
        return root

    root.addHandler(mark_owned(QueueHandler(records)))
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    _register_exit_hook()
    return root


def shutdown_logging() -> None:
    """
    Flush and detach the application's logging pipeline.

    Pending records are drained by stopping the listener before its sinks
    are closed. Handlers not owned by the application are left attached.
    """
    root = logging.getLogger()

    listener: Optional[QueueListener] = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for handler in [h for h in root.handlers if is_owned(h)]:
        root.removeHandler(handler)
        handler.close()
    if listener is not None:
        for sink in listener.handlers:
            sink.close()

    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_recent_logs(n_lines: int = 100, log_path: Optional[str] = None) -> str:
    """
    Return the last `n_lines` lines of the log file.

    Args:
        n_lines: Number of trailing lines to keep.
        log_path: Log file to read. Defaults to the standard log path.

    Returns:
        str: The tail, or a short notice if the file is missing or unreadable.
    """
    path = log_path or get_default_log_path()
    if not os.path.exists(path):
        return "Log file not found."

    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return "".join(deque(f, maxlen=max(n_lines, 0)))
    except OSError as e:
        return f"Error retrieving logs: {e}"


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _install_emergency_console(root: logging.Logger, error: Exception) -> None:
    """Fall back to a plain stderr handler when the pipeline cannot start."""
    fallback = logging.StreamHandler(sys.stderr)
    fallback.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
    root.addHandler(mark_owned(fallback))
    root.setLevel(logging.INFO)
    root.warning(f"Logging pipeline failed ({error}). Switched to emergency console.")


def _register_exit_hook() -> None:
    global _atexit_registered
    if not _atexit_registered:
        atexit.register(shutdown_logging)
        _atexit_registered = True
