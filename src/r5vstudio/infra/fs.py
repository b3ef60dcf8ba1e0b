from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Locates the per-user data directory (config and logs), expands user-typed
paths and performs whole-file atomic writes. Storage services never write a
target in place: the payload goes to a temporary sibling which then
replaces the target in a single rename.
"""

import os
import stat
import tempfile
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "R5VStudio"
UNIX_APP_DIR_NAME = ".r5vstudio"
TEMP_SUFFIX = ".tmp"
DEFAULT_FILE_MODE = 0o644

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Per-user directory holding config.json and the logs folder.

    %LOCALAPPDATA%\\R5VStudio (or %APPDATA%) on Windows, ~/.r5vstudio
    elsewhere. Creation is attempted; a read-only home still yields the path.
    """
    data_dir = os.path.abspath(_platform_data_dir())
    safe_mkdir(data_dir)
    return data_dir


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Turn a user-typed path into an absolute one.

    `~` and environment variables are expanded. Blank input means `fallback`.

    Args:
        path: Path as typed on the command line or stored in settings.
        fallback: Used when `path` is None or blank.
    """
    raw = path.strip() if path else ""
    expanded = os.path.expandvars(os.path.expanduser(raw or fallback))
    return os.path.abspath(expanded)

# -----------------------------------------------------------------------------
# FILESYSTEM OPERATIONS API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Create `path` and its parents without raising.

    Returns:
        Tuple[bool, Optional[str]]: (created or already present, OS message on failure).
    """
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        return False, str(e)
    return True, None


def atomic_write_bytes(path: str, data: bytes) -> None:
    """
    Replace the content of `path` with `data` in a single step.

    The bytes are written to a temporary file in the target directory, flushed
    to disk and renamed over the destination. Readers observe either the old
    file or the complete new one. The temporary file is removed if any step
    fails. A symlinked `path` is written through: the file it points to is
    replaced and the link itself stays in place.

    Args:
        path: Destination file path.
        data: Complete file content.

    Raises:
        OSError: If the directory is not writable or the rename fails.
    """
    target = os.path.realpath(path)
    directory = os.path.dirname(target)

    fd, tmp_path = tempfile.mkstemp(
        prefix=f".{os.path.basename(target)}.", suffix=TEMP_SUFFIX, dir=directory
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, _target_mode(target))
        os.replace(tmp_path, target)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def atomic_write_text(path: str, text: str, encoding: str = "utf-8") -> None:
    """Encode `text` and write it with :func:`atomic_write_bytes`."""
    atomic_write_bytes(path, text.encode(encoding))

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _target_mode(target: str) -> int:
    """Keep the permission bits of an existing file, else use 0o644."""
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except OSError:
        return DEFAULT_FILE_MODE


def _platform_data_dir() -> str:
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            return os.path.join(base, APP_DIR_NAME)
    return os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)
