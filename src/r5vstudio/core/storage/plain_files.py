from __future__ import annotations

"""
Plain File and Directory Operations.

Passthrough helpers for documents that are not project containers, plus the
single-level directory listing and directory create/delete used by the
editor's file browser. OS errors are re-raised as FileAccessError with the
system message preserved.
"""

import logging
import os
import shutil
from typing import List

from r5vstudio.domain.errors import EncodingError, FileAccessError
from r5vstudio.domain.tree_models import DirectoryEntry
from r5vstudio.infra.fs import atomic_write_text

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FILE CONTENT
# -----------------------------------------------------------------------------

def read_plain_file(path: str) -> str:
    """
    Read a UTF-8 text file.

    Raises:
        FileAccessError: If the file cannot be opened or read.
        EncodingError: If the content is not valid UTF-8.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise FileAccessError.from_os_error(path, e) from e

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(str(e), path=path, position=e.start) from e


def write_plain_file(path: str, text: str) -> None:
    """
    Write `text` as UTF-8, replacing any existing content.

    Raises:
        FileAccessError: If the file cannot be written.
    """
    try:
        atomic_write_text(path, text)
    except OSError as e:
        raise FileAccessError.from_os_error(path, e) from e
    except UnicodeEncodeError as e:
        raise EncodingError(str(e), path=path, position=e.start) from e

    logger.debug(f"Wrote plain file {path} ({len(text)} chars)")

# -----------------------------------------------------------------------------
# DIRECTORY OPERATIONS
# -----------------------------------------------------------------------------

def list_directory(path: str) -> List[DirectoryEntry]:
    """
    List the immediate entries of a directory.

    No recursion and no sorting: entries come back in enumeration order.
    An entry whose type cannot be determined is reported as a file.

    Raises:
        FileAccessError: If the directory cannot be enumerated.
    """
    items: List[DirectoryEntry] = []
    try:
        with os.scandir(path) as it:
            for entry in it:
                items.append(
                    DirectoryEntry(name=entry.name, path=entry.path, is_directory=_is_dir(entry))
                )
    except OSError as e:
        raise FileAccessError.from_os_error(path, e) from e
    return items


def create_directory(path: str) -> None:
    """
    Create a directory and any missing parents. Existing directories are fine.

    Raises:
        FileAccessError: If creation fails or the path is an existing file.
    """
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise FileAccessError.from_os_error(path, e) from e


def delete_directory(path: str) -> None:
    """
    Recursively delete a directory. A path that does not exist is a success.
    A symlink is removed itself; its target is left untouched.

    Raises:
        FileAccessError: If removal fails.
    """
    if not os.path.lexists(path):
        logger.debug(f"Directory already absent: {path}")
        return

    try:
        if os.path.islink(path):
            os.unlink(path)
        else:
            shutil.rmtree(path)
    except OSError as e:
        raise FileAccessError.from_os_error(path, e) from e

    logger.info(f"Deleted directory: {path}")

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _is_dir(entry: os.DirEntry) -> bool:
    """Directory check that treats an unreadable entry type as a file."""
    # Symlinks are reported by their own type, never by their target's
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False
