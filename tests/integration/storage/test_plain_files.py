from __future__ import annotations

"""
Integration tests for Plain File and Directory Operations.

Validates text passthrough, single-level listing and the create/delete
semantics used by the file browser.
"""

import contextlib
import os
from pathlib import Path
from typing import Iterator, List

import pytest

from r5vstudio.core.storage.plain_files import (
    create_directory,
    delete_directory,
    list_directory,
    read_plain_file,
    write_plain_file,
)
from r5vstudio.domain.errors import EncodingError, FileAccessError

# -----------------------------------------------------------------------------
# FILE CONTENT
# -----------------------------------------------------------------------------

def test_plain_round_trip(tmp_path: Path) -> None:
    """TC-01: Written text is stored verbatim as UTF-8."""
    target = tmp_path / "script.nut"
    text = "function Init()\r\n{\n\tprint(\"ñ\")\n}\n"

    write_plain_file(str(target), text)

    assert target.read_bytes() == text.encode("utf-8")
    assert read_plain_file(str(target)) == text


def test_read_plain_invalid_utf8(tmp_path: Path) -> None:
    """TC-02: Non-UTF-8 content raises EncodingError."""
    target = tmp_path / "bin.dat"
    target.write_bytes(b"\xc3\x28")

    with pytest.raises(EncodingError):
        read_plain_file(str(target))


def test_read_plain_missing(tmp_path: Path) -> None:
    """TC-03: A missing file raises FileAccessError."""
    with pytest.raises(FileAccessError):
        read_plain_file(str(tmp_path / "missing.txt"))

# -----------------------------------------------------------------------------
# DIRECTORY OPERATIONS
# -----------------------------------------------------------------------------

def test_list_directory_single_level(mod_workspace: Path) -> None:
    """TC-04: Only immediate entries are listed, with their kind."""
    entries = {e.name: e for e in list_directory(str(mod_workspace))}

    assert set(entries) == {"scripts", "paks", "mod.vdf", "README.md"}
    assert entries["scripts"].is_directory is True
    assert entries["mod.vdf"].is_directory is False
    assert "init.nut" not in entries


def test_list_missing_directory(tmp_path: Path) -> None:
    """TC-05: Listing a missing directory raises FileAccessError."""
    with pytest.raises(FileAccessError):
        list_directory(str(tmp_path / "missing"))


def test_create_directory_is_idempotent(tmp_path: Path) -> None:
    """TC-06: Nested creation works and repeating it is harmless."""
    target = tmp_path / "a" / "b"

    create_directory(str(target))
    create_directory(str(target))

    assert target.is_dir()


def test_create_directory_over_file(tmp_path: Path) -> None:
    """TC-07: Creating a directory where a file exists fails."""
    blocker = tmp_path / "taken"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(FileAccessError):
        create_directory(str(blocker))


def test_delete_directory_recursive_and_idempotent(mod_workspace: Path) -> None:
    """TC-08: Deletion removes the whole tree; deleting again succeeds."""
    delete_directory(str(mod_workspace))
    assert not mod_workspace.exists()

    delete_directory(str(mod_workspace))


def test_delete_directory_symlink_removes_link_only(mod_workspace: Path, tmp_path: Path) -> None:
    """TC-09: Deleting a symlinked directory unlinks it and keeps the target tree."""
    link = tmp_path / "scripts_link"
    try:
        os.symlink(mod_workspace / "scripts", link, target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not available")

    delete_directory(str(link))

    assert not os.path.lexists(link)
    assert (mod_workspace / "scripts" / "vscripts" / "init.nut").is_file()


class _UnreadableEntry:
    """Directory entry whose type lookup fails."""

    def __init__(self, entry: os.DirEntry) -> None:
        self.name = entry.name
        self.path = entry.path

    def is_dir(self, follow_symlinks: bool = True) -> bool:
        raise PermissionError(13, "Permission denied", self.path)


def test_list_directory_unreadable_type_is_file(
        mod_workspace: Path,
        monkeypatch: pytest.MonkeyPatch,
) -> None:
    """TC-10: An entry whose type cannot be read is listed as a file."""
    real_scandir = os.scandir

    @contextlib.contextmanager
    def fake_scandir(path: str) -> Iterator[List[object]]:
        with real_scandir(path) as it:
            yield [_UnreadableEntry(e) if e.name == "paks" else e for e in it]

    monkeypatch.setattr("r5vstudio.core.storage.plain_files.os.scandir", fake_scandir)
    entries = {e.name: e for e in list_directory(str(mod_workspace))}

    assert entries["paks"].is_directory is False
    assert entries["scripts"].is_directory is True
