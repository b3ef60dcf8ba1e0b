from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, cross-platform data directory resolution
and atomic whole-file replacement.
"""

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from r5vstudio.infra.fs import (
    atomic_write_bytes,
    atomic_write_text,
    get_user_data_dir,
    normalize_path,
    safe_mkdir,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "R5VStudio" in path


def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.r5vstudio on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert path.replace("\\", "/").endswith("/home/testuser/.r5vstudio")


def test_normalize_path_expansion() -> None:
    """TC-02: Verify expansion of environment variables and the empty fallback."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_folder", "sub").lower())

    assert normalize_path("  ", fallback=".") == os.path.abspath(".")

# -----------------------------------------------------------------------------
# FILESYSTEM OPERATIONS TESTS
# -----------------------------------------------------------------------------

def test_safe_mkdir_success(tmp_path: Path) -> None:
    """TC-03: Verify recursive directory creation."""
    target = tmp_path / "deep" / "nested" / "dir"
    success, err = safe_mkdir(str(target))

    assert success is True
    assert err is None
    assert target.exists()


def test_safe_mkdir_permission_error() -> None:
    """TC-03: Verify error handling when directory creation fails."""
    with patch("os.makedirs", side_effect=OSError("Permission Denied")):
        success, err = safe_mkdir("/root/forbidden")
        assert success is False
        assert "Permission Denied" in err


def test_atomic_write_creates_and_replaces(tmp_path: Path) -> None:
    """TC-04: New files are created and existing ones replaced whole."""
    target = tmp_path / "data.bin"

    atomic_write_bytes(str(target), b"one")
    atomic_write_text(str(target), "dos ñ")

    assert target.read_bytes() == "dos ñ".encode("utf-8")
    assert [p.name for p in tmp_path.iterdir()] == ["data.bin"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_atomic_write_permissions(tmp_path: Path) -> None:
    """TC-05: New files get 0o644 and existing files keep their mode."""
    fresh = tmp_path / "fresh.txt"
    atomic_write_text(str(fresh), "x")
    assert stat.S_IMODE(os.stat(fresh).st_mode) == 0o644

    private = tmp_path / "private.txt"
    private.write_text("secret", encoding="utf-8")
    os.chmod(private, 0o600)
    atomic_write_text(str(private), "still secret")
    assert stat.S_IMODE(os.stat(private).st_mode) == 0o600


def test_atomic_write_cleans_temp_on_failure(tmp_path: Path) -> None:
    """TC-06: A failed write removes its temporary file and re-raises."""
    target = tmp_path / "data.bin"

    with patch("r5vstudio.infra.fs.os.fsync", side_effect=OSError("I/O error")):
        with pytest.raises(OSError, match="I/O error"):
            atomic_write_bytes(str(target), b"payload")

    assert list(tmp_path.iterdir()) == []


def test_atomic_write_through_symlink(tmp_path: Path) -> None:
    """TC-07: Writing via a symlink replaces the target and keeps the link."""
    real = tmp_path / "real.r5v"
    real.write_bytes(b"old")
    link = tmp_path / "link.r5v"
    try:
        os.symlink(real, link)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not available")

    atomic_write_bytes(str(link), b"new")

    assert link.is_symlink()
    assert real.read_bytes() == b"new"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["link.r5v", "real.r5v"]
