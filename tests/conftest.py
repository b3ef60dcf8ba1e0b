from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the per-user data directory so tests never touch $HOME.
3. Shared workspace fixtures used across unit and integration tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Iterator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def user_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Redirect the application data directory into a temporary folder.

    Returns:
        Path: The directory returned by get_user_data_dir() during the test.
    """
    data_dir = tmp_path / "appdata"
    data_dir.mkdir()
    monkeypatch.setattr(
        "r5vstudio.infra.fs.get_user_data_dir", lambda: str(data_dir)
    )
    monkeypatch.setattr(
        "r5vstudio.domain.config.get_user_data_dir", lambda: str(data_dir)
    )
    monkeypatch.setattr(
        "r5vstudio.infra.logging.core.get_user_data_dir", lambda: str(data_dir)
    )
    return data_dir


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Detach the application logging pipeline before and after a test."""
    from r5vstudio.infra.logging import shutdown_logging

    shutdown_logging()
    yield
    shutdown_logging()


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        "tree_max_depth": 2,
        "compression_level": 6,
        "log_level": "WARNING",
        "save_log_file": False,
        "locale": "en",
    }


@pytest.fixture
def mod_workspace(tmp_path: Path) -> Path:
    """
    Create a small mod folder for tree and listing tests.

    Structure:
    /workspace
      /scripts
        /vscripts
          init.nut
      /paks
      mod.vdf
      README.md
    """
    root = tmp_path / "workspace"
    root.mkdir()

    vscripts = root / "scripts" / "vscripts"
    vscripts.mkdir(parents=True)
    (vscripts / "init.nut").write_text("// init", encoding="utf-8")

    (root / "paks").mkdir()
    (root / "mod.vdf").write_text('"demo"\n{\n}', encoding="utf-8")
    (root / "README.md").write_text("# Demo", encoding="utf-8")

    return root
