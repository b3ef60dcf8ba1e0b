from __future__ import annotations

"""
Unit tests for the Workspace Tree Builder.

Verifies depth limiting, folder-first ordinal ordering, error handling for
missing roots and best-effort skipping of unreadable entries. Symlinked
folders are listed but never followed.
"""

import contextlib
import os
from pathlib import Path
from typing import List
from unittest.mock import patch

import pytest

from r5vstudio.core.analysis.tree_builder import build_tree, scan_workspace
from r5vstudio.domain.errors import NotFoundError
from r5vstudio.domain.tree_models import Expansion, TreeNode


def _names(nodes: List[TreeNode]) -> List[str]:
    return [n.name for n in nodes]


@pytest.fixture
def deep_tree(tmp_path: Path) -> Path:
    """Five nested folders: root/l1/l2/l3/l4/l5, each with one file."""
    root = tmp_path / "root"
    current = root
    for level in range(1, 6):
        current = current / f"l{level}"
        current.mkdir(parents=True)
        (current / f"f{level}.txt").write_text("x", encoding="utf-8")
    return root

# -----------------------------------------------------------------------------
# ORDERING
# -----------------------------------------------------------------------------

def test_folders_first_then_files(tmp_path: Path) -> None:
    """TC-01: Folders come before files; each group sorted by name."""
    (tmp_path / "b.txt").write_text("", encoding="utf-8")
    (tmp_path / "A").mkdir()
    (tmp_path / "a.txt").write_text("", encoding="utf-8")

    nodes = build_tree(str(tmp_path))

    assert _names(nodes) == ["A", "a.txt", "b.txt"]
    assert nodes[0].kind == "folder"
    assert nodes[1].kind == "file"


def test_ordinal_name_comparison(tmp_path: Path) -> None:
    """TC-02: Names compare by code point, so upper case sorts before lower case."""
    for name in ("beta.nut", "Alpha.nut", "alpha.nut", "_init.nut"):
        (tmp_path / name).write_text("", encoding="utf-8")

    nodes = build_tree(str(tmp_path))

    assert _names(nodes) == ["Alpha.nut", "_init.nut", "alpha.nut", "beta.nut"]


def test_build_is_deterministic(mod_workspace: Path) -> None:
    """TC-03: Two builds over an unchanged folder are equal."""
    assert build_tree(str(mod_workspace)) == build_tree(str(mod_workspace))


def test_node_paths_and_structure(mod_workspace: Path) -> None:
    """TC-04: Paths are joined from the root and nested folders are expanded."""
    nodes = build_tree(str(mod_workspace))

    assert _names(nodes) == ["paks", "scripts", "README.md", "mod.vdf"]
    scripts = nodes[1]
    assert scripts.path == os.path.join(str(mod_workspace), "scripts")
    assert _names(scripts.children) == ["vscripts"]
    assert _names(scripts.children[0].children) == ["init.nut"]

    paks = nodes[0]
    assert paks.children == []
    assert paks.expansion is Expansion.EMPTY

# -----------------------------------------------------------------------------
# DEPTH LIMIT
# -----------------------------------------------------------------------------

def test_depth_boundary(deep_tree: Path) -> None:
    """TC-05: With max_depth=3, folders at depth 3 have no children."""
    nodes = build_tree(str(deep_tree), max_depth=3)

    l1 = nodes[0]
    l2 = l1.children[0]
    l3 = l2.children[0]
    l4 = l3.children[0]

    assert (l1.name, l2.name, l3.name, l4.name) == ("l1", "l2", "l3", "l4")
    assert l3.expansion is Expansion.EXPANDED
    assert l4.children is None
    assert l4.expansion is Expansion.NOT_EXPANDED


def test_depth_zero_lists_root_only(deep_tree: Path) -> None:
    """TC-06: max_depth=0 lists the root entries without expanding any folder."""
    nodes = build_tree(str(deep_tree), max_depth=0)

    assert _names(nodes) == ["l1"]
    assert nodes[0].children is None


def test_files_never_have_children(deep_tree: Path) -> None:
    """TC-07: File nodes carry no children at any depth."""
    nodes = build_tree(str(deep_tree), max_depth=5)

    stack = list(nodes)
    while stack:
        node = stack.pop()
        if node.kind == "file":
            assert node.children is None
            assert node.expansion is None
        elif node.children:
            stack.extend(node.children)


def test_negative_depth_rejected(tmp_path: Path) -> None:
    """TC-08: A negative depth is a caller error."""
    with pytest.raises(ValueError):
        build_tree(str(tmp_path), max_depth=-1)

# -----------------------------------------------------------------------------
# ERROR HANDLING
# -----------------------------------------------------------------------------

def test_missing_root_raises_not_found(tmp_path: Path) -> None:
    """TC-09: A missing root raises NotFoundError with the path in the message."""
    missing = tmp_path / "nope"

    with pytest.raises(NotFoundError) as exc_info:
        build_tree(str(missing))

    assert str(exc_info.value) == f"Folder does not exist: {missing}"


def test_file_root_raises_not_found(tmp_path: Path) -> None:
    """TC-10: A root that is a file is not a workspace folder."""
    target = tmp_path / "file.txt"
    target.write_text("", encoding="utf-8")

    with pytest.raises(NotFoundError):
        build_tree(str(target))


def test_empty_root(tmp_path: Path) -> None:
    """TC-11: An empty folder produces an empty tree."""
    assert build_tree(str(tmp_path)) == []


def test_unreadable_directory_is_skipped(mod_workspace: Path) -> None:
    """TC-12: A directory that cannot be enumerated yields no children and a diagnostic."""
    blocked = os.path.join(str(mod_workspace), "scripts")
    real_scandir = os.scandir

    def fake_scandir(path):
        if os.fspath(path) == blocked:
            raise PermissionError(13, "Permission denied", blocked)
        return real_scandir(path)

    with patch("r5vstudio.core.analysis.tree_builder.os.scandir", side_effect=fake_scandir):
        scan = scan_workspace(str(mod_workspace), max_depth=3)

    scripts = next(n for n in scan.nodes if n.name == "scripts")
    assert scripts.children == []
    assert len(scan.skipped) == 1
    assert scan.skipped[0].path == blocked
    assert "Permission denied" in scan.skipped[0].reason
    # Siblings are still present
    assert "README.md" in _names(scan.nodes)


class _UnreadableEntry:
    """Directory entry whose type lookup fails."""

    def __init__(self, entry: os.DirEntry) -> None:
        self.name = entry.name
        self.path = entry.path

    def is_dir(self, follow_symlinks: bool = True) -> bool:
        raise PermissionError(13, "Permission denied", self.path)


def test_unreadable_entry_type_becomes_file(mod_workspace: Path) -> None:
    """TC-13: An entry whose type cannot be read is a file node with one diagnostic."""
    real_scandir = os.scandir

    @contextlib.contextmanager
    def fake_scandir(path):
        with real_scandir(path) as it:
            yield [_UnreadableEntry(e) if e.name == "paks" else e for e in it]

    with patch("r5vstudio.core.analysis.tree_builder.os.scandir", side_effect=fake_scandir):
        scan = scan_workspace(str(mod_workspace), max_depth=3)

    paks = next(n for n in scan.nodes if n.name == "paks")
    assert paks.kind == "file"
    assert paks.children is None
    assert len(scan.skipped) == 1
    assert scan.skipped[0].path == os.path.join(str(mod_workspace), "paks")
    assert "Permission denied" in scan.skipped[0].reason
    # Files sort after folders, so the entry moves behind "scripts"
    assert _names(scan.nodes)[0] == "scripts"

# -----------------------------------------------------------------------------
# SYMLINKS
# -----------------------------------------------------------------------------

def test_symlinked_folder_is_not_traversed(mod_workspace: Path) -> None:
    """TC-14: A link to a folder is shown as a file without children."""
    link = mod_workspace / "linked"
    try:
        os.symlink(mod_workspace / "scripts", link, target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not available")

    scan = scan_workspace(str(mod_workspace), max_depth=3)

    linked = next(n for n in scan.nodes if n.name == "linked")
    assert linked.kind == "file"
    assert linked.children is None
    assert scan.skipped == []
    assert _names(scan.nodes)[:2] == ["paks", "scripts"]
