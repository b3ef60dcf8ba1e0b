from __future__ import annotations

"""
Workspace Tree Builder.

Constructs the bounded-depth hierarchical view of a directory shown in the
editor's file explorer. Folders are listed before files and names are
compared ordinally, so the output is deterministic for a fixed filesystem
state.

Traversal is best effort: a directory that cannot be enumerated contributes
no children and an entry whose type cannot be read is treated as a file.
Neither aborts the build; each is recorded as a SkippedEntry on the scan.
"""

import logging
import os
from typing import List, Optional, Tuple

from r5vstudio.domain.constants import DEFAULT_TREE_DEPTH
from r5vstudio.domain.errors import NotFoundError
from r5vstudio.domain.tree_models import SkippedEntry, TreeNode, WorkspaceScan

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(root_path: str, max_depth: int = DEFAULT_TREE_DEPTH) -> List[TreeNode]:
    """
    Build the ordered node list for `root_path`.

    Args:
        root_path: Directory to display.
        max_depth: Number of levels below the root that may be expanded.
            Folders found at this depth are emitted without children.

    Returns:
        List[TreeNode]: Top-level nodes of the workspace.

    Raises:
        NotFoundError: If `root_path` is not an existing directory.
        ValueError: If `max_depth` is negative.
    """
    return scan_workspace(root_path, max_depth).nodes


def scan_workspace(root_path: str, max_depth: int = DEFAULT_TREE_DEPTH) -> WorkspaceScan:
    """
    Build the workspace tree and collect traversal diagnostics.

    Args:
        root_path: Directory to display.
        max_depth: Number of levels below the root that may be expanded.

    Returns:
        WorkspaceScan: Nodes plus the entries that had to be skipped.

    Raises:
        NotFoundError: If `root_path` is not an existing directory.
        ValueError: If `max_depth` is negative.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, received {max_depth}")
    if not os.path.isdir(root_path):
        raise NotFoundError(root_path)

    logger.info(f"Building workspace tree for: {root_path} (depth {max_depth})")

    skipped: List[SkippedEntry] = []
    nodes = _build_level(root_path, 0, max_depth, skipped)

    if skipped:
        logger.debug(f"Workspace tree skipped {len(skipped)} unreadable entries")
    return WorkspaceScan(root_path=root_path, max_depth=max_depth, nodes=nodes, skipped=skipped)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (SCANNING)
# -----------------------------------------------------------------------------

def _build_level(
        path: str,
        depth: int,
        max_depth: int,
        skipped: List[SkippedEntry],
) -> List[TreeNode]:
    """Build the sorted nodes of one directory, recursing while depth allows."""
    entries = _list_entries(path, skipped)
    entries.sort(key=_sort_key)

    nodes: List[TreeNode] = []
    for name, entry_path, is_dir in entries:
        if not is_dir:
            nodes.append(TreeNode.file(name, entry_path))
            continue

        children: Optional[List[TreeNode]] = None
        if depth < max_depth:
            children = _build_level(entry_path, depth + 1, max_depth, skipped)
        nodes.append(TreeNode.folder(name, entry_path, children))

    return nodes


def _list_entries(path: str, skipped: List[SkippedEntry]) -> List[Tuple[str, str, bool]]:
    """Enumerate (name, path, is_dir) triples, recording failures in `skipped`."""
    entries: List[Tuple[str, str, bool]] = []
    try:
        with os.scandir(path) as it:
            for entry in it:
                entries.append((entry.name, entry.path, _classify(entry, skipped)))
    except OSError as e:
        logger.debug(f"Cannot enumerate '{path}': {e}")
        skipped.append(SkippedEntry(path=path, reason=str(e)))
    return entries


def _classify(entry: os.DirEntry, skipped: List[SkippedEntry]) -> bool:
    """Return True for directories; unreadable types count as files."""
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError as e:
        skipped.append(SkippedEntry(path=entry.path, reason=str(e)))
        return False


def _sort_key(entry: Tuple[str, str, bool]) -> Tuple[int, str]:
    """Folders first, then ordinal (code point) name order."""
    name, _, is_dir = entry
    return (0 if is_dir else 1, name)
