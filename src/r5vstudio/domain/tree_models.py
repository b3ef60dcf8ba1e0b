from __future__ import annotations

"""
Workspace Tree Data Models.

Provides the recursive node type produced by the tree builder, the flat
directory entry returned by single-level listings, and the diagnostics
collected when parts of a subtree cannot be read.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from r5vstudio.domain.constants import KIND_FILE, KIND_FOLDER

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class Expansion(str, Enum):
    """Expansion state of a folder node."""
    NOT_EXPANDED = "not_expanded"
    EMPTY = "empty"
    EXPANDED = "expanded"


@dataclass(frozen=True)
class TreeNode:
    """
    Represents one file or folder in the hierarchical workspace view.

    Attributes:
        name: Entry name (last path component).
        path: Full filesystem path of the entry.
        kind: Either "file" or "folder".
        children: Ordered child nodes. None for files and for folders that
            sit at the depth limit; a list (possibly empty) otherwise.
    """
    name: str
    path: str
    kind: str
    children: Optional[List["TreeNode"]] = None

    @property
    def is_folder(self) -> bool:
        return self.kind == KIND_FOLDER

    @property
    def expansion(self) -> Optional[Expansion]:
        """Tri-state view of `children`; None for file nodes."""
        if not self.is_folder:
            return None
        if self.children is None:
            return Expansion.NOT_EXPANDED
        if not self.children:
            return Expansion.EMPTY
        return Expansion.EXPANDED

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the node, omitting `children` when it was never expanded."""
        data: Dict[str, Any] = {"name": self.name, "path": self.path, "type": self.kind}
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    @classmethod
    def file(cls, name: str, path: str) -> "TreeNode":
        return cls(name=name, path=path, kind=KIND_FILE)

    @classmethod
    def folder(cls, name: str, path: str, children: Optional[List["TreeNode"]] = None) -> "TreeNode":
        return cls(name=name, path=path, kind=KIND_FOLDER, children=children)


@dataclass(frozen=True)
class DirectoryEntry:
    """
    Single-level directory listing entry.

    Attributes:
        name: Entry name.
        path: Full filesystem path.
        is_directory: True if the entry is a directory.
    """
    name: str
    path: str
    is_directory: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "isDirectory": self.is_directory, "path": self.path}

# -----------------------------------------------------------------------------
# TRAVERSAL DIAGNOSTICS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SkippedEntry:
    """A directory or entry the tree builder could not read."""
    path: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "reason": self.reason}


@dataclass(frozen=True)
class WorkspaceScan:
    """
    Complete outcome of a workspace traversal.

    Attributes:
        root_path: Directory the scan started from.
        max_depth: Depth budget used for the scan.
        nodes: Ordered top-level nodes.
        skipped: Entries dropped because they could not be enumerated.
    """
    root_path: str
    max_depth: int
    nodes: List[TreeNode] = field(default_factory=list)
    skipped: List[SkippedEntry] = field(default_factory=list)
