from __future__ import annotations

"""
Tree Renderer.

Converts workspace TreeNode lists into visual ASCII lines for terminal
display. Node order is preserved as produced by the tree builder.
"""

from typing import List, Optional

from r5vstudio.domain.tree_models import Expansion, TreeNode

COLLAPSED_MARKER = " …"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(nodes: List[TreeNode], root_label: Optional[str] = None) -> List[str]:
    """
    Render nodes into a list of strings with ├── / └── connectors.

    Folders carry a trailing slash; folders left unexpanded at the depth
    limit also carry a trailing ellipsis marker.

    Args:
        nodes: Top-level nodes.
        root_label: Optional first line (usually the root path).

    Returns:
        List[str]: Visual lines of the tree.
    """
    lines: List[str] = []
    if root_label:
        lines.append(root_label)
    render_tree_structure(nodes, lines, prefix="")
    return lines


def render_tree_structure(nodes: List[TreeNode], lines: List[str], prefix: str = "") -> None:
    """
    Recursively append the rendering of `nodes` to `lines`.

    Args:
        nodes: Nodes of the current level.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    total = len(nodes)

    for i, node in enumerate(nodes):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        if not node.is_folder:
            lines.append(f"{prefix}{connector}{node.name}")
            continue

        marker = COLLAPSED_MARKER if node.expansion is Expansion.NOT_EXPANDED else ""
        lines.append(f"{prefix}{connector}{node.name}/{marker}")

        if node.children:
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(node.children, lines, prefix=new_prefix)
