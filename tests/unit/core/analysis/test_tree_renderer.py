from __future__ import annotations

"""
Unit tests for the Tree Renderer.

Verifies connector layout, folder markers and the collapsed marker for
folders left unexpanded at the depth limit.
"""

from r5vstudio.core.analysis.tree_renderer import COLLAPSED_MARKER, render_tree
from r5vstudio.domain.tree_models import TreeNode


def test_render_flat_list() -> None:
    """TC-01: Last entry uses the closing connector."""
    nodes = [TreeNode.file("a.txt", "/w/a.txt"), TreeNode.file("b.txt", "/w/b.txt")]

    assert render_tree(nodes) == ["├── a.txt", "└── b.txt"]


def test_render_nested_with_root_label() -> None:
    """TC-02: Nested children are indented under their folder."""
    nodes = [
        TreeNode.folder("scripts", "/w/scripts", [
            TreeNode.file("init.nut", "/w/scripts/init.nut"),
        ]),
        TreeNode.file("mod.vdf", "/w/mod.vdf"),
    ]

    lines = render_tree(nodes, root_label="/w")

    assert lines == [
        "/w",
        "├── scripts/",
        "│   └── init.nut",
        "└── mod.vdf",
    ]


def test_render_collapsed_and_empty_folders() -> None:
    """TC-03: Unexpanded folders get the marker; empty folders do not."""
    nodes = [
        TreeNode.folder("deep", "/w/deep", None),
        TreeNode.folder("empty", "/w/empty", []),
    ]

    lines = render_tree(nodes)

    assert lines[0] == f"├── deep/{COLLAPSED_MARKER}"
    assert lines[1] == "└── empty/"


def test_render_empty_tree() -> None:
    """TC-04: No nodes and no label renders nothing."""
    assert render_tree([]) == []
