from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to the project container format markers,
workspace traversal limits, mod scaffold layout and configuration versioning.
"""

from typing import Final, Tuple

CURRENT_CONFIG_VERSION: Final[str] = "1.0.0"

# -----------------------------------------------------------------------------
# PROJECT CONTAINER FORMAT
# -----------------------------------------------------------------------------

# "R5VP": marks a file as a compressed R5V project container
MAGIC_BYTES: Final[bytes] = b"\x52\x35\x56\x50"
MAGIC_LENGTH: Final[int] = len(MAGIC_BYTES)

MAX_COMPRESSION_LEVEL: Final[int] = 9
MIN_COMPRESSION_LEVEL: Final[int] = 0
DEFAULT_COMPRESSION_LEVEL: Final[int] = MAX_COMPRESSION_LEVEL

# -----------------------------------------------------------------------------
# WORKSPACE TREE
# -----------------------------------------------------------------------------

DEFAULT_TREE_DEPTH: Final[int] = 3

KIND_FILE: Final[str] = "file"
KIND_FOLDER: Final[str] = "folder"

# -----------------------------------------------------------------------------
# MOD SCAFFOLD LAYOUT
# -----------------------------------------------------------------------------

MOD_SUBDIRECTORIES: Final[Tuple[str, ...]] = (
    "scripts",
    "scripts/vscripts",
    "paks",
    "audio",
    "resource",
)

MOD_VDF_FILENAME: Final[str] = "mod.vdf"
MOD_MANIFEST_FILENAME: Final[str] = "manifest.json"
MOD_README_FILENAME: Final[str] = "README.md"
