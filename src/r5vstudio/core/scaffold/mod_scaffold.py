from __future__ import annotations

"""
Mod Scaffold Generator.

Creates the on-disk skeleton of a new mod: the standard folder layout plus
the mod.vdf descriptor, a manifest.json and a README.md filled from the
supplied metadata.
"""

import json
import logging
import os
from typing import Any, Dict

from r5vstudio.domain.constants import (
    MOD_MANIFEST_FILENAME,
    MOD_README_FILENAME,
    MOD_SUBDIRECTORIES,
    MOD_VDF_FILENAME,
)
from r5vstudio.domain.errors import FileAccessError, ModExistsError
from r5vstudio.domain.project_models import ModData

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def create_mod(mod: ModData) -> str:
    """
    Generate a new mod directory under `mod.path`.

    Args:
        mod: Metadata of the mod to create.

    Returns:
        str: Path of the created mod directory.

    Raises:
        ModExistsError: If the mod directory already exists.
        FileAccessError: If a directory or file cannot be created.
    """
    mod_dir = os.path.join(mod.path, mod.mod_id)
    if os.path.exists(mod_dir):
        raise ModExistsError(mod_dir)

    logger.info(f"Creating mod '{mod.mod_id}' in {mod.path}")

    for sub in ("",) + MOD_SUBDIRECTORIES:
        target = os.path.join(mod_dir, *sub.split("/")) if sub else mod_dir
        try:
            os.makedirs(target, exist_ok=True)
        except OSError as e:
            raise FileAccessError(target, f"Failed to create directory: {e}") from e

    files = {
        MOD_VDF_FILENAME: render_mod_vdf(mod),
        MOD_MANIFEST_FILENAME: json.dumps(build_manifest(mod), ensure_ascii=False, indent=2),
        MOD_README_FILENAME: render_readme(mod),
    }
    for filename, content in files.items():
        target = os.path.join(mod_dir, filename)
        try:
            with open(target, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
        except OSError as e:
            raise FileAccessError(target, f"Failed to write {filename}: {e}") from e

    return mod_dir

# -----------------------------------------------------------------------------
# TEMPLATES
# -----------------------------------------------------------------------------

def render_mod_vdf(mod: ModData) -> str:
    """KeyValues descriptor read by the game's mod loader."""
    return (
        f'"{mod.mod_id}"\n'
        "{\n"
        f'    "Name"              "{mod.name}"\n'
        f'    "Description"       "{mod.description}"\n'
        f'    "Version"           "{mod.version}"\n'
        '    "RequiredOnClient"  "1"\n'
        "}"
    )


def build_manifest(mod: ModData) -> Dict[str, Any]:
    return {
        "name": mod.name,
        "description": mod.description,
        "version": mod.version,
        "author": mod.author,
        "modId": mod.mod_id,
        "scripts": [],
        "rpaks": [],
        "audio": [],
        "localization": {},
    }


def render_readme(mod: ModData) -> str:
    return (
        f"# {mod.name}\n"
        "\n"
        f"{mod.description}\n"
        "\n"
        "## Author\n"
        f"{mod.author}\n"
        "\n"
        "## Version\n"
        f"{mod.version}\n"
        "\n"
        "## Installation\n"
        "Place this mod in your mods directory.\n"
    )
