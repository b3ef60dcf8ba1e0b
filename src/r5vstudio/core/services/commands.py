from __future__ import annotations

"""
Command Layer.

Entry points invoked by the interfaces. Each command wraps one core
operation, catches domain errors at this boundary and returns a structured
result object instead of raising. Nothing is retried here; retry policy
belongs to the caller.
"""

import logging
from typing import Any, Mapping, Union

from r5vstudio.core.analysis import tree_builder
from r5vstudio.core.scaffold import mod_scaffold
from r5vstudio.core.storage import plain_files, project_files
from r5vstudio.domain.command_models import (
    DirectoryListResult,
    FileReadResult,
    FileWriteResult,
    ModCreateResult,
    ProjectReadResult,
    ProjectWriteResult,
    WorkspaceTreeResult,
    create_error_result,
    create_success_result,
)
from r5vstudio.domain.constants import DEFAULT_COMPRESSION_LEVEL, DEFAULT_TREE_DEPTH
from r5vstudio.domain.errors import StudioError
from r5vstudio.domain.project_models import ModData

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FILE CONTENT COMMANDS
# -----------------------------------------------------------------------------

def read_file(file_path: str) -> FileReadResult:
    try:
        content = plain_files.read_plain_file(file_path)
    except StudioError as e:
        return _fail(FileReadResult, "read_file", file_path, e)
    return create_success_result(FileReadResult, content=content)


def write_file(file_path: str, content: str) -> FileWriteResult:
    try:
        plain_files.write_plain_file(file_path, content)
    except StudioError as e:
        return _fail(FileWriteResult, "write_file", file_path, e)
    return create_success_result(FileWriteResult)


def read_project_file(file_path: str) -> ProjectReadResult:
    """Load a project document, reporting whether it was stored compressed."""
    try:
        document = project_files.read_project_file(file_path)
    except StudioError as e:
        return _fail(ProjectReadResult, "read_project_file", file_path, e)
    return create_success_result(
        ProjectReadResult, content=document.text, compressed=document.was_compressed
    )


def write_project_file(
        file_path: str,
        content: str,
        level: int = DEFAULT_COMPRESSION_LEVEL,
) -> ProjectWriteResult:
    """Save a project document as a compressed container and report its sizes."""
    try:
        encoded = project_files.write_project_file(file_path, content, level=level)
    except StudioError as e:
        return _fail(ProjectWriteResult, "write_project_file", file_path, e)
    return create_success_result(
        ProjectWriteResult,
        original_size=encoded.original_size,
        compressed_size=encoded.compressed_size,
    )

# -----------------------------------------------------------------------------
# DIRECTORY COMMANDS
# -----------------------------------------------------------------------------

def list_directory(dir_path: str) -> DirectoryListResult:
    try:
        items = plain_files.list_directory(dir_path)
    except StudioError as e:
        return _fail(DirectoryListResult, "list_directory", dir_path, e)
    return create_success_result(DirectoryListResult, items=items)


def create_directory(dir_path: str) -> FileWriteResult:
    try:
        plain_files.create_directory(dir_path)
    except StudioError as e:
        return _fail(FileWriteResult, "create_directory", dir_path, e)
    return create_success_result(FileWriteResult)


def delete_directory(dir_path: str) -> FileWriteResult:
    """Delete a directory tree; an absent directory counts as deleted."""
    try:
        plain_files.delete_directory(dir_path)
    except StudioError as e:
        return _fail(FileWriteResult, "delete_directory", dir_path, e)
    return create_success_result(FileWriteResult)

# -----------------------------------------------------------------------------
# WORKSPACE COMMANDS
# -----------------------------------------------------------------------------

def open_mod_folder(folder_path: str, max_depth: int = DEFAULT_TREE_DEPTH) -> WorkspaceTreeResult:
    """
    Build the explorer tree for a mod folder.

    Args:
        folder_path: Root folder of the workspace.
        max_depth: Levels below the root to expand.

    Returns:
        WorkspaceTreeResult: Tree, root path and skipped entries, or an error
        if the folder does not exist or the depth is negative.
    """
    try:
        scan = tree_builder.scan_workspace(folder_path, max_depth)
    except (StudioError, ValueError) as e:
        return _fail(WorkspaceTreeResult, "open_mod_folder", folder_path, e)
    return create_success_result(
        WorkspaceTreeResult, tree=scan.nodes, root_path=folder_path, skipped=scan.skipped
    )


def create_mod(mod_data: Union[ModData, Mapping[str, Any]]) -> ModCreateResult:
    """Generate a mod skeleton from a ModData or a raw payload mapping."""
    mod = mod_data if isinstance(mod_data, ModData) else ModData.from_dict(mod_data)
    try:
        path = mod_scaffold.create_mod(mod)
    except StudioError as e:
        return _fail(ModCreateResult, "create_mod", mod.path, e)
    return create_success_result(ModCreateResult, path=path)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _fail(result_type: type, command: str, path: str, error: Exception) -> Any:
    """Log a failed command and wrap the error into a result object."""
    logger.error(f"{command} failed for '{path}': {error}")
    return create_error_result(result_type, str(error))
