from __future__ import annotations

"""
Command Result Data Models.

Defines the structured result objects returned by the command layer to the
interface layers. Each result carries an `ok` flag and either its payload or
an error message; `to_payload` produces a JSON-friendly dictionary that omits
unset fields.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from r5vstudio.domain.tree_models import DirectoryEntry, SkippedEntry, TreeNode

# -----------------------------------------------------------------------------
# BASE RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CommandResult:
    """
    Common shape of every command outcome.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure (empty on success).
    """
    ok: bool
    error: str = ""

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": self.ok}
        for f in fields(self):
            if f.name in ("ok", "error"):
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            payload[f.name] = _serialize(value)
        if self.error:
            payload["error"] = self.error
        return payload

# -----------------------------------------------------------------------------
# CONCRETE RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileReadResult(CommandResult):
    content: Optional[str] = None


@dataclass(frozen=True)
class FileWriteResult(CommandResult):
    pass


@dataclass(frozen=True)
class ProjectReadResult(CommandResult):
    content: Optional[str] = None
    compressed: Optional[bool] = None


@dataclass(frozen=True)
class ProjectWriteResult(CommandResult):
    original_size: Optional[int] = None
    compressed_size: Optional[int] = None


@dataclass(frozen=True)
class DirectoryListResult(CommandResult):
    items: Optional[List[DirectoryEntry]] = None


@dataclass(frozen=True)
class WorkspaceTreeResult(CommandResult):
    tree: Optional[List[TreeNode]] = None
    root_path: Optional[str] = None
    skipped: List[SkippedEntry] = field(default_factory=list)


@dataclass(frozen=True)
class ModCreateResult(CommandResult):
    path: Optional[str] = None

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(result_type: type, error: str) -> Any:
    """
    Create a failed result of the requested type.

    Args:
        result_type: Concrete CommandResult subclass.
        error: Detailed error description.

    Returns:
        An immutable result with `ok=False` and no payload.
    """
    return result_type(ok=False, error=error)


def create_success_result(result_type: type, **payload: Any) -> Any:
    """
    Create a successful result of the requested type.

    Args:
        result_type: Concrete CommandResult subclass.
        **payload: Field values for the result payload.

    Returns:
        An immutable result with `ok=True`.
    """
    return result_type(ok=True, error="", **payload)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _serialize(value: Any) -> Any:
    """Recursively convert model objects into plain JSON types."""
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return value
