from __future__ import annotations

"""
Domain Error Hierarchy.

Every failure raised by the core services extends StudioError and carries
the offending path plus the underlying system or codec message. The command
layer catches StudioError at its boundary and converts it into a structured
result, so these exceptions never escape to an interface unformatted.
"""

from typing import Optional

# -----------------------------------------------------------------------------
# BASE ERROR
# -----------------------------------------------------------------------------

class StudioError(RuntimeError):
    """
    Base error for all core operations.

    Attributes:
        path: Filesystem path involved in the failure (may be empty).
        detail: Underlying system or codec message.
    """

    def __init__(self, message: str, path: str = "", detail: str = "") -> None:
        self.path = path
        self.detail = detail
        super().__init__(message)

# -----------------------------------------------------------------------------
# STORAGE ERRORS
# -----------------------------------------------------------------------------

class FileAccessError(StudioError):
    """Host filesystem failure: missing path, permission denied, disk fault."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(detail, path=path, detail=detail)

    @classmethod
    def from_os_error(cls, path: str, exc: OSError) -> "FileAccessError":
        """Build the error from an OSError, preserving its message verbatim."""
        return cls(path, str(exc))


class NotFoundError(StudioError):
    """Root path required for an operation does not exist."""

    def __init__(self, path: str, what: str = "Folder") -> None:
        super().__init__(f"{what} does not exist: {path}", path=path, detail=what)


class ModExistsError(StudioError):
    """Target mod directory is already present on disk."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Mod directory already exists: {path}", path=path)

# -----------------------------------------------------------------------------
# CODEC ERRORS
# -----------------------------------------------------------------------------

class CompressionError(StudioError):
    """Compression stream failed to initialize or finalize."""

    def __init__(self, detail: str, path: str = "") -> None:
        super().__init__(f"Compression error: {detail}", path=path, detail=detail)


class DecompressionError(StudioError):
    """Compressed payload is corrupt or truncated."""

    def __init__(self, detail: str, path: str = "") -> None:
        super().__init__(f"Failed to decompress: {detail}", path=path, detail=detail)


class EncodingError(StudioError):
    """Plain-text document bytes are not valid UTF-8."""

    def __init__(self, detail: str, path: str = "", position: Optional[int] = None) -> None:
        self.position = position
        super().__init__(f"Invalid UTF-8 content: {detail}", path=path, detail=detail)
