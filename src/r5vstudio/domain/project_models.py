from __future__ import annotations

"""
Project Document Data Models.

Value objects exchanged between the container codec, the project storage
service and the mod scaffold generator.
"""

from dataclasses import dataclass
from typing import Any, Mapping

# -----------------------------------------------------------------------------
# CODEC OUTPUTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class EncodedDocument:
    """
    Output of a container encode.

    Attributes:
        data: Complete container blob (magic bytes + compressed stream).
        original_size: UTF-8 byte length of the source text.
        compressed_size: Length of `data`, i.e. the bytes written to storage.
    """
    data: bytes
    original_size: int
    compressed_size: int

    @property
    def ratio(self) -> float:
        """Compressed size relative to the original (1.0 for empty input)."""
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size


@dataclass(frozen=True)
class DecodedDocument:
    """
    Output of a container decode.

    Attributes:
        text: Recovered document text.
        was_compressed: True if the container path was taken, False for the
            legacy plain-text path.
    """
    text: str
    was_compressed: bool

# -----------------------------------------------------------------------------
# MOD SCAFFOLD INPUT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ModData:
    """
    Metadata for a new mod skeleton.

    Attributes:
        name: Display name.
        description: Short description.
        author: Author credit.
        version: Version string.
        mod_id: Directory name and VDF key of the mod.
        path: Parent directory in which the mod directory is created.
    """
    name: str
    description: str
    author: str
    version: str
    mod_id: str
    path: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ModData":
        """Build from a payload using either `modId` or `mod_id`."""
        mod_id = data.get("modId", data.get("mod_id", ""))
        return cls(
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            author=str(data.get("author", "")),
            version=str(data.get("version", "")),
            mod_id=str(mod_id),
            path=str(data.get("path", "")),
        )
