from __future__ import annotations

"""
Project File Storage.

Reads and writes project documents through the container codec. Writes
always produce the compressed container; reads accept both the container
and legacy plain-text files.
"""

import logging

from r5vstudio.core.codec import container
from r5vstudio.domain.constants import DEFAULT_COMPRESSION_LEVEL
from r5vstudio.domain.errors import FileAccessError, StudioError
from r5vstudio.domain.project_models import DecodedDocument, EncodedDocument
from r5vstudio.infra.fs import atomic_write_bytes

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def read_project_file(path: str) -> DecodedDocument:
    """
    Load a project document from disk.

    Args:
        path: Project file path.

    Returns:
        DecodedDocument: Document text and whether it was stored compressed.

    Raises:
        FileAccessError: If the file cannot be read.
        DecompressionError: If the container payload is corrupt.
        EncodingError: If a plain-text file is not valid UTF-8.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise FileAccessError.from_os_error(path, e) from e

    try:
        document = container.decode(data)
    except StudioError as e:
        e.path = e.path or path
        raise

    logger.debug(
        f"Read project file {path} ({len(data)} bytes, "
        f"{'compressed' if document.was_compressed else 'plain'})"
    )
    return document


def write_project_file(
        path: str,
        text: str,
        level: int = DEFAULT_COMPRESSION_LEVEL,
) -> EncodedDocument:
    """
    Store a project document as a compressed container.

    The blob is written in one atomic replace, so a failed write leaves the
    previous file untouched.

    Args:
        path: Destination file path.
        text: Document content.
        level: gzip compression level.

    Returns:
        EncodedDocument: Written bytes with original and compressed sizes.

    Raises:
        CompressionError: If encoding fails.
        FileAccessError: If the blob cannot be written.
    """
    try:
        encoded = container.encode(text, level=level)
    except StudioError as e:
        e.path = e.path or path
        raise

    try:
        atomic_write_bytes(path, encoded.data)
    except OSError as e:
        raise FileAccessError.from_os_error(path, e) from e

    logger.info(
        f"Project saved: {path} ({encoded.original_size} -> {encoded.compressed_size} bytes, "
        f"ratio {encoded.ratio:.2f})"
    )
    return encoded
