from __future__ import annotations

"""
Project Container Codec.

Encodes document text into the R5V project container and decodes it back.

Container layout (bit-exact):

    offset 0..4   : MAGIC_BYTES (b"R5VP")
    offset 4..end : gzip stream of the UTF-8 document bytes

The gzip header carries no filename and a zero mtime, so encoding the same
text twice yields identical bytes. The format stores no length field and no
checksum of its own; integrity relies on the gzip trailer (CRC32 + ISIZE).
Only the first gzip member is read. Bytes after its trailer are ignored, so
a container with trailing padding still opens.

Decoding sniffs the first four bytes. Anything that does not start with the
magic marker is a legacy plain-text document and is decoded as UTF-8. A
plain-text file that happens to begin with "R5VP" is taken for a container
and fails decompression; this ambiguity is part of the format.
"""

import gzip
import logging
import zlib

from r5vstudio.domain.constants import (
    DEFAULT_COMPRESSION_LEVEL,
    MAGIC_BYTES,
    MAGIC_LENGTH,
    MAX_COMPRESSION_LEVEL,
    MIN_COMPRESSION_LEVEL,
)
from r5vstudio.domain.errors import CompressionError, DecompressionError, EncodingError
from r5vstudio.domain.project_models import DecodedDocument, EncodedDocument

logger = logging.getLogger(__name__)

# zlib window bits selecting the gzip wrapper (header and trailer checked)
GZIP_WBITS = zlib.MAX_WBITS | 16

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def is_container(data: bytes) -> bool:
    """Return True if `data` starts with the container magic bytes."""
    return len(data) >= MAGIC_LENGTH and data[:MAGIC_LENGTH] == MAGIC_BYTES


def encode(text: str, level: int = DEFAULT_COMPRESSION_LEVEL) -> EncodedDocument:
    """
    Compress a document into the container format.

    Args:
        text: Document content.
        level: gzip compression level (0-9). Defaults to maximum effort.

    Returns:
        EncodedDocument: Container bytes with pre- and post-compression sizes.

    Raises:
        CompressionError: If the text cannot be encoded or compressed.
    """
    if not MIN_COMPRESSION_LEVEL <= level <= MAX_COMPRESSION_LEVEL:
        raise CompressionError(
            f"invalid compression level {level} "
            f"(expected {MIN_COMPRESSION_LEVEL}-{MAX_COMPRESSION_LEVEL})"
        )

    try:
        raw = text.encode("utf-8")
    except UnicodeEncodeError as e:
        # Lone surrogates cannot be represented in UTF-8
        raise CompressionError(str(e)) from e

    try:
        stream = gzip.compress(raw, compresslevel=level, mtime=0)
    except (zlib.error, ValueError) as e:
        raise CompressionError(str(e)) from e

    data = MAGIC_BYTES + stream
    logger.debug(f"Encoded document: {len(raw)} bytes -> {len(data)} bytes (level {level})")
    return EncodedDocument(data=data, original_size=len(raw), compressed_size=len(data))


def decode(data: bytes) -> DecodedDocument:
    """
    Decode container or legacy plain-text bytes into document text.

    Args:
        data: Complete file content.

    Returns:
        DecodedDocument: Text and whether the compressed path was taken.

    Raises:
        DecompressionError: If the payload after the magic bytes is corrupt,
            truncated, or does not inflate to valid UTF-8.
        EncodingError: If plain-text input is not valid UTF-8.
    """
    if is_container(data):
        return DecodedDocument(text=_inflate(data[MAGIC_LENGTH:]), was_compressed=True)

    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(str(e), position=e.start) from e
    return DecodedDocument(text=text, was_compressed=False)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _inflate(payload: bytes) -> str:
    """Decompress the first gzip member of `payload` and decode it as UTF-8."""
    # An empty payload would otherwise surface as a bare truncation
    if not payload:
        raise DecompressionError("empty compressed stream")

    inflater = zlib.decompressobj(wbits=GZIP_WBITS)
    try:
        raw = inflater.decompress(payload)
    except zlib.error as e:
        # Bad header, corrupt deflate data or a CRC/ISIZE mismatch
        raise DecompressionError(str(e)) from e

    if not inflater.eof:
        raise DecompressionError("compressed stream ended before the gzip trailer")
    if inflater.unused_data:
        logger.debug(f"Ignoring {len(inflater.unused_data)} bytes after the gzip member")

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecompressionError(f"payload is not valid UTF-8: {e}") from e
